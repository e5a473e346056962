"""Workspace-sandboxed file bindings."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
import shutil


class Workspace:
    """File operations confined to a single root directory.

    Paths use forward slashes and are relative to the root. Any path that
    would leave the root is rejected with ``PermissionError``.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        if not isinstance(path, str):
            raise TypeError(f"bad argument #1 (string expected, got {type(path).__name__})")
        target = (self.root / PurePosixPath(path)).resolve()
        if target != self.root and self.root not in target.parents:
            raise PermissionError(f"access denied: {path} is outside the workspace")
        return target

    def _relative(self, target: Path) -> str:
        return target.relative_to(self.root).as_posix()

    def readfile(self, path: str) -> str:
        target = self._resolve(path)
        if target.is_dir():
            raise IsADirectoryError(f"cannot read folder {path}")
        if not target.exists():
            raise FileNotFoundError(f"file not found: {path}")
        return target.read_bytes().decode("utf-8", errors="surrogateescape")

    def writefile(self, path: str, content: str | bytes) -> None:
        target = self._resolve(path)
        if target.is_dir():
            raise IsADirectoryError(f"cannot write over folder {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(_encode(content))

    def appendfile(self, path: str, content: str | bytes) -> None:
        target = self._resolve(path)
        if target.is_dir():
            raise IsADirectoryError(f"cannot append to folder {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("ab") as handle:
            handle.write(_encode(content))

    def listfiles(self, path: str) -> list[str]:
        target = self._resolve(path)
        if not target.is_dir():
            raise NotADirectoryError(f"folder not found: {path}")
        return sorted(self._relative(child) for child in target.iterdir())

    def isfile(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def isfolder(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def makefolder(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_file():
            raise FileExistsError(f"a file already exists at {path}")
        target.mkdir(parents=True, exist_ok=True)

    def delfile(self, path: str) -> None:
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"file not found: {path}")
        target.unlink()

    def delfolder(self, path: str) -> None:
        target = self._resolve(path)
        if target == self.root:
            raise PermissionError("access denied: cannot delete the workspace root")
        if not target.is_dir():
            raise FileNotFoundError(f"folder not found: {path}")
        shutil.rmtree(target)

    def bindings(self) -> dict[str, object]:
        return {
            "readfile": self.readfile,
            "writefile": self.writefile,
            "appendfile": self.appendfile,
            "listfiles": self.listfiles,
            "isfile": self.isfile,
            "isfolder": self.isfolder,
            "makefolder": self.makefolder,
            "delfile": self.delfile,
            "delfolder": self.delfolder,
        }


def _encode(content: str | bytes) -> bytes:
    if isinstance(content, bytes):
        return content
    if isinstance(content, str):
        return content.encode("utf-8", errors="surrogateescape")
    raise TypeError(f"bad argument #2 (string expected, got {type(content).__name__})")
