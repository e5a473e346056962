"""Probes for workspace file functions.

Every probe works under its own ``.tests/<name>`` folder so the probes
can run concurrently without stepping on each other.
"""

from __future__ import annotations

from typing import Any, Mapping

from audit.namespace import Namespace
from audit.suite import ProbeSuite
from catalog import check, raises


ROOT = ".tests"


def register(suite: ProbeSuite, env: Namespace, settings: Mapping[str, Any]) -> None:
    def fs(name: str):
        return env.resolve(name)

    def scratch(probe_name: str) -> str:
        folder = f"{ROOT}/{probe_name}"
        if fs("isfolder")(folder):
            fs("delfolder")(folder)
        fs("makefolder")(folder)
        return folder

    @suite.check("readfile")
    def readfile() -> str:
        base = scratch("readfile")
        content = "line1\nline2\r\nline3"
        fs("writefile")(f"{base}/readfile.txt", content)
        check(fs("readfile")(f"{base}/readfile.txt") == content, "readfile should return exact content")
        binary = "\0\1\2\3"
        fs("writefile")(f"{base}/binary.bin", binary)
        check(fs("readfile")(f"{base}/binary.bin") == binary, "Binary read failed")
        check(raises(fs("readfile"), f"{base}/nonexistent.txt"), "readfile on nonexistent should error")
        fs("makefolder")(f"{base}/folder")
        check(raises(fs("readfile"), f"{base}/folder"), "readfile on folder should error")
        return "readfile extreme"

    @suite.check("listfiles")
    def listfiles() -> str:
        base = scratch("listfiles")
        fs("writefile")(f"{base}/a.txt", "a")
        fs("writefile")(f"{base}/b.txt", "b")
        fs("makefolder")(f"{base}/sub")
        fs("writefile")(f"{base}/sub/c.txt", "c")
        files = fs("listfiles")(base)
        check(len(files) >= 3, "Should list at least 3 items")
        has_file = any(fs("isfile")(path) for path in files)
        has_folder = any(fs("isfolder")(path) for path in files)
        check(has_file and has_folder, "listfiles should include both files and folders")
        fs("makefolder")(f"{base}/empty")
        check(len(fs("listfiles")(f"{base}/empty")) == 0, "Empty folder should return empty list")
        return "listfiles extreme"

    @suite.check("writefile")
    def writefile() -> str:
        base = scratch("writefile")
        write, read = fs("writefile"), fs("readfile")
        write(f"{base}/writefile.txt", "hello")
        check(read(f"{base}/writefile.txt") == "hello", "Write text")
        write(f"{base}/writefile.txt", "world")
        check(read(f"{base}/writefile.txt") == "world", "Overwrite")
        write(f"{base}/empty.txt", "")
        check(read(f"{base}/empty.txt") == "", "Empty write")
        return "writefile extreme"

    @suite.check("makefolder")
    def makefolder() -> str:
        base = scratch("makefolder")
        fs("makefolder")(f"{base}/a/b/c")
        check(fs("isfolder")(f"{base}/a/b/c"), "Nested folder should exist")
        fs("makefolder")(f"{base}/a")
        check(fs("isfolder")(f"{base}/a"), "Existing folder should survive makefolder")
        return "makefolder extreme"

    @suite.check("appendfile")
    def appendfile() -> str:
        base = scratch("appendfile")
        path = f"{base}/append.txt"
        fs("writefile")(path, "start")
        fs("appendfile")(path, "-middle")
        fs("appendfile")(path, "-end")
        check(fs("readfile")(path) == "start-middle-end", "Append should concatenate")
        fs("appendfile")(f"{base}/new.txt", "fresh")
        check(fs("readfile")(f"{base}/new.txt") == "fresh", "Append should create missing files")
        return "appendfile extreme"

    @suite.check("isfile")
    def isfile() -> str:
        base = scratch("isfile")
        fs("writefile")(f"{base}/file.txt", "x")
        check(fs("isfile")(f"{base}/file.txt") is True, "File should be detected")
        check(fs("isfile")(base) is False, "Folder is not a file")
        check(fs("isfile")(f"{base}/missing.txt") is False, "Missing path is not a file")
        return "isfile extreme"

    @suite.check("isfolder")
    def isfolder() -> str:
        base = scratch("isfolder")
        fs("writefile")(f"{base}/file.txt", "x")
        check(fs("isfolder")(base) is True, "Folder should be detected")
        check(fs("isfolder")(f"{base}/file.txt") is False, "File is not a folder")
        check(fs("isfolder")(f"{base}/missing") is False, "Missing path is not a folder")
        return "isfolder extreme"

    @suite.check("delfolder")
    def delfolder() -> str:
        base = scratch("delfolder")
        fs("makefolder")(f"{base}/doomed/inner")
        fs("writefile")(f"{base}/doomed/inner/file.txt", "x")
        fs("delfolder")(f"{base}/doomed")
        check(not fs("isfolder")(f"{base}/doomed"), "Folder should be removed recursively")
        check(raises(fs("delfolder"), f"{base}/doomed"), "Deleting a missing folder should error")
        return "delfolder extreme"

    @suite.check("delfile")
    def delfile() -> str:
        base = scratch("delfile")
        fs("writefile")(f"{base}/file.txt", "x")
        fs("delfile")(f"{base}/file.txt")
        check(not fs("isfile")(f"{base}/file.txt"), "File should be removed")
        check(raises(fs("delfile"), f"{base}/file.txt"), "Deleting a missing file should error")
        return "delfile extreme"
