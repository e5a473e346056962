"""Dotted-path lookups over a host namespace snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from types import ModuleType
from typing import Any


_MISSING = object()


class Namespace:
    """Read-only view of a host environment.

    Each segment of a dotted path is looked up as a key when the current
    value is a mapping and as an attribute otherwise. A value bound to
    ``None`` counts as absent.
    """

    def __init__(self, root: Any) -> None:
        self._root = root

    @classmethod
    def from_module(cls, module: ModuleType) -> "Namespace":
        return cls(dict(vars(module)))

    @property
    def root(self) -> Any:
        return self._root

    def resolve(self, path: str) -> Any | None:
        """Return the value bound at ``path`` or ``None`` if any step is absent."""

        value = self._root
        if not path:
            return value
        for segment in path.split("."):
            if not segment:
                return None
            value = _lookup(value, segment)
            if value is _MISSING or value is None:
                return None
        return value

    def exists(self, path: str) -> bool:
        return self.resolve(path) is not None

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.exists(path)


def _lookup(container: Any, name: str) -> Any:
    if isinstance(container, Mapping):
        try:
            return container.get(name, _MISSING)
        except Exception:  # noqa: BLE001 - host mappings may misbehave
            return _MISSING
    try:
        return getattr(container, name, _MISSING)
    except Exception:  # noqa: BLE001 - host properties may raise
        return _MISSING
