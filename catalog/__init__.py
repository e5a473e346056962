"""Probe catalogs grouped by capability area.

Each catalog module exposes ``register(suite, env, settings)`` which adds
its probes to ``suite``. Probe bodies look host functions up through
``env`` when they run, never at registration time.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterable
from typing import Any, Mapping

from audit.namespace import Namespace
from audit.suite import ProbeSuite


BUILTIN_CATALOGS = ("catalog.crypt", "catalog.filesystem", "catalog.misc")


def raises(func: Callable[..., Any], *args: Any) -> bool:
    """Return True if calling ``func`` raised any exception."""

    try:
        func(*args)
    except Exception:  # noqa: BLE001 - probes only care that it failed
        return True
    return False


def check(condition: Any, message: str) -> None:
    """Fail the running probe with ``message`` unless ``condition`` holds."""

    if not condition:
        raise AssertionError(message)


def load_catalogs(
    suite: ProbeSuite,
    env: Namespace,
    module_names: Iterable[str] = BUILTIN_CATALOGS,
    settings: Mapping[str, Any] | None = None,
) -> ProbeSuite:
    """Import each catalog module and let it register its probes."""

    settings = settings or {}
    for module_name in module_names:
        module = importlib.import_module(module_name)
        register = getattr(module, "register", None)
        if not callable(register):
            raise AttributeError(f"Catalog {module_name!r} has no register() function")
        register(suite, env, settings)
    return suite
