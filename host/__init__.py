"""Reference executor environment implemented in Python.

Only a subset of the usual executor globals is provided, so an audit of
this host reports a mix of available, partial and unusable capabilities.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from host import crypt, misc
from host.filesystem import Workspace


def build_environment(settings: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the global table a probe catalog is audited against."""

    settings = settings or {}
    workspace = Workspace(Path(settings.get("workspace_dir", "workspace")))
    workspace.root.mkdir(parents=True, exist_ok=True)

    genv: dict[str, Any] = {}
    renv: dict[str, Any] = {"print": print, "type": type}
    request = misc.make_request(float(settings.get("request_timeout_s", 10.0)))

    env: dict[str, Any] = {
        "crypt": crypt.build_table(),
        "identifyexecutor": misc.identifyexecutor,
        "getexecutorname": misc.identifyexecutor,
        "getgenv": lambda: genv,
        "getrenv": lambda: renv,
        "request": request,
        "http_request": request,
        **workspace.bindings(),
    }
    genv.update(env)
    return env
