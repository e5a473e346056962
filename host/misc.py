"""Identification, environment tables and HTTP bindings."""

from __future__ import annotations

import json
from typing import Any, Mapping
import urllib.error
import urllib.request


EXECUTOR_NAME = "PyHost"
EXECUTOR_VERSION = "0.1.0"


def identifyexecutor() -> tuple[str, str]:
    return EXECUTOR_NAME, EXECUTOR_VERSION


def make_request(timeout_s: float):
    """Return a ``request`` binding using the given socket timeout."""

    def request(options: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(options, Mapping):
            raise TypeError(f"bad argument #1 to 'request' (table expected, got {type(options).__name__})")
        url = options.get("Url")
        if not url:
            raise ValueError("invalid request: Url is required")
        method = str(options.get("Method", "GET")).upper()
        headers = dict(options.get("Headers") or {})
        body = options.get("Body")
        data = None
        if body is not None:
            data = body.encode("utf-8") if isinstance(body, str) else json.dumps(body).encode("utf-8")

        req = urllib.request.Request(url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=timeout_s) as response:
                status = response.status
                response_headers = dict(response.headers.items())
                payload = response.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as exc:
            status = exc.code
            response_headers = dict(exc.headers.items()) if exc.headers else {}
            payload = exc.read().decode("utf-8", errors="replace")
        except urllib.error.URLError as exc:
            raise ConnectionError(f"network request failed ({exc.reason})") from exc

        return {
            "Success": 200 <= status < 300,
            "StatusCode": status,
            "StatusMessage": "",
            "Headers": response_headers,
            "Body": payload,
        }

    return request
