"""Probes for identification, environment tables, compression and HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from audit.namespace import Namespace
from audit.suite import ProbeSuite
from catalog import check, raises


def register(suite: ProbeSuite, env: Namespace, settings: Mapping[str, Any]) -> None:
    request_url = str(settings.get("request_url", "https://httpbin.org/get"))
    request_timeout_s = float(settings.get("request_timeout_s", 10.0))

    @suite.check("identifyexecutor", "getexecutorname")
    def identifyexecutor() -> str:
        result = env.resolve("identifyexecutor")()
        if isinstance(result, tuple):
            name, version = (result + (None,))[:2]
        else:
            name, version = result, None
        check(isinstance(name, str), "Name is string")
        check(name, "Name not empty")
        if version is not None:
            check(isinstance(version, str), "Version is string or nil")
        return f"Executor: {name}" + (f" {version}" if version else "")

    @suite.check("getgenv")
    def getgenv() -> str:
        genv = env.resolve("getgenv")()
        check(hasattr(genv, "__setitem__"), "getgenv should return a table")
        genv["__audit_marker"] = 42
        check(env.resolve("getgenv")()["__audit_marker"] == 42, "Globals should persist between calls")
        del genv["__audit_marker"]
        return "getgenv extreme"

    @suite.check("getrenv")
    def getrenv() -> str:
        renv = env.resolve("getrenv")()
        check(hasattr(renv, "get"), "getrenv should return a table")
        check(renv is not env.resolve("getgenv")(), "getrenv should differ from getgenv")
        return "getrenv extreme"

    @suite.check("lz4compress")
    def lz4compress() -> str:
        compress = env.resolve("lz4compress")
        decompress = env.resolve("lz4decompress")
        data = "A" * 1000
        compressed = compress(data)
        check(len(compressed) < len(data), "Compression should reduce size")
        check(decompress(compressed, len(data)) == data, "Decompressed should match")
        check(raises(decompress, "invalid", 10), "Decompress invalid should error")
        return "lz4compress extreme"

    @suite.check("lz4decompress")
    def lz4decompress() -> str:
        compress = env.resolve("lz4compress")
        decompress = env.resolve("lz4decompress")
        data = "Hello, world!"
        check(decompress(compress(data), len(data)) == data, "Decompress works")
        return "lz4decompress extreme"

    @suite.check("setclipboard", "toclipboard")
    def setclipboard() -> str:
        env.resolve("setclipboard")("audit clipboard text")
        return "setclipboard ok"

    @suite.check("request", "http.request", "http_request")
    async def request() -> str:
        send = env.resolve("request")
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(send, {"Url": request_url, "Method": "GET"}),
                timeout=request_timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise TimeoutError(f"request timed out after {request_timeout_s}s") from exc
        check(response["StatusCode"] == 200, f"Unexpected status {response['StatusCode']}")
        check(response["Body"], "Body should not be empty")
        return f"request ok ({response['StatusCode']})"

    # Showing a modal dialog cannot be checked unattended.
    suite.untested("messagebox")
