"""Audit the reference host with the bundled catalogs."""

from __future__ import annotations

import asyncio

import pytest

from audit.models import ReportTier
from audit.namespace import Namespace
from audit.run import run_audit
from audit.suite import ProbeSuite
from catalog import check, load_catalogs
from host import build_environment
from host.filesystem import Workspace


def _audit(env: Namespace, catalogs, skip=()):
    suite = load_catalogs(ProbeSuite(), env, catalogs, {})
    probes = [probe for probe in suite if probe.name not in skip]
    return asyncio.run(run_audit(probes, env))


def test_crypt_and_filesystem_catalogs_against_host(tmp_path) -> None:
    env = Namespace(build_environment({"workspace_dir": str(tmp_path / "ws")}))

    report = _audit(env, ["catalog.crypt", "catalog.filesystem"])

    for name in (
        "crypt.generatebytes",
        "crypt.generatekey",
        "crypt.hash",
        "readfile",
        "listfiles",
        "writefile",
        "makefolder",
        "appendfile",
        "isfile",
        "isfolder",
        "delfolder",
        "delfile",
    ):
        assert report.tier_of(name) is ReportTier.AVAILABLE, name
    assert report.tier_of("crypt.base64encode") is ReportTier.PROBLEMATIC
    assert report.tier_of("crypt.base64decode") is ReportTier.PROBLEMATIC
    assert report.tier_of("crypt.encrypt") is ReportTier.UNUSABLE
    assert report.tier_of("crypt.decrypt") is ReportTier.UNUSABLE
    issue = next(entry.issue for entry in report.problematic if entry.name == "crypt.base64encode")
    assert issue == "Missing aliases: base64.encode, base64_encode"
    assert (report.passes, report.fails) == (14, 2)


def test_misc_catalog_against_host(tmp_path) -> None:
    env = Namespace(build_environment({"workspace_dir": str(tmp_path / "ws")}))

    report = _audit(env, ["catalog.misc"], skip={"request"})

    assert report.tier_of("identifyexecutor") is ReportTier.AVAILABLE
    assert report.tier_of("getgenv") is ReportTier.AVAILABLE
    assert report.tier_of("getrenv") is ReportTier.AVAILABLE
    assert report.tier_of("lz4compress") is ReportTier.UNUSABLE
    assert report.tier_of("setclipboard") is ReportTier.UNUSABLE
    assert report.tier_of("messagebox") is ReportTier.UNTESTED
    assert ("identifyexecutor", "Executor: PyHost 0.1.0") in report.successes


def test_request_probe_is_async_and_checks_aliases() -> None:
    def fake_request(options):
        assert options["Method"] == "GET"
        return {"StatusCode": 200, "Body": "{}"}

    env = Namespace({"request": fake_request, "http_request": fake_request})

    report = _audit(
        env,
        ["catalog.misc"],
        skip={
            "identifyexecutor",
            "getgenv",
            "getrenv",
            "lz4compress",
            "lz4decompress",
            "setclipboard",
            "messagebox",
        },
    )

    assert report.tier_of("request") is ReportTier.PROBLEMATIC
    assert report.problematic[0].issue == "Missing aliases: http.request"


def test_failing_host_function_is_classified(tmp_path) -> None:
    env_table = build_environment({"workspace_dir": str(tmp_path / "ws")})

    def broken_hash(data, algorithm):
        raise PermissionError("crypt.lua:10: access denied")

    env_table["crypt"]["hash"] = broken_hash
    env = Namespace(env_table)
    suite = load_catalogs(ProbeSuite(), env, ["catalog.crypt"], {})

    report = asyncio.run(run_audit([p for p in suite if p.name == "crypt.hash"], env))

    entry = report.problematic[0]
    assert entry.issue == "access denied"
    assert entry.category.value == "PermissionError"


def test_workspace_rejects_escaping_paths(tmp_path) -> None:
    workspace = Workspace(tmp_path)

    with pytest.raises(PermissionError):
        workspace.readfile("../outside.txt")
    with pytest.raises(PermissionError):
        workspace.delfolder(".")


def test_load_catalogs_requires_register() -> None:
    with pytest.raises(AttributeError):
        load_catalogs(ProbeSuite(), Namespace({}), ["catalog"], {})


def test_wrong_host_result_fails_the_check(tmp_path) -> None:
    env_table = build_environment({"workspace_dir": str(tmp_path / "ws")})
    env_table["crypt"]["hash"] = lambda data, algorithm: "deadbeef"
    env = Namespace(env_table)
    suite = load_catalogs(ProbeSuite(), env, ["catalog.crypt"], {})

    report = asyncio.run(run_audit([p for p in suite if p.name == "crypt.hash"], env))

    assert report.tier_of("crypt.hash") is ReportTier.PROBLEMATIC
    assert report.problematic[0].issue.endswith("hash mismatch")


def test_check_raises_with_message() -> None:
    check(True, "unused")

    with pytest.raises(AssertionError, match="Name not empty"):
        check("", "Name not empty")
