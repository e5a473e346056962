"""Command-line entry point for running a capability audit."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Iterable
import importlib
import json
from pathlib import Path
from typing import Any

from config import ConfigController
from core import logging as core_logging
from core.logging import log_error, log_info, log_warning, print_line
from audit.models import Probe
from audit.namespace import Namespace
from audit.report import Report, ReportBuilder, render_header
from audit.runner import ProbeRunner, ProgressSink
from audit.scheduler import Scheduler
from audit.store import ResultStore, RunCounters
from audit.suite import ProbeSuite
from catalog import load_catalogs


async def run_audit(
    probes: Iterable[Probe],
    namespace: Namespace,
    *,
    emit: ProgressSink | None = None,
    max_successes_shown: int = 10,
) -> Report:
    """Run every probe concurrently and build the final report."""

    store = ResultStore()
    counters = RunCounters()
    runner = ProbeRunner(namespace, store, counters, emit=emit)
    scheduler = Scheduler(runner, counters)
    scheduler.register_and_run_all(probes)
    try:
        await scheduler.await_completion()
    except asyncio.CancelledError:
        await scheduler.cancel()
        raise
    return ReportBuilder(max_successes_shown).build(store.snapshot())


def load_namespace(host_module: str, settings: dict[str, Any]) -> Namespace:
    """Import ``host_module`` and wrap its environment.

    A module exposing ``build_environment(settings)`` provides the table
    itself; any other module is audited through its globals.
    """

    module = importlib.import_module(host_module)
    build_environment = getattr(module, "build_environment", None)
    if callable(build_environment):
        return Namespace(build_environment(settings))
    return Namespace.from_module(module)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(description="Audit executor capabilities.")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and an optional override.yaml.",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Importable module providing the environment to audit.",
    )
    parser.add_argument(
        "--catalog",
        action="append",
        default=None,
        help="Catalog module to load (repeatable). Defaults to the configured list.",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Workspace directory for file probes.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the tiered results as JSON instead of the text report.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the audit and return an exit code."""

    args = parse_args(argv)

    try:
        controller = ConfigController.get_instance(config_dir=args.config_dir)
    except (OSError, ValueError) as exc:
        log_error(f"Could not load configuration: {exc}")
        return 2

    audit_cfg = controller.get_section("audit")
    report_cfg = controller.get_section("report")
    logging_cfg = controller.get_section("logging")

    core_logging.set_level(logging_cfg["level"])
    log_file = args.log_file or (Path(logging_cfg["file"]) if logging_cfg["file"] else None)
    if log_file is not None:
        core_logging.enable_file_logging(log_file)

    if args.workspace is not None:
        audit_cfg["workspace_dir"] = str(args.workspace)
    host_module = args.host or audit_cfg["host_module"]
    catalogs = args.catalog or audit_cfg["catalogs"]

    try:
        namespace = load_namespace(host_module, audit_cfg)
        suite = load_catalogs(ProbeSuite(), namespace, catalogs, audit_cfg)
    except (ImportError, AttributeError, ValueError, OSError) as exc:
        log_error(f"Could not prepare audit: {exc}")
        return 2

    log_info(f"Auditing host {host_module!r} with {len(suite)} probes")

    emit = None if args.json else print_line
    if not args.json:
        for line in render_header(audit_cfg["title"], audit_cfg["subtitle"]):
            print_line(line)

    try:
        report = asyncio.run(
            run_audit(
                suite,
                namespace,
                emit=emit,
                max_successes_shown=report_cfg["max_successes_shown"],
            )
        )
    except KeyboardInterrupt:
        log_warning("Audit interrupted before every probe settled")
        return 130

    if args.json:
        print_line(json.dumps(report.as_dict(), indent=2, ensure_ascii=False))
    else:
        for line in report.lines:
            print_line(line)

    return 1 if report.fails else 0


if __name__ == "__main__":
    raise SystemExit(main())
