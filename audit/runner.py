"""Single-probe execution with fault isolation."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import inspect
import time

from core.logging import logger as LOGGER
from audit.classifier import classify, clean_error_text, exception_text
from audit.models import ErrorCategory, FailureDetail, Outcome, OutcomeKind, Probe
from audit.namespace import Namespace
from audit.store import ResultStore, RunCounters


ProgressSink = Callable[[str], None]


def format_progress(outcome: Outcome, missing_aliases: list[str]) -> str:
    """Return the live progress line for a settled probe."""

    if outcome.kind is OutcomeKind.SUCCESS:
        line = f"✅ {outcome.name}"
        if outcome.message:
            line += f" • {outcome.message}"
    elif outcome.kind is OutcomeKind.FAILURE:
        line = f"⛔ {outcome.name} - {outcome.error}"
    else:
        line = f"⏺️ {outcome.name}"
    if missing_aliases:
        line += f" ⚠️ Missing aliases: {', '.join(missing_aliases)}"
    return line


class ProbeRunner:
    """Run probes against a namespace and record what happened."""

    def __init__(
        self,
        namespace: Namespace,
        store: ResultStore,
        counters: RunCounters,
        emit: ProgressSink | None = None,
    ) -> None:
        self._namespace = namespace
        self._store = store
        self._counters = counters
        self._emit = emit

    async def run(self, probe: Probe) -> Outcome:
        """Execute ``probe`` and settle it exactly once.

        The outcome is recorded and counted even if this coroutine is
        cancelled while the body is suspended.
        """

        started = time.perf_counter()
        outcome: Outcome | None = None
        try:
            outcome = await self._evaluate(probe, started)
        finally:
            if outcome is None:
                outcome = Outcome.failure(probe.name, "Probe cancelled", ErrorCategory.RUNTIME_ERROR)
                self._record_failure(probe.name, outcome, started)
            self._store.record(outcome)
            missing_aliases = self._check_aliases(probe, started)
            self._counters.settle(outcome.kind)
            self._report(outcome, missing_aliases)
        return outcome

    async def _evaluate(self, probe: Probe, started: float) -> Outcome:
        if probe.body is None:
            return Outcome.missing(probe.name)

        if not self._namespace.exists(probe.name):
            outcome = Outcome.failure(
                probe.name,
                f"Function '{probe.name}' does not exist in global environment",
                ErrorCategory.MISSING_FUNCTION,
            )
            self._record_failure(probe.name, outcome, started)
            return outcome

        try:
            message = await _invoke(probe.body)
        except (Exception, SystemExit) as exc:  # noqa: BLE001 - one probe must not stop the run
            error = clean_error_text(exception_text(exc))
            outcome = Outcome.failure(probe.name, error, classify(error))
            self._record_failure(probe.name, outcome, started)
            return outcome

        return Outcome.success(probe.name, "" if message is None else str(message))

    def _record_failure(self, name: str, outcome: Outcome, started: float) -> None:
        elapsed = time.perf_counter() - started
        self._store.record_detail(
            name,
            FailureDetail(error=outcome.error, category=outcome.category, elapsed_s=elapsed),
        )
        LOGGER.debug(
            "Probe %s failed after %.3fs [%s]: %s",
            name,
            elapsed,
            outcome.category.value,
            outcome.error,
        )

    def _check_aliases(self, probe: Probe, started: float) -> list[str]:
        missing = [alias for alias in probe.aliases if not self._namespace.exists(alias)]
        if missing:
            self._store.record_alias_gap()
            self._store.record_detail(
                probe.name,
                FailureDetail(
                    error=f"Missing aliases: {', '.join(missing)}",
                    category=ErrorCategory.MISSING_ALIASES,
                    elapsed_s=time.perf_counter() - started,
                ),
            )
        return missing

    def _report(self, outcome: Outcome, missing_aliases: list[str]) -> None:
        if self._emit is None:
            return
        try:
            self._emit(format_progress(outcome, missing_aliases))
        except Exception:  # noqa: BLE001 - output trouble must not break settlement
            LOGGER.exception("Progress output failed for %s", outcome.name)


async def _invoke(body) -> object:
    if inspect.iscoroutinefunction(body):
        return await body()
    result = await asyncio.to_thread(body)
    if inspect.isawaitable(result):
        return await result
    return result
