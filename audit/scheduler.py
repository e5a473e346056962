"""Concurrent fan-out of probes onto the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from core.logging import logger as LOGGER
from audit.models import Probe
from audit.runner import ProbeRunner
from audit.store import RunCounters


class Scheduler:
    """Launch every probe at once and wait for all of them to settle."""

    def __init__(self, runner: ProbeRunner, counters: RunCounters) -> None:
        self._runner = runner
        self._counters = counters
        self._tasks: list[asyncio.Task] = []
        self._launched = False

    def register_and_run_all(self, probes: Iterable[Probe]) -> int:
        """Start one task per probe; must be called from a running loop.

        Returns the number of probes launched.
        """

        if self._launched:
            raise RuntimeError("Scheduler already launched a batch")
        self._launched = True

        batch = list(probes)
        if not batch:
            self._counters.mark_empty_run()
            LOGGER.info("No probes registered")
            return 0

        self._counters.start(len(batch))
        for probe in batch:
            task = asyncio.create_task(self._runner.run(probe), name=f"probe:{probe.name}")
            task.add_done_callback(self._log_task_error)
            self._tasks.append(task)
        LOGGER.info("Launched %d probes", len(batch))
        return len(batch)

    async def await_completion(self) -> None:
        """Suspend until no probe is in flight."""

        if not self._launched:
            raise RuntimeError("await_completion() called before register_and_run_all()")
        await self._counters.wait_settled()
        values = self._counters.values()
        LOGGER.info(
            "All probes settled: %d passed, %d failed, %d untested",
            values.passes,
            values.fails,
            values.untested,
        )

    async def cancel(self) -> None:
        """Cancel every task that has not settled yet."""

        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    @staticmethod
    def _log_task_error(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            LOGGER.error("Probe task %s crashed: %r", task.get_name(), exc)
