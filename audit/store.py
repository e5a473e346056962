"""Shared accumulators for a concurrent audit run."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import threading

from audit.models import FailureDetail, Outcome, OutcomeKind, StoreSnapshot


class ResultStore:
    """Append-only, thread-safe store of probe outcomes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._successes: list[Outcome] = []
        self._failures: list[Outcome] = []
        self._missing: list[Outcome] = []
        self._details: dict[str, FailureDetail] = {}
        self._undefined = 0

    def record(self, outcome: Outcome) -> None:
        if outcome.kind is OutcomeKind.SUCCESS:
            self.record_success(outcome)
        elif outcome.kind is OutcomeKind.FAILURE:
            self.record_failure(outcome)
        else:
            self.record_missing(outcome)

    def record_success(self, outcome: Outcome) -> None:
        with self._lock:
            self._successes.append(outcome)

    def record_failure(self, outcome: Outcome) -> None:
        with self._lock:
            self._failures.append(outcome)

    def record_missing(self, outcome: Outcome) -> None:
        with self._lock:
            self._missing.append(outcome)

    def record_detail(self, name: str, detail: FailureDetail, overwrite: bool = False) -> bool:
        """Store ``detail`` for ``name``; without ``overwrite`` the first write wins.

        Returns True when ``detail`` is the value now stored.
        """

        if overwrite:
            self._details[name] = detail
            return True
        return self._details.setdefault(name, detail) is detail

    def record_alias_gap(self) -> None:
        with self._lock:
            self._undefined += 1

    def detail_for(self, name: str) -> FailureDetail | None:
        return self._details.get(name)

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                successes=tuple(self._successes),
                failures=tuple(self._failures),
                missing=tuple(self._missing),
                details=dict(self._details),
                passes=len(self._successes),
                fails=len(self._failures),
                undefined=self._undefined,
            )


@dataclass(frozen=True)
class CounterValues:
    """Point-in-time copy of the run counters."""

    passes: int
    fails: int
    untested: int
    in_flight: int


class RunCounters:
    """Pass/fail/in-flight counters with a one-shot completion signal.

    ``start`` must be called for every probe before any of them settles;
    the completion event is set the first time ``in_flight`` returns to zero.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._passes = 0
        self._fails = 0
        self._untested = 0
        self._in_flight = 0
        self._completed = False
        self._settled: asyncio.Event | None = None

    def start(self, count: int = 1) -> None:
        with self._lock:
            if self._completed:
                raise RuntimeError("Run already completed; counters are read-only")
            self._in_flight += count

    def settle(self, kind: OutcomeKind) -> bool:
        """Record one settled probe; return True if it completed the run."""

        with self._lock:
            if self._in_flight <= 0:
                raise RuntimeError("settle() called with no probe in flight")
            if kind is OutcomeKind.SUCCESS:
                self._passes += 1
            elif kind is OutcomeKind.FAILURE:
                self._fails += 1
            else:
                self._untested += 1
            self._in_flight -= 1
            finished = self._in_flight == 0
            if finished:
                self._completed = True
        if finished:
            self._event().set()
        return finished

    def mark_empty_run(self) -> None:
        """Complete a run that never had anything in flight."""

        with self._lock:
            if self._in_flight:
                return
            self._completed = True
        self._event().set()

    @property
    def completed(self) -> bool:
        with self._lock:
            return self._completed

    def values(self) -> CounterValues:
        with self._lock:
            return CounterValues(
                passes=self._passes,
                fails=self._fails,
                untested=self._untested,
                in_flight=self._in_flight,
            )

    async def wait_settled(self) -> None:
        await self._event().wait()

    def _event(self) -> asyncio.Event:
        if self._settled is None:
            self._settled = asyncio.Event()
        return self._settled
