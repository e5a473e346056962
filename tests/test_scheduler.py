"""Tests for concurrent probe scheduling."""

from __future__ import annotations

import asyncio
import threading

import pytest

from audit.models import OutcomeKind, Probe, ReportTier
from audit.namespace import Namespace
from audit.run import run_audit
from audit.runner import ProbeRunner
from audit.scheduler import Scheduler
from audit.store import ResultStore, RunCounters


def test_suspended_probe_does_not_block_siblings() -> None:
    async def scenario():
        gate = asyncio.Event()

        async def waiter() -> str:
            await gate.wait()
            return "released"

        async def opener() -> str:
            gate.set()
            return "opened"

        probes = [Probe("waiter", (), waiter), Probe("opener", (), opener)]
        env = Namespace({"waiter": 1, "opener": 1})
        return await asyncio.wait_for(run_audit(probes, env), timeout=5)

    report = asyncio.run(scenario())

    assert report.passes == 2
    assert [entry.name for entry in report.available] == ["opener", "waiter"]


def test_blocking_bodies_run_in_parallel() -> None:
    barrier = threading.Barrier(2, timeout=5)

    def meet() -> str:
        barrier.wait()
        return "met"

    probes = [Probe("left", (), meet), Probe("right", (), meet)]
    env = Namespace({"left": 1, "right": 1})

    report = asyncio.run(run_audit(probes, env))

    assert report.passes == 2
    assert report.fails == 0


def test_every_probe_yields_exactly_one_outcome() -> None:
    def fail() -> None:
        raise RuntimeError("broken")

    probes = [Probe(f"ok{i}", (), lambda: "ok") for i in range(20)]
    probes += [Probe(f"bad{i}", (), fail) for i in range(10)]
    probes += [Probe(f"gone{i}", (), lambda: "never") for i in range(5)]
    probes += [Probe(f"todo{i}") for i in range(3)]
    env = {f"ok{i}": 1 for i in range(20)}
    env.update({f"bad{i}": 1 for i in range(10)})
    lines: list[str] = []

    report = asyncio.run(run_audit(probes, Namespace(env), emit=lines.append))

    assert len(lines) == len(probes)
    names = [entry.name for entries in report.tiers().values() for entry in entries]
    assert sorted(names) == sorted(probe.name for probe in probes)
    assert len(report.tiers()[ReportTier.UNUSABLE]) == 5
    assert len(report.tiers()[ReportTier.UNTESTED]) == 3
    assert (report.passes, report.fails) == (20, 15)


def test_empty_batch_completes() -> None:
    report = asyncio.run(asyncio.wait_for(run_audit([], Namespace({})), timeout=1))

    assert report.total == 0
    assert report.pass_rate == 0
    assert "• No test results? Make sure the script runs correctly." in report.lines


def test_scheduler_rejects_misuse() -> None:
    async def scenario() -> None:
        counters = RunCounters()
        scheduler = Scheduler(ProbeRunner(Namespace({}), ResultStore(), counters), counters)
        with pytest.raises(RuntimeError):
            await scheduler.await_completion()
        scheduler.register_and_run_all([])
        with pytest.raises(RuntimeError):
            scheduler.register_and_run_all([])

    asyncio.run(scenario())


def test_cancelled_probe_still_settles() -> None:
    async def scenario():
        store = ResultStore()
        counters = RunCounters()
        scheduler = Scheduler(ProbeRunner(Namespace({"stuck": 1}), store, counters), counters)

        async def forever() -> None:
            await asyncio.Event().wait()

        scheduler.register_and_run_all([Probe("stuck", (), forever)])
        await asyncio.sleep(0)
        await scheduler.cancel()
        await asyncio.wait_for(scheduler.await_completion(), timeout=1)
        return store.snapshot(), counters.values()

    snapshot, values = asyncio.run(scenario())

    assert [o.name for o in snapshot.failures] == ["stuck"]
    assert snapshot.failures[0].kind is OutcomeKind.FAILURE
    assert values.in_flight == 0


def test_exiting_body_does_not_abort_siblings() -> None:
    def quits() -> None:
        raise SystemExit(3)

    env = Namespace({"quits": print, "fine": print})
    probes = [Probe("quits", (), quits), Probe("fine", (), lambda: "ok")]

    report = asyncio.run(asyncio.wait_for(run_audit(probes, env), timeout=5))

    assert report.tier_of("quits") is ReportTier.PROBLEMATIC
    assert report.tier_of("fine") is ReportTier.AVAILABLE
    assert (report.passes, report.fails) == (1, 1)
