"""Tests for probe registration."""

from __future__ import annotations

import pytest

from audit.suite import ProbeSuite


def test_decorator_registers_probe_with_aliases() -> None:
    suite = ProbeSuite()

    @suite.check("crypt.hash", "hash")
    def probe() -> str:
        return "ok"

    registered = suite.probes[0]
    assert registered.name == "crypt.hash"
    assert registered.aliases == ("hash",)
    assert registered.body is probe
    assert "crypt.hash" in suite


def test_registration_order_is_kept() -> None:
    suite = ProbeSuite()
    suite.add("b")
    suite.untested("a", "alias")
    suite.add("c", ["c2"], lambda: None)

    assert [probe.name for probe in suite] == ["b", "a", "c"]
    assert suite.probes[1].body is None
    assert len(suite) == 3


def test_duplicate_and_empty_names_rejected() -> None:
    suite = ProbeSuite()
    suite.add("readfile")

    with pytest.raises(ValueError):
        suite.add("readfile")
    with pytest.raises(ValueError):
        suite.add("")
