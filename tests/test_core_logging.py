"""Tests for the audit logger."""

from __future__ import annotations

import logging

from core import logging as core_logging


def test_file_logging_captures_records(tmp_path) -> None:
    log_path = tmp_path / "logs" / "audit.log"
    core_logging.enable_file_logging(log_path)
    try:
        core_logging.log_warning("probe fell over")
    finally:
        core_logging.disable_file_logging()

    assert "probe fell over" in log_path.read_text(encoding="utf-8")


def test_set_level_accepts_names() -> None:
    try:
        core_logging.set_level("debug")
        assert core_logging.logger.level == logging.DEBUG
        core_logging.set_level("not-a-level")
        assert core_logging.logger.level == logging.DEBUG
    finally:
        core_logging.set_level(logging.INFO)


def test_log_records_stay_off_stdout(capsys) -> None:
    core_logging.log_info("launched 3 checks")
    core_logging.print_line("✅ readfile")

    out, err = capsys.readouterr()
    assert out == "✅ readfile\n"
    assert "launched 3 checks" in err


def test_reenabling_file_logging_switches_files(tmp_path) -> None:
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"
    core_logging.enable_file_logging(first)
    try:
        core_logging.log_warning("to first")
        core_logging.enable_file_logging(second)
        core_logging.log_warning("to second")
    finally:
        core_logging.disable_file_logging()

    assert "to second" not in first.read_text(encoding="utf-8")
    assert "to second" in second.read_text(encoding="utf-8")
