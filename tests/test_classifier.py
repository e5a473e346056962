"""Tests for failure text cleaning and categorization."""

from __future__ import annotations

import pytest

from audit.classifier import classify, clean_error_text, exception_text
from audit.models import ErrorCategory


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("attempt to index nil with 'Name'", ErrorCategory.FUNCTION_NOT_AVAILABLE),
        ("PERMISSION denied for script", ErrorCategory.PERMISSION_ERROR),
        ("blocked by security policy", ErrorCategory.PERMISSION_ERROR),
        ("file does not exist", ErrorCategory.FUNCTION_NOT_FOUND),
        ("module not found", ErrorCategory.FUNCTION_NOT_FOUND),
        ("invalid key size", ErrorCategory.ARGUMENT_ERROR),
        ("bad argument #1 to 'hash'", ErrorCategory.ARGUMENT_ERROR),
        ("expected string, got nil", ErrorCategory.TYPE_MISMATCH),
        ("mode not supported", ErrorCategory.UNSUPPORTED_FEATURE),
        ("unsupported hash algorithm", ErrorCategory.UNSUPPORTED_FEATURE),
        ("operation timed out", ErrorCategory.TIMEOUT),
        ("request timeout", ErrorCategory.TIMEOUT),
        ("Connection refused", ErrorCategory.NETWORK_ERROR),
        ("network unreachable", ErrorCategory.NETWORK_ERROR),
        ("Should have at least 2 constants", ErrorCategory.RUNTIME_ERROR),
        ("", ErrorCategory.RUNTIME_ERROR),
    ],
)
def test_classify(message: str, expected: ErrorCategory) -> None:
    assert classify(message) is expected


def test_classify_priority_order() -> None:
    """Earlier rules win when a message matches several."""

    assert classify("access denied: not found") is ErrorCategory.PERMISSION_ERROR
    assert classify("attempt to index nil: permission") is ErrorCategory.FUNCTION_NOT_AVAILABLE
    assert classify("invalid response, expected 200 got 500") is ErrorCategory.ARGUMENT_ERROR
    assert classify("network timed out") is ErrorCategory.TIMEOUT


def test_attempt_to_index_without_nil_is_not_function_not_available() -> None:
    assert classify("attempt to index number") is ErrorCategory.RUNTIME_ERROR


def test_clean_strips_location_prefix() -> None:
    assert clean_error_text("module.lua:42: bad argument #1 to 'bar'") == "bad argument #1 to 'bar'"


def test_clean_strips_lua_and_python_traces() -> None:
    lua = "boom happened\nstack traceback:\n  [C]: in function 'error'"
    python = "kaboom\nTraceback (most recent call last):\n  File \"x.py\", line 1"

    assert clean_error_text(lua) == "boom happened"
    assert clean_error_text(python) == "kaboom"


def test_clean_keeps_text_after_last_colon() -> None:
    assert clean_error_text("fetch https://example.com/x failed") == "//example.com/x failed"
    assert clean_error_text("a: b: c") == "c"


def test_clean_keeps_text_ending_in_colon() -> None:
    assert clean_error_text("weird:") == "weird:"


def test_clean_trims_whitespace() -> None:
    assert clean_error_text("   spaced out   ") == "spaced out"
    assert clean_error_text("") == ""


def test_clean_passes_through_uncleanable_input() -> None:
    assert clean_error_text(42) == 42  # type: ignore[arg-type]


def test_exception_text_falls_back_to_class_name() -> None:
    assert exception_text(AssertionError()) == "AssertionError"
    assert exception_text(ValueError("bad value")) == "bad value"
