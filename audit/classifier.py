"""Failure text cleaning and categorization."""

from __future__ import annotations

from core.logging import logger as LOGGER
from audit.models import ErrorCategory


TRACE_MARKERS = ("stack traceback:", "Traceback (most recent call last):")

# Ordered: a message may match several rules and the first one wins.
_RULES: tuple[tuple[ErrorCategory, tuple[str, ...], bool], ...] = (
    (ErrorCategory.FUNCTION_NOT_AVAILABLE, ("attempt to index", "nil"), True),
    (ErrorCategory.PERMISSION_ERROR, ("permission", "security", "access denied"), False),
    (ErrorCategory.FUNCTION_NOT_FOUND, ("not found", "does not exist"), False),
    (ErrorCategory.ARGUMENT_ERROR, ("invalid", "bad argument"), False),
    (ErrorCategory.TYPE_MISMATCH, ("expected", "got"), True),
    (ErrorCategory.UNSUPPORTED_FEATURE, ("not supported", "unsupported"), False),
    (ErrorCategory.TIMEOUT, ("timeout", "timed out"), False),
    (ErrorCategory.NETWORK_ERROR, ("connection", "network"), False),
)


def classify(message: str) -> ErrorCategory:
    """Map a failure message to an error category."""

    lowered = (message or "").lower()
    for category, needles, require_all in _RULES:
        matches = (needle in lowered for needle in needles)
        if all(matches) if require_all else any(matches):
            return category
    return ErrorCategory.RUNTIME_ERROR


def exception_text(exc: BaseException) -> str:
    """Return the human-readable text carried by an exception."""

    text = str(exc)
    return text if text else type(exc).__name__


def clean_error_text(text: str) -> str:
    """Strip trace output and a ``file:line:`` prefix from failure text.

    Only the part after the last colon is kept, so messages that
    legitimately contain colons (URLs, timestamps) lose their head.
    Returns ``text`` unchanged if cleaning itself fails.
    """

    try:
        cleaned = text
        for marker in TRACE_MARKERS:
            index = cleaned.find(marker)
            if index != -1:
                cleaned = cleaned[:index]
        cleaned = cleaned.rstrip()
        if ":" in cleaned:
            tail = cleaned.rsplit(":", 1)[1]
            if tail:
                cleaned = tail
        return cleaned.strip()
    except Exception:  # noqa: BLE001 - fall back to the raw text
        LOGGER.debug("Could not clean failure text %r", text)
        return text
