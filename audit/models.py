"""Models for probes, outcomes and failure details."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Union


ProbeBody = Callable[[], Union[str, None, Awaitable[Union[str, None]]]]


class ErrorCategory(str, Enum):
    """Closed set of failure categories."""

    MISSING_FUNCTION = "MissingFunction"
    TEST_FAILURE = "TestFailure"
    MISSING_ALIASES = "MissingAliases"
    FUNCTION_NOT_AVAILABLE = "FunctionNotAvailable"
    PERMISSION_ERROR = "PermissionError"
    FUNCTION_NOT_FOUND = "FunctionNotFound"
    ARGUMENT_ERROR = "ArgumentError"
    TYPE_MISMATCH = "TypeMismatch"
    UNSUPPORTED_FEATURE = "UnsupportedFeature"
    TIMEOUT = "Timeout"
    NETWORK_ERROR = "NetworkError"
    RUNTIME_ERROR = "RuntimeError"


class OutcomeKind(str, Enum):
    """Variant tag for a probe outcome."""

    SUCCESS = "success"
    FAILURE = "failure"
    MISSING = "missing"


class ReportTier(str, Enum):
    """Audience-facing classification used by the final report."""

    AVAILABLE = "available"
    PROBLEMATIC = "problematic"
    UNUSABLE = "unusable"
    UNTESTED = "untested"


@dataclass(frozen=True)
class Probe:
    """One registered capability check."""

    name: str
    aliases: tuple[str, ...] = ()
    body: ProbeBody | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.aliases, tuple):
            object.__setattr__(self, "aliases", tuple(self.aliases))


@dataclass(frozen=True)
class Outcome:
    """Settled result of a single probe."""

    name: str
    kind: OutcomeKind
    message: str = ""
    error: str = ""
    category: ErrorCategory | None = None

    @classmethod
    def success(cls, name: str, message: str = "") -> "Outcome":
        return cls(name=name, kind=OutcomeKind.SUCCESS, message=message)

    @classmethod
    def failure(cls, name: str, error: str, category: ErrorCategory) -> "Outcome":
        return cls(name=name, kind=OutcomeKind.FAILURE, error=error, category=category)

    @classmethod
    def missing(cls, name: str) -> "Outcome":
        return cls(name=name, kind=OutcomeKind.MISSING)


@dataclass(frozen=True)
class FailureDetail:
    """Diagnostic recorded for a failed probe or an alias gap."""

    error: str
    category: ErrorCategory
    elapsed_s: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "category": self.category.value,
            "elapsed_s": round(self.elapsed_s, 6),
        }


@dataclass(frozen=True)
class StoreSnapshot:
    """Consistent copy of everything the result store holds."""

    successes: tuple[Outcome, ...] = ()
    failures: tuple[Outcome, ...] = ()
    missing: tuple[Outcome, ...] = ()
    details: dict[str, FailureDetail] = field(default_factory=dict)
    passes: int = 0
    fails: int = 0
    undefined: int = 0
