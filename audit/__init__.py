"""Capability audit harness for executor environments."""

from audit.classifier import classify, clean_error_text
from audit.models import (
    ErrorCategory,
    FailureDetail,
    Outcome,
    OutcomeKind,
    Probe,
    ReportTier,
    StoreSnapshot,
)
from audit.namespace import Namespace
from audit.report import Report, ReportBuilder
from audit.runner import ProbeRunner
from audit.scheduler import Scheduler
from audit.store import ResultStore, RunCounters
from audit.suite import ProbeSuite

__all__ = [
    "ErrorCategory",
    "FailureDetail",
    "Namespace",
    "Outcome",
    "OutcomeKind",
    "Probe",
    "ProbeRunner",
    "ProbeSuite",
    "Report",
    "ReportBuilder",
    "ReportTier",
    "ResultStore",
    "RunCounters",
    "Scheduler",
    "StoreSnapshot",
    "classify",
    "clean_error_text",
]
