"""junitview - terminal browser for JUnit XML test reports."""

__version__ = "0.1.0"

from junitview.core.models import (
    Case,
    CaseStatus,
    Counts,
    Failure,
    Outcome,
    Report,
    Suite,
)
from junitview.parsers.junit import JUnitParser
from junitview.reports.report_set import ReportSet

__all__ = [
    "Case",
    "CaseStatus",
    "Counts",
    "Failure",
    "JUnitParser",
    "Outcome",
    "Report",
    "ReportSet",
    "Suite",
]
