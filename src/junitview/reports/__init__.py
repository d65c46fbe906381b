"""Loaded report collections."""

from junitview.reports.report_set import LoadFailure, ReportSet

__all__ = ["LoadFailure", "ReportSet"]
