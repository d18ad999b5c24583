"""
RescueLink - Reports Module
Animal rescue reports and their lifecycle.
"""

from rescuelink.reports.models import (
    Report,
    ReportStatus,
    ActiveReport,
    CompletedReport,
    StatusUpdateResult,
)
from rescuelink.reports.store import ReportStore, InMemoryReportStore
from rescuelink.reports.report_handler import ReportHandler

__all__ = [
    "Report",
    "ReportStatus",
    "ActiveReport",
    "CompletedReport",
    "StatusUpdateResult",
    "ReportStore",
    "InMemoryReportStore",
    "ReportHandler",
]
