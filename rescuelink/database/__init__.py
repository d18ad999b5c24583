"""
Database module for RescueLink
PostgreSQL + PostGIS for report, notification and application persistence
"""

from .connection import DatabaseConnection, init_db
from .models import (
    Base,
    NgoRecord,
    ReportRecord,
    NotificationRecord,
    AdoptionApplicationRecord,
    VolunteerApplicationRecord,
)
from .repositories import (
    SqlNgoDirectory,
    SqlReportStore,
    SqlNotificationStore,
    SqlApplicationStore,
)

__all__ = [
    "DatabaseConnection",
    "init_db",
    "Base",
    "NgoRecord",
    "ReportRecord",
    "NotificationRecord",
    "AdoptionApplicationRecord",
    "VolunteerApplicationRecord",
    "SqlNgoDirectory",
    "SqlReportStore",
    "SqlNotificationStore",
    "SqlApplicationStore",
]
