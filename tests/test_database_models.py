"""
Tests for ORM mapping (no database required)
"""
import pytest
from unittest.mock import MagicMock

from geoalchemy2.shape import to_shape
from sqlalchemy.exc import OperationalError

from rescuelink.core.exceptions import StorageFailure
from rescuelink.core.geo_utils import GeoLocation
from rescuelink.database.models import (
    AdoptionApplicationRecord,
    NotificationRecord,
    ReportRecord,
    VolunteerApplicationRecord,
)
from rescuelink.database.repositories import SqlNotificationStore, SqlReportStore
from rescuelink.notifications.models import Notification, NotificationType
from rescuelink.reports.models import Report, ReportStatus


class TestReportRecord:
    """Test suite for report row conversion."""

    def setup_method(self):
        self.report = Report(
            id="abc123",
            photo_ref="p.jpg",
            description="injured dog",
            location=GeoLocation.from_values(77.1, 28.6),
        )

    def test_point_is_longitude_latitude(self):
        record = ReportRecord.from_domain(self.report)
        point = to_shape(record.location)

        assert (point.x, point.y) == (77.1, 28.6)
        assert record.longitude == 77.1
        assert record.latitude == 28.6

    def test_round_trip(self):
        record = ReportRecord.from_domain(self.report)
        report = record.to_domain()

        assert report.id == "abc123"
        assert report.status == ReportStatus.PENDING
        assert report.location.coordinates == [77.1, 28.6]
        assert report.assigned_ngo_id is None

    def test_status_stored_as_value(self):
        status_type = ReportRecord.__table__.c.status.type
        assert list(status_type.enums) == ["pending", "in-progress", "completed"]

    def test_location_has_gist_index(self):
        indexes = {ix.name: ix for ix in ReportRecord.__table__.indexes}
        assert "idx_report_location" in indexes
        assert indexes["idx_report_location"].dialect_options["postgresql"]["using"] == "gist"


class TestNotificationRecord:
    """Test suite for notification row conversion."""

    def test_round_trip(self):
        notification = Notification(type=NotificationType.ADOPTION, message="New adoption application for Rex", target_ngo_id="ngo1")

        restored = NotificationRecord.from_domain(notification).to_domain()

        assert restored.id == notification.id
        assert restored.type == NotificationType.ADOPTION
        assert restored.target_ngo_id == "ngo1"
        assert restored.read is False


class TestSqlErrorWrapping:
    """Test suite for StorageFailure wrapping."""

    def setup_method(self):
        self.db = MagicMock()
        self.db.get_session.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    def test_report_store(self):
        with pytest.raises(StorageFailure):
            SqlReportStore(self.db).get("abc123")

    def test_notification_store(self):
        notification = Notification(type=NotificationType.REPORT, message="x", target_ngo_id="ngo1")
        with pytest.raises(StorageFailure):
            SqlNotificationStore(self.db).add(notification)


class TestNgoIdColumns:
    """Test suite for columns holding applicant-supplied NGO ids."""

    def test_unbounded_length(self):
        columns = [
            NotificationRecord.__table__.c.target_ngo_id,
            AdoptionApplicationRecord.__table__.c.ngo_id,
            VolunteerApplicationRecord.__table__.c.ngo_id,
        ]
        for column in columns:
            assert getattr(column.type, "length", None) is None

    def test_long_id_round_trips(self):
        long_id = "ngo-" + "x" * 120
        notification = Notification(type=NotificationType.VOLUNTEER, message="x", target_ngo_id=long_id)

        assert NotificationRecord.from_domain(notification).to_domain().target_ngo_id == long_id


class TestSqlAvailability:
    """Test suite for storage health reporting."""

    def test_reports_connection_check(self):
        db = MagicMock()
        db.check_connection.return_value = False
        store = SqlReportStore(db)

        assert store.backend == "postgresql"
        assert store.is_available() is False
        db.check_connection.assert_called_once()
