"""
SQLAlchemy models for RescueLink
Uses GeoAlchemy2 for PostGIS spatial types
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, Float, String, Text, Boolean,
    DateTime, Index, Enum as SQLEnum
)
from sqlalchemy.orm import declarative_base
from geoalchemy2 import Geometry
from geoalchemy2.shape import from_shape
from shapely.geometry import Point

from rescuelink.applications.intake import AdoptionApplication, VolunteerApplication
from rescuelink.core.geo_utils import GeoLocation
from rescuelink.ngos.directory import Ngo
from rescuelink.notifications.models import Notification, NotificationType
from rescuelink.reports.models import Report, ReportStatus

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class NgoRecord(Base):
    """
    Registered rescue organisation.

    Owned by the signup service; RescueLink only reads id and name.
    """
    __tablename__ = "ngos"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True)
    phone = Column(String(40))
    address = Column(Text)
    registration_number = Column(String(100))
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self):
        return f"<NgoRecord({self.id}, name={self.name})>"

    def to_domain(self) -> Ngo:
        return Ngo(id=self.id, name=self.name, email=self.email)


class ReportRecord(Base):
    """
    Animal rescue report.

    location holds POINT(longitude latitude) for radius queries.
    """
    __tablename__ = "reports"

    id = Column(String(32), primary_key=True)

    photo_ref = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)

    # Location (PostGIS point)
    location = Column(Geometry("POINT", srid=4326, spatial_index=False), nullable=False)
    longitude = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)

    status = Column(
        SQLEnum(ReportStatus, name="report_status", values_callable=_enum_values),
        nullable=False,
        default=ReportStatus.PENDING,
    )
    assigned_ngo_id = Column(String(64), nullable=True)
    assigned_ngo_name = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_report_location", location, postgresql_using="gist"),
        Index("idx_report_status", status),
        Index("idx_report_created_at", created_at),
    )

    def __repr__(self):
        return f"<ReportRecord({self.id}, status={self.status.value}, lon={self.longitude}, lat={self.latitude})>"

    @classmethod
    def from_domain(cls, report: Report) -> "ReportRecord":
        point = Point(report.location.longitude, report.location.latitude)
        return cls(
            id=report.id,
            photo_ref=report.photo_ref,
            description=report.description,
            location=from_shape(point, srid=4326),
            longitude=report.location.longitude,
            latitude=report.location.latitude,
            status=report.status,
            assigned_ngo_id=report.assigned_ngo_id,
            assigned_ngo_name=report.assigned_ngo_name,
            created_at=report.created_at,
        )

    def to_domain(self) -> Report:
        return Report(
            id=self.id,
            photo_ref=self.photo_ref,
            description=self.description,
            location=GeoLocation(longitude=self.longitude, latitude=self.latitude),
            status=self.status,
            assigned_ngo_id=self.assigned_ngo_id,
            assigned_ngo_name=self.assigned_ngo_name,
            created_at=self.created_at,
        )


class NotificationRecord(Base):
    """
    Notification addressed to one NGO.

    target_ngo_id has no foreign key. Adoption and volunteer notifications
    carry whatever NGO id the applicant sent.
    """
    __tablename__ = "notifications"

    id = Column(String(32), primary_key=True)
    type = Column(
        SQLEnum(NotificationType, name="notification_type", values_callable=_enum_values),
        nullable=False,
    )
    message = Column(Text, nullable=False)
    target_ngo_id = Column(Text, nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index("idx_notification_target", target_ngo_id, read),
        Index("idx_notification_created_at", created_at),
    )

    def __repr__(self):
        return f"<NotificationRecord({self.id}, type={self.type.value}, ngo={self.target_ngo_id})>"

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationRecord":
        return cls(
            id=notification.id,
            type=notification.type,
            message=notification.message,
            target_ngo_id=notification.target_ngo_id,
            read=notification.read,
            created_at=notification.created_at,
        )

    def to_domain(self) -> Notification:
        return Notification(
            id=self.id,
            type=self.type,
            message=self.message,
            target_ngo_id=self.target_ngo_id,
            read=self.read,
            created_at=self.created_at,
        )


class AdoptionApplicationRecord(Base):
    """Adoption application filed with an NGO."""
    __tablename__ = "adoption_applications"

    id = Column(String(32), primary_key=True)
    ngo_id = Column(Text, nullable=False, index=True)
    pet_id = Column(String(64))
    pet_name = Column(String(200), nullable=False)
    pet_breed = Column(String(200))
    full_name = Column(String(200))
    email = Column(String(200))
    phone = Column(String(40))
    address = Column(Text)
    housing_type = Column(String(100))
    has_yard = Column(String(20))
    had_pets = Column(String(20))
    pet_experience = Column(Text)
    has_current_pets = Column(String(20))
    current_pets = Column(Text)
    hours_alone = Column(Float)
    adoption_reason = Column(Text)
    has_breeding_experience = Column(String(20))
    breeding_experience = Column(Text)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @classmethod
    def from_domain(cls, application: AdoptionApplication) -> "AdoptionApplicationRecord":
        return cls(**application.__dict__)


class VolunteerApplicationRecord(Base):
    """Volunteer application filed with an NGO."""
    __tablename__ = "volunteer_applications"

    id = Column(String(32), primary_key=True)
    ngo_id = Column(Text, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200))
    phone = Column(String(40))
    reason = Column(Text)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @classmethod
    def from_domain(cls, application: VolunteerApplication) -> "VolunteerApplicationRecord":
        return cls(**application.__dict__)
