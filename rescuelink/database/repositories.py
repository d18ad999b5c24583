"""
PostgreSQL-backed stores
Each call runs in its own session, so every write commits on its own.
"""

import logging
from contextlib import contextmanager
from typing import Generator, List, Optional, Tuple

from geoalchemy2 import Geography
from sqlalchemy import cast, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rescuelink.applications.intake import (
    AdoptionApplication,
    ApplicationStore,
    VolunteerApplication,
)
from rescuelink.core.exceptions import ClaimConflict, NotFound, StorageFailure
from rescuelink.core.geo_utils import GeoLocation
from rescuelink.ngos.directory import Ngo, NgoDirectory
from rescuelink.notifications.models import Notification
from rescuelink.notifications.store import NotificationStore
from rescuelink.reports.models import Report, ReportStatus
from rescuelink.reports.store import ReportStore

from .connection import DatabaseConnection
from .models import (
    AdoptionApplicationRecord,
    NgoRecord,
    NotificationRecord,
    ReportRecord,
    VolunteerApplicationRecord,
)

logger = logging.getLogger(__name__)

GEOGRAPHY_POINT = Geography(geometry_type="POINT", srid=4326)


class SqlStore:
    """Shared session handling; SQLAlchemy errors surface as StorageFailure."""

    backend = "postgresql"

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def is_available(self) -> bool:
        return self.db.check_connection()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        try:
            with self.db.get_session() as session:
                yield session
        except SQLAlchemyError as e:
            raise StorageFailure(f"{type(self).__name__}: {e}") from e


class SqlNgoDirectory(SqlStore, NgoDirectory):

    def list_all(self) -> List[Ngo]:
        with self.session() as session:
            records = session.execute(select(NgoRecord)).scalars().all()
            return [r.to_domain() for r in records]

    def get(self, ngo_id: str) -> Ngo:
        with self.session() as session:
            record = session.get(NgoRecord, ngo_id)
            if record is None:
                raise NotFound(f"NGO {ngo_id} not found")
            return record.to_domain()


class SqlReportStore(SqlStore, ReportStore):

    def add(self, report: Report) -> Report:
        with self.session() as session:
            session.add(ReportRecord.from_domain(report))
        return report

    def get(self, report_id: str) -> Optional[Report]:
        with self.session() as session:
            record = session.get(ReportRecord, report_id)
            return record.to_domain() if record else None

    def list_recent(self, limit: Optional[int] = None) -> List[Report]:
        with self.session() as session:
            query = select(ReportRecord).order_by(ReportRecord.created_at.desc())
            if limit:
                query = query.limit(limit)
            return [r.to_domain() for r in session.execute(query).scalars().all()]

    def set_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        with self.session() as session:
            record = session.get(ReportRecord, report_id)
            if record is None:
                return None
            record.status = status
            session.flush()
            return record.to_domain()

    def claim(self, report_id: str, ngo: Ngo, only_if_pending: bool = False) -> Optional[Report]:
        with self.session() as session:
            stmt = update(ReportRecord).where(ReportRecord.id == report_id)
            if only_if_pending:
                stmt = stmt.where(
                    or_(
                        ReportRecord.status == ReportStatus.PENDING,
                        ReportRecord.assigned_ngo_id == ngo.id,
                    )
                )
            stmt = stmt.values(
                status=ReportStatus.IN_PROGRESS,
                assigned_ngo_id=ngo.id,
                assigned_ngo_name=ngo.name,
            ).execution_options(synchronize_session=False)

            result = session.execute(stmt)
            record = session.get(ReportRecord, report_id, populate_existing=True)

            if record is None:
                return None
            if result.rowcount == 0:
                raise ClaimConflict(
                    f"Report {report_id} already claimed by {record.assigned_ngo_name or record.assigned_ngo_id}"
                )
            return record.to_domain()

    def delete(self, report_id: str) -> bool:
        with self.session() as session:
            record = session.get(ReportRecord, report_id)
            if record is None:
                return False
            session.delete(record)
            return True

    def within_radius(self, location: GeoLocation, radius_km: float) -> List[Tuple[Report, float]]:
        center = cast(
            func.ST_SetSRID(func.ST_MakePoint(location.longitude, location.latitude), 4326),
            GEOGRAPHY_POINT,
        )
        report_geo = cast(ReportRecord.location, GEOGRAPHY_POINT)
        distance_m = func.ST_Distance(report_geo, center)

        query = (
            select(ReportRecord, distance_m.label("distance_m"))
            .where(func.ST_DWithin(report_geo, center, radius_km * 1000.0))
            .order_by(distance_m)
        )

        with self.session() as session:
            rows = session.execute(query).all()
            return [(record.to_domain(), meters / 1000.0) for record, meters in rows]


class SqlNotificationStore(SqlStore, NotificationStore):

    def add(self, notification: Notification) -> Notification:
        with self.session() as session:
            session.add(NotificationRecord.from_domain(notification))
        return notification

    def list_for_ngo(self, ngo_id: str, unread_only: bool = False) -> List[Notification]:
        query = (
            select(NotificationRecord)
            .where(NotificationRecord.target_ngo_id == ngo_id)
            .order_by(NotificationRecord.created_at.desc())
        )
        if unread_only:
            query = query.where(NotificationRecord.read.is_(False))

        with self.session() as session:
            return [r.to_domain() for r in session.execute(query).scalars().all()]

    def mark_read(self, notification_id: str, ngo_id: str) -> Notification:
        with self.session() as session:
            record = session.get(NotificationRecord, notification_id)
            if record is None or record.target_ngo_id != ngo_id:
                raise NotFound(f"Notification {notification_id} not found")
            record.read = True
            session.flush()
            return record.to_domain()


class SqlApplicationStore(SqlStore, ApplicationStore):

    def add_adoption(self, application: AdoptionApplication) -> AdoptionApplication:
        with self.session() as session:
            session.add(AdoptionApplicationRecord.from_domain(application))
        return application

    def add_volunteer(self, application: VolunteerApplication) -> VolunteerApplication:
        with self.session() as session:
            session.add(VolunteerApplicationRecord.from_domain(application))
        return application
