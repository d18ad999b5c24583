"""
Service wiring for the API
"""

import logging
import threading
from typing import Optional

from fastapi import Depends, Header, HTTPException

from rescuelink.api.auth import resolve_acting_ngo
from rescuelink.applications.intake import InMemoryApplicationStore
from rescuelink.core.config import Settings, settings
from rescuelink.core.exceptions import AuthenticationError, StorageFailure
from rescuelink.dispatch import RescueDispatch
from rescuelink.ngos.directory import InMemoryNgoDirectory, Ngo
from rescuelink.notifications.fanout import FanOutEngine
from rescuelink.notifications.store import InMemoryNotificationStore
from rescuelink.reports.report_handler import ReportHandler
from rescuelink.reports.store import InMemoryReportStore

logger = logging.getLogger(__name__)


def build_in_memory_dispatch(
    config: Settings = settings,
    directory: Optional[InMemoryNgoDirectory] = None,
) -> RescueDispatch:
    """Dispatch wired to process-local stores."""
    return RescueDispatch(
        reports=ReportHandler(InMemoryReportStore(), exclusive_claims=config.exclusive_claims),
        fanout=FanOutEngine(
            directory if directory is not None else InMemoryNgoDirectory(),
            InMemoryNotificationStore(),
            report_message=config.report_notification_message,
        ),
        applications=InMemoryApplicationStore(),
    )


def build_dispatch(config: Settings = settings) -> RescueDispatch:
    """PostGIS-backed dispatch when a database is configured, in-memory otherwise."""
    if not config.uses_database:
        logger.warning("DATABASE_URL not set; using in-memory stores")
        return build_in_memory_dispatch(config)

    from rescuelink.database import (
        SqlApplicationStore,
        SqlNgoDirectory,
        SqlNotificationStore,
        SqlReportStore,
        init_db,
    )

    db = init_db(config.database_url)
    return RescueDispatch(
        reports=ReportHandler(SqlReportStore(db), exclusive_claims=config.exclusive_claims),
        fanout=FanOutEngine(
            SqlNgoDirectory(db),
            SqlNotificationStore(db),
            report_message=config.report_notification_message,
        ),
        applications=SqlApplicationStore(db),
    )


_dispatch: Optional[RescueDispatch] = None
_dispatch_lock = threading.Lock()


def get_dispatch() -> RescueDispatch:
    """FastAPI dependency returning the process-wide dispatch."""
    global _dispatch
    if _dispatch is None:
        with _dispatch_lock:
            if _dispatch is None:
                _dispatch = build_dispatch()
    return _dispatch


def get_acting_ngo(
    authorization: Optional[str] = Header(None),
    dispatch: RescueDispatch = Depends(get_dispatch),
) -> Ngo:
    """Resolve the NGO behind the caller's bearer token."""
    try:
        return resolve_acting_ngo(authorization, dispatch.directory)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
