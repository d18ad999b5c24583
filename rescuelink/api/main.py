"""
RescueLink - REST API

FastAPI application for submitting animal rescue reports, letting NGOs
triage them, and letting NGOs poll the notifications written for them.

Run with: uvicorn rescuelink.api.main:app --reload
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rescuelink import __version__
from rescuelink.api.dependencies import get_acting_ngo, get_dispatch
from rescuelink.core.config import settings
from rescuelink.core.exceptions import (
    ClaimConflict,
    NotFound,
    StorageFailure,
    ValidationError,
)
from rescuelink.core.logging import setup_logging
from rescuelink.dispatch import RescueDispatch
from rescuelink.ngos.directory import Ngo
from rescuelink.notifications.models import Notification
from rescuelink.reports.models import CompletedReport, Report

logger = setup_logging()

app = FastAPI(
    title="RescueLink",
    description="Stray and distressed animal reports routed to rescue NGOs",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models
# ============================================================================

class CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase names the web forms send."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReportCreateRequest(CamelModel):
    """Request to submit a rescue report. Coordinates are passed through raw and validated by GeoLocation."""
    photo_ref: Optional[str] = Field(None, description="URI of the already-uploaded photo")
    description: Optional[str] = None
    longitude: Any = None
    latitude: Any = None


class StatusUpdateRequest(BaseModel):
    """Request to change a report's status."""
    status: str = Field(..., description="pending, in-progress or completed")


class LocationResponse(BaseModel):
    type: str = "Point"
    coordinates: List[float] = Field(description="[longitude, latitude]")


class ReportResponse(BaseModel):
    """Rescue report."""
    id: str
    photo_ref: str
    description: str
    location: LocationResponse
    status: str
    assigned_ngo_id: Optional[str]
    assigned_ngo_name: Optional[str]
    created_at: str


class ReportSubmitResponse(ReportResponse):
    """Submitted report plus the number of NGOs notified."""
    notified: int
    failed_notifications: int = 0


class NearbyReportResponse(ReportResponse):
    distance_km: float


class ReportListResponse(BaseModel):
    count: int
    reports: List[ReportResponse]


class NearbyReportListResponse(BaseModel):
    count: int
    radius_km: float
    reports: List[NearbyReportResponse]


class ReportStatsResponse(BaseModel):
    """Counts over live reports."""
    total_reports: int
    by_status: Dict[str, int]
    claimed: int


class CompletedResponse(BaseModel):
    id: str
    completed: bool = True


class AdoptionCreateRequest(CamelModel):
    """Adoption application form."""
    ngo_id: Optional[str] = None
    pet_name: Optional[str] = None
    pet_id: Optional[str] = None
    pet_breed: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    housing_type: Optional[str] = None
    has_yard: Optional[str] = None
    had_pets: Optional[str] = None
    pet_experience: Optional[str] = None
    has_current_pets: Optional[str] = None
    current_pets: Optional[str] = None
    hours_alone: Optional[float] = None
    adoption_reason: Optional[str] = None
    has_breeding_experience: Optional[str] = None
    breeding_experience: Optional[str] = None


class VolunteerCreateRequest(CamelModel):
    """Volunteer application form."""
    ngo_id: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    reason: Optional[str] = None


class NotificationResponse(BaseModel):
    id: str
    type: str
    message: str
    target_ngo_id: Optional[str]
    read: bool
    created_at: str


class NotificationListResponse(BaseModel):
    count: int
    unread_count: int
    notifications: List[NotificationResponse]


class HealthResponse(BaseModel):
    """API health check response."""
    status: str
    version: str
    timestamp: str
    storage: str
    storage_available: bool


# ============================================================================
# Helper Functions
# ============================================================================

def _report_response(report: Report) -> ReportResponse:
    return ReportResponse(**report.to_dict())


def _notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(**notification.to_dict())


# ============================================================================
# System Routes
# ============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
def health_check(dispatch: RescueDispatch = Depends(get_dispatch)):
    """Check API health status, including whether report storage answers."""
    storage = dispatch.storage_status()
    return HealthResponse(
        status="healthy" if storage["available"] else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        storage=storage["storage"],
        storage_available=storage["available"],
    )


# ============================================================================
# Report Routes
# ============================================================================

@app.post("/api/v1/reports", response_model=ReportSubmitResponse, status_code=201, tags=["Reports"])
def submit_report(request: ReportCreateRequest, dispatch: RescueDispatch = Depends(get_dispatch)):
    """
    Submit a rescue report.

    The report is stored as pending and every registered NGO gets a
    notification. Notification failures do not fail the submission.
    """
    try:
        result = dispatch.submit_report(
            photo_ref=request.photo_ref,
            description=request.description,
            longitude=request.longitude,
            latitude=request.latitude,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return ReportSubmitResponse(
        **result.record.to_dict(),
        notified=result.notified,
        failed_notifications=len(result.failed_deliveries),
    )


@app.get("/api/v1/reports", response_model=ReportListResponse, tags=["Reports"])
def list_reports(
    limit: Optional[int] = Query(None, ge=1, le=500),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """List live reports, most recent first."""
    try:
        reports = dispatch.list_reports(limit)
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return ReportListResponse(
        count=len(reports),
        reports=[_report_response(r) for r in reports],
    )


@app.get("/api/v1/reports/nearby", response_model=NearbyReportListResponse, tags=["Reports"])
def list_nearby_reports(
    longitude: float = Query(...),
    latitude: float = Query(...),
    radius_km: float = Query(settings.nearby_radius_km, gt=0, le=settings.max_nearby_radius_km),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """List reports within radius_km of a point, nearest first."""
    try:
        matches = dispatch.find_nearby(longitude, latitude, radius_km)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return NearbyReportListResponse(
        count=len(matches),
        radius_km=radius_km,
        reports=[
            NearbyReportResponse(**report.to_dict(), distance_km=round(distance, 3))
            for report, distance in matches
        ],
    )


@app.get("/api/v1/reports/area", response_model=ReportListResponse, tags=["Reports"])
def list_reports_in_area(
    west: float = Query(...),
    south: float = Query(...),
    east: float = Query(...),
    north: float = Query(...),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """List reports inside a longitude/latitude bounding box."""
    try:
        reports = dispatch.reports_in_area(west, south, east, north)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return ReportListResponse(
        count=len(reports),
        reports=[_report_response(r) for r in reports],
    )


@app.get("/api/v1/reports/stats/summary", response_model=ReportStatsResponse, tags=["Reports"])
def get_report_stats(dispatch: RescueDispatch = Depends(get_dispatch)):
    """Get statistics for live reports."""
    try:
        stats = dispatch.report_statistics()
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return ReportStatsResponse(
        total_reports=stats["total_reports"],
        by_status=stats["by_status"],
        claimed=stats["claimed"],
    )


@app.get("/api/v1/reports/{report_id}", response_model=ReportResponse, tags=["Reports"])
def get_report(report_id: str, dispatch: RescueDispatch = Depends(get_dispatch)):
    """Get a specific report by ID."""
    try:
        return _report_response(dispatch.get_report(report_id))
    except NotFound:
        raise HTTPException(status_code=404, detail="Report not found")
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@app.put("/api/v1/reports/{report_id}/status", tags=["Reports"])
def update_report_status(
    report_id: str,
    request: StatusUpdateRequest,
    ngo: Ngo = Depends(get_acting_ngo),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """
    Update a report's status as the calling NGO.

    in-progress claims the report for the caller; completed removes it.
    """
    try:
        result = dispatch.update_report_status(report_id, request.status, ngo)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound:
        raise HTTPException(status_code=404, detail="Report not found")
    except ClaimConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    if isinstance(result, CompletedReport):
        return CompletedResponse(id=result.report_id)
    return _report_response(result.report)


# ============================================================================
# Application Routes
# ============================================================================

@app.post("/api/v1/adoptions", status_code=201, tags=["Applications"])
def submit_adoption(request: AdoptionCreateRequest, dispatch: RescueDispatch = Depends(get_dispatch)):
    """Submit an adoption application; the named NGO is notified."""
    try:
        result = dispatch.submit_adoption(**request.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return result.record.to_dict()


@app.post("/api/v1/volunteers", status_code=201, tags=["Applications"])
def submit_volunteer(request: VolunteerCreateRequest, dispatch: RescueDispatch = Depends(get_dispatch)):
    """Submit a volunteer application; the named NGO is notified."""
    try:
        result = dispatch.submit_volunteer(**request.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return result.record.to_dict()


# ============================================================================
# Notification Routes
# ============================================================================

@app.get("/api/v1/notifications", response_model=NotificationListResponse, tags=["Notifications"])
def list_notifications(
    unread_only: bool = Query(False),
    ngo: Ngo = Depends(get_acting_ngo),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """Poll the calling NGO's notifications, newest first."""
    try:
        notifications = dispatch.list_notifications(ngo, unread_only=unread_only)
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))

    return NotificationListResponse(
        count=len(notifications),
        unread_count=sum(1 for n in notifications if not n.read),
        notifications=[_notification_response(n) for n in notifications],
    )


@app.put("/api/v1/notifications/{notification_id}/read", response_model=NotificationResponse, tags=["Notifications"])
def mark_notification_read(
    notification_id: str,
    ngo: Ngo = Depends(get_acting_ngo),
    dispatch: RescueDispatch = Depends(get_dispatch),
):
    """Mark one of the calling NGO's notifications as read."""
    try:
        return _notification_response(dispatch.mark_notification_read(ngo, notification_id))
    except NotFound:
        raise HTTPException(status_code=404, detail="Notification not found")
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
