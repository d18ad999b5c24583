"""
Pytest configuration and fixtures
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rescuelink.applications.intake import InMemoryApplicationStore
from rescuelink.dispatch import RescueDispatch
from rescuelink.ngos.directory import InMemoryNgoDirectory, Ngo
from rescuelink.notifications.fanout import FanOutEngine
from rescuelink.notifications.store import InMemoryNotificationStore
from rescuelink.reports.report_handler import ReportHandler
from rescuelink.reports.store import InMemoryReportStore


@pytest.fixture
def sample_ngos():
    """Three registered rescue NGOs."""
    return [
        Ngo(id="ngo1", name="Paws Rescue Delhi", email="paws@example.org"),
        Ngo(id="ngo2", name="Street Tails Trust", email="tails@example.org"),
        Ngo(id="ngo3", name="Happy Hooves Shelter", email="hooves@example.org"),
    ]


@pytest.fixture
def sample_report():
    """Valid report submission."""
    return {
        "photo_ref": "p.jpg",
        "description": "injured dog",
        "longitude": 77.1,
        "latitude": 28.6,
    }


@pytest.fixture
def directory(sample_ngos):
    return InMemoryNgoDirectory(sample_ngos)


@pytest.fixture
def report_store():
    return InMemoryReportStore()


@pytest.fixture
def notification_store():
    return InMemoryNotificationStore()


@pytest.fixture
def application_store():
    return InMemoryApplicationStore()


@pytest.fixture
def handler(report_store):
    return ReportHandler(report_store)


@pytest.fixture
def fanout(directory, notification_store):
    return FanOutEngine(directory, notification_store)


@pytest.fixture
def dispatch(handler, fanout, application_store):
    return RescueDispatch(reports=handler, fanout=fanout, applications=application_store)


@pytest.fixture
def client(dispatch):
    """TestClient whose routes run against the in-memory dispatch fixture."""
    from fastapi.testclient import TestClient
    from rescuelink.api.dependencies import get_dispatch
    from rescuelink.api.main import app

    app.dependency_overrides[get_dispatch] = lambda: dispatch
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for an NGO id."""
    from rescuelink.api.auth import create_access_token

    def _headers(ngo_id):
        return {"Authorization": f"Bearer {create_access_token(ngo_id)}"}

    return _headers
