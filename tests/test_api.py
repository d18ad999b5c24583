"""
Tests for API endpoints
"""
import pytest


class TestSystemEndpoints:
    """Test suite for system routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "memory"
        assert body["storage_available"] is True

    def test_health_reflects_dispatch_storage(self, client, report_store):
        report_store.backend = "postgresql"
        report_store.is_available = lambda: False

        body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["storage"] == "postgresql"
        assert body["storage_available"] is False


class TestReportEndpoints:
    """Test suite for report routes."""

    def test_submit_report(self, client, sample_report):
        response = client.post("/api/v1/reports", json=sample_report)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["assigned_ngo_id"] is None
        assert body["location"] == {"type": "Point", "coordinates": [77.1, 28.6]}
        assert body["notified"] == 3
        assert body["failed_notifications"] == 0

    def test_submit_accepts_camel_case(self, client):
        response = client.post(
            "/api/v1/reports",
            json={"photoRef": "/uploads/cat.jpg", "description": "cat stuck", "longitude": "12.5", "latitude": "41.9"},
        )

        assert response.status_code == 201
        assert response.json()["photo_ref"] == "/uploads/cat.jpg"

    @pytest.mark.parametrize("field,value", [
        ("latitude", 95),
        ("longitude", -200),
        ("description", ""),
        ("photo_ref", None),
        ("longitude", True),
        ("longitude", "abc"),
        ("longitude", [1, 2]),
        ("latitude", None),
    ])
    def test_submit_invalid_report(self, client, sample_report, field, value):
        sample_report[field] = value

        response = client.post("/api/v1/reports", json=sample_report)

        assert response.status_code == 400
        assert client.get("/api/v1/reports").json()["count"] == 0

    def test_boolean_coordinate_rejected_without_notifications(self, client, notification_store, sample_report):
        sample_report["longitude"] = True

        response = client.post("/api/v1/reports", json=sample_report)

        assert response.status_code == 400
        assert client.get("/api/v1/reports").json()["count"] == 0
        assert len(notification_store) == 0

    def test_list_reports_newest_first(self, client, sample_report):
        first = client.post("/api/v1/reports", json=sample_report).json()
        second = client.post("/api/v1/reports", json={**sample_report, "description": "kitten"}).json()

        response = client.get("/api/v1/reports")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert [r["id"] for r in body["reports"]] == [second["id"], first["id"]]

    def test_get_report(self, client, sample_report):
        created = client.post("/api/v1/reports", json=sample_report).json()

        response = client.get(f"/api/v1/reports/{created['id']}")
        assert response.status_code == 200
        assert response.json()["description"] == "injured dog"

        assert client.get("/api/v1/reports/unknown").status_code == 404

    def test_nearby_reports(self, client, sample_report):
        client.post("/api/v1/reports", json=sample_report)
        client.post("/api/v1/reports", json={**sample_report, "longitude": 72.8, "latitude": 19.0})

        response = client.get("/api/v1/reports/nearby", params={"longitude": 77.1, "latitude": 28.6, "radius_km": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["reports"][0]["distance_km"] == 0

    def test_nearby_rejects_bad_point(self, client):
        response = client.get("/api/v1/reports/nearby", params={"longitude": 77.1, "latitude": 120})
        assert response.status_code == 400

    def test_reports_in_area(self, client, sample_report):
        inside = client.post("/api/v1/reports", json=sample_report).json()
        client.post("/api/v1/reports", json={**sample_report, "longitude": 72.8, "latitude": 19.0})

        response = client.get("/api/v1/reports/area", params={"west": 76, "south": 28, "east": 78, "north": 29})

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["reports"][0]["id"] == inside["id"]

    def test_area_rejects_inverted_box(self, client):
        response = client.get("/api/v1/reports/area", params={"west": 78, "south": 28, "east": 76, "north": 29})
        assert response.status_code == 400

    def test_stats_summary(self, client, sample_report, auth_headers):
        report_id = client.post("/api/v1/reports", json=sample_report).json()["id"]
        client.post("/api/v1/reports", json=sample_report)
        client.put(f"/api/v1/reports/{report_id}/status", json={"status": "in-progress"}, headers=auth_headers("ngo1"))

        response = client.get("/api/v1/reports/stats/summary")

        assert response.status_code == 200
        assert response.json() == {
            "total_reports": 2,
            "by_status": {"pending": 1, "in-progress": 1},
            "claimed": 1,
        }


class TestStatusEndpoint:
    """Test suite for the authenticated status update route."""

    def _submit(self, client, sample_report):
        return client.post("/api/v1/reports", json=sample_report).json()["id"]

    def test_requires_token(self, client, sample_report):
        report_id = self._submit(client, sample_report)

        response = client.put(f"/api/v1/reports/{report_id}/status", json={"status": "in-progress"})
        assert response.status_code == 401

        response = client.put(
            f"/api/v1/reports/{report_id}/status",
            json={"status": "in-progress"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401

    def test_unknown_ngo_rejected(self, client, sample_report, auth_headers):
        report_id = self._submit(client, sample_report)

        response = client.put(
            f"/api/v1/reports/{report_id}/status",
            json={"status": "in-progress"},
            headers=auth_headers("ghost-ngo"),
        )
        assert response.status_code == 401

    def test_claim_and_takeover(self, client, sample_report, auth_headers):
        report_id = self._submit(client, sample_report)
        url = f"/api/v1/reports/{report_id}/status"

        response = client.put(url, json={"status": "in-progress"}, headers=auth_headers("ngo1"))
        assert response.status_code == 200
        assert response.json()["assigned_ngo_id"] == "ngo1"
        assert response.json()["assigned_ngo_name"] == "Paws Rescue Delhi"

        response = client.put(url, json={"status": "in-progress"}, headers=auth_headers("ngo2"))
        assert response.status_code == 200
        assert response.json()["assigned_ngo_id"] == "ngo2"

    def test_complete_removes_report(self, client, sample_report, auth_headers):
        report_id = self._submit(client, sample_report)

        response = client.put(
            f"/api/v1/reports/{report_id}/status",
            json={"status": "completed"},
            headers=auth_headers("ngo1"),
        )

        assert response.status_code == 200
        assert response.json() == {"id": report_id, "completed": True}
        assert client.get(f"/api/v1/reports/{report_id}").status_code == 404
        assert client.get("/api/v1/reports").json()["count"] == 0

    def test_unknown_report_and_status(self, client, sample_report, auth_headers):
        response = client.put(
            "/api/v1/reports/unknown/status",
            json={"status": "in-progress"},
            headers=auth_headers("ngo1"),
        )
        assert response.status_code == 404

        report_id = self._submit(client, sample_report)
        response = client.put(
            f"/api/v1/reports/{report_id}/status",
            json={"status": "archived"},
            headers=auth_headers("ngo1"),
        )
        assert response.status_code == 400

    def test_exclusive_claim_conflict(self, client, dispatch, sample_report, auth_headers):
        dispatch.reports.exclusive_claims = True
        report_id = self._submit(client, sample_report)
        url = f"/api/v1/reports/{report_id}/status"

        client.put(url, json={"status": "in-progress"}, headers=auth_headers("ngo1"))
        response = client.put(url, json={"status": "in-progress"}, headers=auth_headers("ngo2"))

        assert response.status_code == 409


class TestApplicationEndpoints:
    """Test suite for adoption and volunteer routes."""

    def test_submit_adoption(self, client, notification_store):
        response = client.post(
            "/api/v1/adoptions",
            json={"petName": "Rex", "ngoId": "ngo1", "fullName": "Meera Shah", "hoursAlone": 4},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["pet_name"] == "Rex"
        assert body["ngo_id"] == "ngo1"
        assert body["status"] == "pending"

        written = notification_store.all()
        assert len(written) == 1
        assert written[0].type.value == "adoption"
        assert written[0].target_ngo_id == "ngo1"
        assert "Rex" in written[0].message

    def test_adoption_without_ngo(self, client):
        response = client.post("/api/v1/adoptions", json={"petName": "Rex"})
        assert response.status_code == 400

    def test_submit_volunteer(self, client, notification_store):
        response = client.post(
            "/api/v1/volunteers",
            json={"full_name": "Asha Verma", "ngo_id": "ngo2", "reason": "weekends free"},
        )

        assert response.status_code == 201
        assert response.json()["full_name"] == "Asha Verma"
        assert len(notification_store.list_for_ngo("ngo2")) == 1


class TestNotificationEndpoints:
    """Test suite for notification polling."""

    def test_poll_and_mark_read(self, client, sample_report, auth_headers):
        client.post("/api/v1/reports", json=sample_report)
        client.post("/api/v1/adoptions", json={"petName": "Rex", "ngoId": "ngo1"})

        response = client.get("/api/v1/notifications", headers=auth_headers("ngo1"))
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["unread_count"] == 2

        notification_id = body["notifications"][0]["id"]
        response = client.put(f"/api/v1/notifications/{notification_id}/read", headers=auth_headers("ngo1"))
        assert response.status_code == 200
        assert response.json()["read"] is True

        response = client.get("/api/v1/notifications", params={"unread_only": True}, headers=auth_headers("ngo1"))
        assert response.json()["count"] == 1

    def test_other_ngo_cannot_read(self, client, auth_headers):
        client.post("/api/v1/adoptions", json={"petName": "Rex", "ngoId": "ngo1"})
        notification_id = client.get("/api/v1/notifications", headers=auth_headers("ngo1")).json()["notifications"][0]["id"]

        response = client.put(f"/api/v1/notifications/{notification_id}/read", headers=auth_headers("ngo2"))
        assert response.status_code == 404

    def test_requires_token(self, client):
        assert client.get("/api/v1/notifications").status_code == 401
