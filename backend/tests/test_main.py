"""
Tests for main.py FastAPI endpoints.
"""
import pytest
from unittest.mock import patch

from backend.app.schedule.errors import ScheduleError
from backend.app.schedule.templates import PROJECT_TYPES


class TestBasicEndpoints:
    """Test basic FastAPI endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Project schedule engine"}

    def test_debug_ping(self, client):
        response = client.get("/debug/ping")
        assert response.status_code == 200
        assert response.json() == {"pong": True}

    def test_project_types(self, client):
        response = client.get("/schedule/project-types")
        assert response.status_code == 200
        data = response.json()
        assert data["project_types"] == PROJECT_TYPES
        assert data["default"] == "new-build"


class TestScheduleEndpoint:
    """Test POST /schedule."""

    def test_new_build_schedule(self, client):
        response = client.post("/schedule", json={
            "project_type": "new-build",
            "area": 50,
            "project_start_date": "2024-01-01",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["project_type"] == "new-build"
        assert data["multiplier"] == 1.0
        assert data["project_start_date"] == "2024-01-01"
        assert data["activities"]["1.1.1"]["start"] == "2024-01-01"
        assert data["activities"]["1.1.2"]["finish"] == "2024-01-03"
        assert data["critical_path"][0] == "1.1.1"
        assert data["milestone_count"] == 6
        assert data["warnings"] == []

    def test_unknown_type_uses_default_template(self, client):
        response = client.post("/schedule", json={"project_type": "lighthouse", "area": 75, "project_start_date": "2024-01-01"})
        assert response.status_code == 200
        assert response.json()["project_type"] == "new-build"

    def test_declaration_ordering(self, client):
        response = client.post("/schedule", json={
            "project_type": "fit-out",
            "area": 40,
            "project_start_date": "2024-03-01",
            "ordering": "declaration",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["ordering"] == "declaration"
        assert data["multiplier"] == 0.8

    @pytest.mark.parametrize("area", [0, -10])
    def test_non_positive_area(self, client, area):
        response = client.post("/schedule", json={"project_type": "new-build", "area": area})
        assert response.status_code == 422
        assert "area" in response.json()["detail"]

    def test_missing_area(self, client):
        response = client.post("/schedule", json={"project_type": "new-build"})
        assert response.status_code == 422

    def test_unknown_ordering(self, client):
        response = client.post("/schedule", json={"project_type": "new-build", "area": 50, "ordering": "random"})
        assert response.status_code == 422
        assert "ordering" in response.json()["detail"]

    def test_cyclic_template(self, client, template_factory):
        cyclic = template_factory([("A", 1, ["B"]), ("B", 1, ["A"])])
        with patch("backend.main.get_template", return_value=cyclic):
            response = client.post("/schedule", json={"project_type": "new-build", "area": 50})
        assert response.status_code == 422
        assert "Cyclic dependency" in response.json()["detail"]

    def test_start_date_near_date_max(self, client):
        response = client.post("/schedule", json={"project_type": "new-build", "area": 50, "project_start_date": "9999-12-01"})
        assert response.status_code == 422
        assert "supported date range" in response.json()["detail"]

    def test_engine_error_is_client_error(self, client):
        with patch("backend.main.compute_schedule", side_effect=ScheduleError("template unusable")):
            response = client.post("/schedule", json={"project_type": "new-build", "area": 50})
        assert response.status_code == 422
        assert response.json()["detail"] == "template unusable"

    def test_unexpected_failure(self, client):
        with patch("backend.main.compute_schedule", side_effect=RuntimeError("boom")):
            response = client.post("/schedule", json={"project_type": "new-build", "area": 50})
        assert response.status_code == 500
        assert response.json()["detail"] == "boom"


class TestScheduleReportEndpoint:
    """Test POST /schedule/report."""

    def test_report(self, client):
        response = client.post("/schedule/report", json={
            "project_type": "refurbishment",
            "area": 100,
            "project_start_date": "2024-01-01",
            "include_kitchen": True,
            "include_mep": False,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Project Schedule - refurbishment"
        assert data["content"].startswith("# PROJECT SCHEDULE (SCHEDULE OF WORKS)")
        assert "Project Type: REFURBISHMENT" in data["content"]
        assert "Location: UK" in data["content"]
        assert "Kitchen Installation" in data["content"]
        assert "MEP Works: Not included in this project scope" in data["content"]
        assert data["summary"]["ui"] == "schedule_summary"
        assert data["summary"]["data"]["critical_path"] == data["schedule"]["critical_path"]

    def test_report_invalid_area(self, client):
        response = client.post("/schedule/report", json={"project_type": "fit-out", "area": 0})
        assert response.status_code == 422


class TestDependencyGraphEndpoint:
    """Test GET /schedule/{project_type}/graph."""

    def test_graph(self, client):
        response = client.get("/schedule/fit-out/graph")
        assert response.status_code == 200
        data = response.json()
        assert data["project_type"] == "fit-out"
        assert data["graph"].startswith("Dependency Graph for fit-out template")
        assert " - 1.1.1 -> 1.1.2" in data["graph"]

    def test_unknown_type_falls_back(self, client):
        response = client.get("/schedule/castle/graph")
        assert response.status_code == 200
        assert response.json()["project_type"] == "new-build"

    def test_unknown_type_without_fallback(self, client):
        response = client.get("/schedule/castle/graph", params={"fallback": False})
        assert response.status_code == 404
