"""
Test configuration and fixtures for the backend test suite.
"""
import pytest
from datetime import date
from unittest.mock import patch
from fastapi.testclient import TestClient

from backend.main import app
from backend.app.schedule.models import ScheduleTemplate


def make_template(activities, project_type="test"):
    """Build a one-phase, one-work-package template from (id, duration, deps[, milestone]) tuples."""
    rows = []
    for spec in activities:
        activity_id, duration, deps = spec[:3]
        milestone = spec[3] if len(spec) > 3 else False
        rows.append({
            "id": activity_id,
            "name": f"Activity {activity_id}",
            "nominal_duration": duration,
            "dependencies": list(deps),
            "is_milestone": milestone,
        })
    return ScheduleTemplate.model_validate({
        "project_type": project_type,
        "phases": [{
            "id": "phase-1",
            "title": "Phase 1",
            "work_packages": [{"id": "wp-1", "title": "Work Package 1", "activities": rows}],
        }],
    })


@pytest.fixture
def start_date():
    return date(2024, 1, 1)


@pytest.fixture
def chain_template():
    """A(1) -> B(2) -> C(1)."""
    return make_template([("A", 1, []), ("B", 2, ["A"]), ("C", 1, ["B"])])


@pytest.fixture
def diamond_template():
    """A -> {B, C} -> D, with C longer than B; E hangs off A."""
    return make_template([
        ("A", 1, []),
        ("B", 1, ["A"]),
        ("C", 3, ["A"]),
        ("D", 1, ["B", "C"], True),
        ("E", 2, ["A"]),
    ])


@pytest.fixture
def template_factory():
    return make_template


@pytest.fixture(autouse=True)
def engine_config():
    """Pin engine defaults regardless of the developer's .env."""
    with patch("backend.config.SCHEDULE_ORDERING", "topological"), \
         patch("backend.config.SCHEDULE_DAYS_PER_UNIT", 1), \
         patch("backend.config.DEFAULT_PROJECT_TYPE", "new-build"):
        yield


@pytest.fixture
def client():
    """Create a test client."""
    return TestClient(app)
