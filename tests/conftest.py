import json

import httpx
import pytest

from app.clients.backend import BackendClient
from app.schemas.schedule import WeeklySchedule
from app.services.print_config import PrintConfigRefresher

BACKEND_URL = "http://backend.test/api"

def ok(data, status_code=200):
    return httpx.Response(status_code, json={"success": True, "data": data})

def not_found(message="Not found"):
    return httpx.Response(404, json={"success": False, "message": message})

class FakeBackend:
    """In-memory stand-in for the schedule REST backend."""

    def __init__(self):
        self.schedules = []
        self.physicians = []
        self.today = []
        self.assignments = []
        self.configuration = {
            "print_minutes_after_clinic_end": {
                "key": "print_minutes_after_clinic_end",
                "value": 10,
                "category": "printing",
                "dataType": "number",
                "isActive": True,
            }
        }
        self.fail = False
        # (status, text) served verbatim instead of the JSON envelope
        self.raw_body = None
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(500, json={"success": False, "message": "Database connection not available"})
        if self.raw_body is not None:
            status_code, text = self.raw_body
            return httpx.Response(status_code, text=text)

        path = request.url.path[len("/api"):]
        parts = [p for p in path.split("/") if p]
        resource = parts[0]

        if resource == "physician-schedules":
            return self._schedules(request, parts)
        if resource == "doctors":
            return ok(self.physicians)
        if resource == "today-physician-schedules":
            wanted = request.url.params.get("date")
            return ok([t for t in self.today if t["date"].startswith(wanted)])
        if resource == "physician-clinic-assignments":
            return ok(self.assignments)
        if resource == "configuration":
            entry = self.configuration.get(parts[1])
            return ok(entry) if entry else not_found("Configuration not found")
        return not_found()

    def _schedules(self, request, parts):
        if request.method == "GET" and len(parts) == 1:
            physician = request.url.params.get("physician")
            return ok([s for s in self.schedules if not physician or s["physician"] == physician])

        if request.method == "POST":
            data = json.loads(request.content)
            data["_id"] = f"new-{len(self.schedules) + 1}"
            data.setdefault("isActive", True)
            self.schedules.append(data)
            return ok(data, status_code=201)

        schedule = next((s for s in self.schedules if s["_id"] == parts[1]), None)
        if schedule is None:
            return not_found("Schedule not found")
        if request.method == "PUT":
            schedule.update(json.loads(request.content))
        return ok(schedule)

@pytest.fixture
def backend():
    return FakeBackend()

@pytest.fixture
def client(backend):
    return BackendClient(base_url=BACKEND_URL, transport=httpx.MockTransport(backend.handler))

@pytest.fixture
def print_config(client):
    return PrintConfigRefresher(client, default=10, interval_seconds=0.01)

@pytest.fixture
def make_schedule():
    def factory(**overrides):
        data = {
            "_id": "s1",
            "physician": "p1",
            "days": ["monday"],
            "startDate": "2024-01-01",
            "startTime": "09:00",
            "endTime": "10:00",
            "isActive": True,
        }
        data.update(overrides)
        return WeeklySchedule.model_validate(data)
    return factory
