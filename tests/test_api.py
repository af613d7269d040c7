import pytest
from httpx import AsyncClient, ASGITransport

from app.api.deps import get_backend_client, get_print_config
from app.core.config import settings
from app.main import app

API = settings.API_V1_STR


@pytest.fixture
def api(client, print_config):
    app.dependency_overrides[get_backend_client] = lambda: client
    app.dependency_overrides[get_print_config] = lambda: print_config
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


def weekly(_id, start="09:00", end="10:00", days=("monday",), active=True):
    return {
        "_id": _id,
        "physician": {"_id": "p1", "name": "Dr. Mona Salem"},
        "days": list(days),
        "startDate": "2024-01-01",
        "startTime": start,
        "endTime": end,
        "isActive": active,
    }


@pytest.mark.asyncio
async def test_root(api):
    async with api as ac:
        response = await ac.get("/")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_schedule_overlap_is_rejected(api, backend):
    backend.schedules = [{**weekly("s1"), "physician": "p1"}]
    payload = {
        "physicianId": "p1",
        "days": ["monday"],
        "startDate": "2024-02-01",
        "startTime": "09:30",
        "endTime": "10:30",
    }
    async with api as ac:
        rejected = await ac.post(f"{API}/schedules/", json=payload)
        accepted = await ac.post(f"{API}/schedules/", json={**payload, "startTime": "10:00", "endTime": "11:00"})

    assert rejected.status_code == 400
    assert "overlapping time" in rejected.json()["detail"]
    assert accepted.status_code == 201
    assert accepted.json()["physician_id"] == "p1"


@pytest.mark.asyncio
async def test_create_schedule_validation(api):
    async with api as ac:
        empty_days = await ac.post(f"{API}/schedules/", json={
            "physicianId": "p1", "days": [], "startDate": "2024-02-01", "startTime": "09:00", "endTime": "10:00",
        })
        reversed_times = await ac.post(f"{API}/schedules/", json={
            "physicianId": "p1", "days": ["monday"], "startDate": "2024-02-01", "startTime": "11:00", "endTime": "10:00",
        })
    assert empty_days.status_code == 422
    assert reversed_times.status_code == 422


@pytest.mark.asyncio
async def test_check_overlap_endpoint(api):
    body = {
        "candidate": {
            "physicianId": "p1", "days": ["monday"], "startDate": "2024-02-01",
            "startTime": "09:30", "endTime": "10:30",
        },
        "existing": [weekly("s1"), weekly("s2", start="10:00", end="11:00"), weekly("s3", active=False)],
    }
    async with api as ac:
        response = await ac.post(f"{API}/schedules/check-overlap", json=body)
    assert response.status_code == 200
    assert response.json() == {"has_overlap": True, "conflicts": ["s1", "s2"]}


@pytest.mark.asyncio
async def test_stats(api, backend):
    backend.schedules = [weekly("s1"), weekly("s2", active=False)]
    async with api as ac:
        response = await ac.get(f"{API}/schedules/stats")
    assert response.json() == {"total": 2, "active": 1, "inactive": 1}


@pytest.mark.asyncio
async def test_today_schedules_fallback(api, backend):
    backend.schedules = [weekly("s1"), weekly("s2", days=("tuesday",))]
    async with api as ac:
        response = await ac.get(f"{API}/today-schedules/", params={"date": "2024-01-08"})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["source_schedule_id"] == "s1"
    assert data[0]["day"] == "monday"
    assert data[0]["date"] == "2024-01-08"


@pytest.mark.asyncio
async def test_today_schedules_bad_date(api):
    async with api as ac:
        response = await ac.get(f"{API}/today-schedules/", params={"date": "08/01/2024"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_print_check_uses_refreshed_grace(api, backend, print_config):
    backend.configuration["print_minutes_after_clinic_end"]["value"] = 30
    await print_config.refresh()

    async with api as ac:
        allowed = await ac.post(f"{API}/tickets/print-check", json={"clinic_time_to": "17:00", "current_time": "17:30"})
        blocked = await ac.post(f"{API}/tickets/print-check", json={"clinic_time_to": "17:00", "current_time": "17:31"})
        no_end = await ac.post(f"{API}/tickets/print-check", json={"current_time": "23:00"})

    assert allowed.json()["printable"] is True
    assert blocked.json()["printable"] is False
    assert blocked.json()["grace_minutes"] == 30
    assert "30 minutes after clinic end" in blocked.json()["message"]
    assert no_end.json()["printable"] is True


@pytest.mark.asyncio
async def test_print_check_rejects_bad_current_time(api):
    async with api as ac:
        response = await ac.post(f"{API}/tickets/print-check", json={"clinic_time_to": "17:00", "current_time": "late"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_ticket_number(api):
    async with api as ac:
        consultation = await ac.get(f"{API}/tickets/number", params={"sequence": 7, "ticket_type": "Consultation"})
        other = await ac.get(f"{API}/tickets/number", params={"sequence": 12, "ticket_type": "Walk-in"})
    assert consultation.json()["ticket_number"] == "C007"
    assert other.json()["ticket_number"] == "T012"


@pytest.mark.asyncio
async def test_print_config_endpoints(api, backend):
    backend.configuration["print_minutes_after_clinic_end"]["value"] = 20
    async with api as ac:
        before = await ac.get(f"{API}/configuration/print")
        refreshed = await ac.post(f"{API}/configuration/print/refresh")
    assert before.json()["print_minutes_after_clinic_end"] == 10
    assert refreshed.json()["print_minutes_after_clinic_end"] == 20


@pytest.mark.asyncio
async def test_update_schedule_validates_time_order(api, backend):
    backend.schedules = [{**weekly("s1"), "physician": "p1"}]
    async with api as ac:
        reversed_times = await ac.put(f"{API}/schedules/s1", json={"startTime": "11:00", "endTime": "10:00"})
        end_only = await ac.put(f"{API}/schedules/s1", json={"endTime": "11:00"})

    assert reversed_times.status_code == 422
    assert backend.schedules[0]["endTime"] == "11:00"
    assert end_only.status_code == 200
    assert end_only.json()["end_time"] == "11:00"
