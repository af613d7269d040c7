from datetime import date
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.logger import logger
from app.schemas.configuration import ConfigurationEntry
from app.schemas.doctor import Physician
from app.schemas.schedule import ClinicAssignment, TodayScheduleInstance, WeeklySchedule


class BackendClient:
    """
    REST client for the schedule backend.

    Every list is parsed into the normalised schemas here, so callers never
    see the "populated object or bare id" variants the backend returns.
    """

    def __init__(self, base_url: str = settings.BACKEND_API_URL, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _get_data(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        body = _decode(response)
        if not body.get("success", True):
            raise httpx.HTTPStatusError(
                f"Backend reported failure for {path}: {body.get('message')}",
                request=response.request,
                response=response,
            )
        return body.get("data")

    async def list_schedules(self, physician_id: Optional[str] = None, active: Optional[bool] = None) -> List[WeeklySchedule]:
        params = {}
        if physician_id:
            params["physician"] = physician_id
        if active is not None:
            params["active"] = "true" if active else "false"
        data = await self._get_data("/physician-schedules", params=params or None)
        return [WeeklySchedule.model_validate(item) for item in data or []]

    async def get_schedule(self, schedule_id: str) -> Optional[WeeklySchedule]:
        try:
            data = await self._get_data(f"/physician-schedules/{schedule_id}")
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return WeeklySchedule.model_validate(data) if data else None

    async def create_schedule(self, payload: Dict[str, Any]) -> WeeklySchedule:
        response = await self.client.post("/physician-schedules", json=payload)
        response.raise_for_status()
        return _schedule_from(response)

    async def update_schedule(self, schedule_id: str, payload: Dict[str, Any]) -> WeeklySchedule:
        response = await self.client.put(f"/physician-schedules/{schedule_id}", json=payload)
        response.raise_for_status()
        return _schedule_from(response)

    async def list_physicians(self) -> Dict[str, Physician]:
        data = await self._get_data("/doctors")
        physicians = [Physician.model_validate(item) for item in data or []]
        return {physician.id: physician for physician in physicians}

    async def list_today_schedules(self, target_date: date) -> List[TodayScheduleInstance]:
        data = await self._get_data("/today-physician-schedules", params={"date": target_date.isoformat()})
        instances = []
        for item in data or []:
            try:
                instances.append(_today_from_backend(item))
            except (KeyError, ValueError) as exc:
                logger.warning(f"Skipping malformed today schedule {item.get('_id')}: {exc}")
        return instances

    async def list_clinic_assignments(self) -> Dict[str, ClinicAssignment]:
        data = await self._get_data("/physician-clinic-assignments")
        assignments = {}
        for item in data or []:
            if not item.get("physicianSchedule"):
                continue
            assignment = _assignment_from_backend(item)
            if assignment.is_active:
                assignments[assignment.schedule_id] = assignment
        return assignments

    async def get_configuration(self, key: str) -> Optional[ConfigurationEntry]:
        try:
            data = await self._get_data(f"/configuration/{key}")
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return None
            raise
        return ConfigurationEntry.model_validate(data) if data else None

    async def close(self):
        await self.client.aclose()


def _decode(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise httpx.DecodingError(
            f"Backend returned a non-JSON body for {response.request.url.path}",
            request=response.request,
        ) from exc
    if not isinstance(body, dict):
        raise httpx.DecodingError(
            f"Unexpected backend response for {response.request.url.path}",
            request=response.request,
        )
    return body


def _schedule_from(response: httpx.Response) -> WeeklySchedule:
    try:
        return WeeklySchedule.model_validate(_decode(response).get("data"))
    except ValidationError as exc:
        raise httpx.DecodingError(
            f"Malformed schedule from {response.request.url.path}: {exc.error_count()} error(s)",
            request=response.request,
        ) from exc


def _ref_id(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("_id")
    return str(value) if value is not None else None


def _today_from_backend(item: Dict[str, Any]) -> TodayScheduleInstance:
    # The precomputed collection stores capitalised day names and full timestamps
    return TodayScheduleInstance(
        source_schedule_id=_ref_id(item.get("scheduleId")),
        physician_id=_ref_id(item["physicianId"]),
        physician_name=item.get("physicianName") or "Unknown Physician",
        speciality=item.get("speciality") or "N/A",
        degree=item.get("degree") or "N/A",
        clinic_time_from=item["clinicTimeFrom"],
        clinic_time_to=item["clinicTimeTo"],
        day=str(item["day"]).lower(),
        date=str(item["date"]).split("T", 1)[0],
        clinic_assignment=ClinicAssignment(
            schedule_id=_ref_id(item.get("scheduleId")) or str(item.get("_id")),
            clinic_name=item.get("clinicName"),
            clinic_code=item.get("clinicCode"),
            location=item.get("location"),
        ) if item.get("clinicName") else None,
    )


def _assignment_from_backend(item: Dict[str, Any]) -> ClinicAssignment:
    clinic = item.get("clinic")
    clinic_name = None
    clinic_code = None
    location = None
    if isinstance(clinic, dict):
        clinic_name = clinic.get("enName") or clinic.get("arName") or clinic.get("name")
        clinic_code = clinic.get("code")
        loc = clinic.get("location")
        if isinstance(loc, dict):
            location = loc.get("enName") or loc.get("arName") or loc.get("name")
        elif loc:
            location = str(loc)
    return ClinicAssignment(
        schedule_id=_ref_id(item.get("physicianSchedule")),
        clinic_id=_ref_id(clinic),
        clinic_name=clinic_name,
        clinic_code=clinic_code,
        location=location,
        is_active=item.get("isActive", True) is not False,
    )
