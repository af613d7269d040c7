from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Any, List, Optional

from app.core.utils import DAY_NAMES, parse_clock

def _reference_id(value: Any) -> Optional[str]:
    # Populated documents carry "_id", bare references are the id itself
    if value is None:
        return None
    if isinstance(value, dict):
        ref = value.get("_id") or value.get("id")
        return str(ref) if ref is not None else None
    return str(value)

def _to_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value

class ScheduleBase(BaseModel):
    days: List[str] = []
    start_date: Optional[date] = None
    start_time: str
    end_time: str
    notes: Optional[str] = None
    max_patients: Optional[int] = None
    appointment_duration: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("days", mode="before")
    @classmethod
    def lower_days(cls, value):
        if value is None:
            return []
        return [str(day).strip().lower() for day in value]

    @field_validator("start_date", mode="before")
    @classmethod
    def date_only(cls, value):
        return _to_date(value)

class WeeklySchedule(ScheduleBase):
    """
    One recurring assignment of a physician to working days and hours,
    as listed by the schedule backend.
    """
    id: str = Field(alias="_id")
    physician_id: str
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def normalize_references(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "_id" not in data and "id" in data:
            data["_id"] = data.pop("id")
        if data.get("_id") is not None:
            data["_id"] = str(data["_id"])
        if "physician_id" not in data:
            physician = data.pop("physician", None)
            physician_id = data.pop("physicianId", None)
            data["physician_id"] = _reference_id(physician if physician is not None else physician_id)
        # Mongo documents send null for unset flags
        if data.get("isActive", data.get("is_active", True)) is None:
            data.pop("isActive", None)
            data.pop("is_active", None)
        return data

    @property
    def time_range(self) -> str:
        return f"{self.start_time} - {self.end_time}"

    @property
    def formatted_days(self) -> str:
        return ", ".join(day.capitalize() for day in self.days)

class ScheduleCreate(ScheduleBase):
    physician_id: str
    start_date: date

    @field_validator("days")
    @classmethod
    def validate_days(cls, value):
        if not value:
            raise ValueError("Days must be a non-empty array")
        unknown = [day for day in value if day not in DAY_NAMES]
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value):
        parse_clock(value)
        return value.strip()

    @model_validator(mode="after")
    def check_time_order(self):
        if parse_clock(self.start_time) >= parse_clock(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

class ScheduleUpdate(BaseModel):
    physician_id: Optional[str] = None
    days: Optional[List[str]] = None
    start_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("days", mode="before")
    @classmethod
    def lower_days(cls, value):
        if value is None:
            return None
        days = [str(day).strip().lower() for day in value]
        if not days:
            raise ValueError("Days must be a non-empty array")
        unknown = [day for day in days if day not in DAY_NAMES]
        if unknown:
            raise ValueError(f"Unknown weekday(s): {', '.join(unknown)}")
        return days

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value):
        if value is not None:
            parse_clock(value)
            return value.strip()
        return value

    @model_validator(mode="after")
    def check_time_order(self):
        if self.start_time and self.end_time and parse_clock(self.start_time) >= parse_clock(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

class ClinicAssignment(BaseModel):
    schedule_id: str
    clinic_id: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_code: Optional[str] = None
    location: Optional[str] = None
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class TodayScheduleInstance(BaseModel):
    source_schedule_id: Optional[str] = None
    physician_id: str
    physician_name: str
    speciality: str
    degree: str
    clinic_time_from: str
    clinic_time_to: str
    day: str
    date: date
    clinic_assignment: Optional[ClinicAssignment] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class ScheduleStats(BaseModel):
    total: int
    active: int
    inactive: int

class OverlapCheckRequest(BaseModel):
    candidate: ScheduleCreate
    existing: List[WeeklySchedule] = []

class OverlapCheckResponse(BaseModel):
    has_overlap: bool
    conflicts: List[str] = []
