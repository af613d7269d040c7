from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Optional

class ConfigurationEntry(BaseModel):
    key: str
    value: Any = None
    description: Optional[str] = ""
    category: str = "system"  # system, printing, scheduling, notifications, security
    data_type: str = "string"
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PrintConfigResponse(BaseModel):
    key: str
    print_minutes_after_clinic_end: int
    refresh_interval_seconds: int
