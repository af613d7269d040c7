from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional

class NamedRef(BaseModel):
    """Speciality, degree or location as populated by the backend."""
    id: Optional[str] = Field(default=None, alias="_id")
    en_name: Optional[str] = None
    ar_name: Optional[str] = None
    name: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @property
    def label(self) -> Optional[str]:
        return self.en_name or self.ar_name or self.name

class Physician(BaseModel):
    id: str = Field(alias="_id")
    name: Optional[str] = None
    code: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    speciality: Optional[NamedRef] = None
    degree: Optional[NamedRef] = None
    is_active: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def normalize_id(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "_id" not in data and "id" in data:
            data["_id"] = data.pop("id")
        if data.get("_id") is not None:
            data["_id"] = str(data["_id"])
        return data

    @field_validator("speciality", "degree", mode="before")
    @classmethod
    def normalize_ref(cls, value):
        # An unpopulated reference arrives as a bare id string
        if isinstance(value, str):
            return {"_id": value}
        return value
