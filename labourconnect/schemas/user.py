"""
labourconnect/schemas/user.py

Purpose: User payload schemas

- Registration and profile-edit requests
- Verified identity returned by the OTP flow
- Field names are camelCase on the wire and in Mongo documents
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from utils.constants import (
    EXPERIENCE_BRACKETS,
    PROFESSIONS,
    MSG_ADDRESS_REQUIRED,
    MSG_AREA_REQUIRED,
    MSG_INVALID_MOBILE,
    MSG_PROFESSION_REQUIRED,
)
from utils.validation_utils import sanitize_input, validate_indian_mobile, validate_pincode


class UserType(str, Enum):
    WORKER = "worker"
    PROFESSIONAL = "professional"
    CUSTOMER = "customer"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class WorkerFieldsMixin(CamelModel):
    """
    Professional details shared by worker/professional users and added workers.
    """
    profession: Optional[str] = None
    experience: Optional[str] = None
    daily_rate: Optional[int] = Field(default=None, ge=0)
    age: Optional[int] = Field(default=None, ge=0, le=120)
    skills: Optional[str] = None
    address: Optional[str] = None
    area: Optional[str] = None
    pincode: Optional[str] = None

    @field_validator("profession", "experience", "daily_rate", "age", "pincode", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("skills", "address", "area", mode="before")
    @classmethod
    def clean_text(cls, v):
        v = _blank_to_none(v)
        return sanitize_input(v) if v is not None else None

    @field_validator("profession")
    @classmethod
    def known_profession(cls, v):
        if v is not None and v not in PROFESSIONS:
            raise ValueError(MSG_PROFESSION_REQUIRED)
        return v

    @field_validator("experience")
    @classmethod
    def known_experience(cls, v):
        if v is not None and v not in EXPERIENCE_BRACKETS:
            raise ValueError("Please select a valid experience range")
        return v

    @field_validator("pincode")
    @classmethod
    def valid_pincode(cls, v):
        if not validate_pincode(v):
            raise ValueError("Pincode must be 6 digits")
        return v


class RegistrationRequest(WorkerFieldsMixin):
    """
    Registration form. Customers only need name and mobile; workers and
    professionals must also give profession, address and area.
    """
    full_name: str = Field(..., min_length=1)
    mobile: str
    user_type: UserType = UserType.WORKER

    @field_validator("full_name", mode="before")
    @classmethod
    def clean_name(cls, v):
        return sanitize_input(v) if isinstance(v, str) else v

    @field_validator("mobile", mode="before")
    @classmethod
    def valid_mobile(cls, v):
        v = (v or "").strip() if isinstance(v, str) else v
        if not isinstance(v, str) or not validate_indian_mobile(v):
            raise ValueError(MSG_INVALID_MOBILE)
        return v

    @model_validator(mode="after")
    def require_worker_fields(self):
        if self.user_type != UserType.CUSTOMER:
            if not self.profession:
                raise ValueError(MSG_PROFESSION_REQUIRED)
            if not self.address:
                raise ValueError(MSG_ADDRESS_REQUIRED)
            if not self.area:
                raise ValueError(MSG_AREA_REQUIRED)
        return self


class ProfileUpdate(WorkerFieldsMixin):
    """
    Profile edit form. The mobile number is not editable.
    """
    full_name: Optional[str] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def clean_name(cls, v):
        v = _blank_to_none(v)
        return sanitize_input(v) if v is not None else None


class Identity(CamelModel):
    """
    Minimal identity fields yielded by a successful code verification.
    """
    uid: str
    phone_number: str
    email: Optional[str] = None
    display_name: Optional[str] = None
