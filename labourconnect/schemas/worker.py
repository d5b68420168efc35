"""
labourconnect/schemas/worker.py

Purpose: Worker payload schemas

- Workers added by a professional
- Worker edits from the professional dashboard
- Worker directory search filters
"""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from labourconnect.schemas.user import CamelModel, WorkerFieldsMixin, _blank_to_none
from utils.constants import MSG_INVALID_MOBILE, MSG_PROFESSION_REQUIRED
from utils.validation_utils import sanitize_input, validate_indian_mobile


class WorkerCreate(WorkerFieldsMixin):
    """
    Add-worker form on the professional dashboard.
    """
    full_name: str = Field(..., min_length=1)
    mobile: str

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
    def profession_required(self):
        if not self.profession:
            raise ValueError(MSG_PROFESSION_REQUIRED)
        return self


class WorkerUpdate(WorkerFieldsMixin):
    full_name: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def clean_name(cls, v):
        v = _blank_to_none(v)
        return sanitize_input(v) if v is not None else None


class WorkerSearch(CamelModel):
    """
    Directory filters. area/profession are equality filters handled by the
    database; experience, rate range and verified-only are applied in memory.
    """
    area: Optional[str] = None
    profession: Optional[str] = None
    experience: Optional[str] = None
    min_rate: Optional[int] = Field(default=None, ge=0)
    max_rate: Optional[int] = Field(default=None, ge=0)
    verified_only: bool = False

    @field_validator("area", "profession", "experience", "min_rate", "max_rate", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        v = _blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    def server_filters(self) -> Dict[str, Any]:
        """Sparse equality filter record for list_workers()."""
        filters: Dict[str, Any] = {"isActive": True}
        if self.area:
            filters["area"] = self.area
        if self.profession:
            filters["profession"] = self.profession
        return filters
