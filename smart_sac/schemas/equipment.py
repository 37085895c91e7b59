"""
Equipment request and response schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from smart_sac.core.constants import OCCUPANT_FIELD_MAX_LENGTH
from smart_sac.models.enums import EquipmentStatus
from smart_sac.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from smart_sac.schemas.user import OccupantSummary

__all__ = [
    "EquipmentStatusUpdate",
    "EquipmentCreate",
    "EquipmentResponse",
    "EquipmentWithOccupant",
    "EquipmentBrief",
    "EquipmentUpdateResult",
]


class EquipmentStatusUpdate(BaseCreateSchema):
    """
    Input for a lifecycle transition.

    `roll_no` and `duration` are required when moving an item into use.
    """

    equipment_id: str = Field(..., min_length=1, description="Equipment to transition")
    status: EquipmentStatus = Field(..., description="Target status")
    roll_no: Optional[str] = Field(default=None, max_length=OCCUPANT_FIELD_MAX_LENGTH, description="Occupant roll number")
    duration: Optional[str] = Field(default=None, max_length=OCCUPANT_FIELD_MAX_LENGTH, description="Occupied-duration label")

    @field_validator("roll_no", "duration")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def require_occupancy_for_in_use(self) -> "EquipmentStatusUpdate":
        if self.status == EquipmentStatus.IN_USE:
            missing = [name for name in ("roll_no", "duration") if getattr(self, name) is None]
            if missing:
                raise ValueError(f"{' and '.join(missing)} required for in-use status")
        return self


class EquipmentCreate(BaseCreateSchema):
    game_name: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=100)


class EquipmentBrief(BaseSchema):
    id: str
    name: str
    status: EquipmentStatus


class EquipmentResponse(BaseResponseSchema):
    name: str
    status: EquipmentStatus
    user_id: Optional[str] = None
    roll_no: Optional[str] = None
    duration: Optional[str] = None
    game_id: Optional[str] = None
    version: int


class EquipmentWithOccupant(EquipmentResponse):
    user: Optional[OccupantSummary] = None


class EquipmentUpdateResult(BaseSchema):
    """Outcome of a lifecycle transition."""

    equipment: EquipmentResponse
    was_registered: bool = Field(
        ...,
        description="True when the occupant hint matched a registered account",
    )
    occupant: Optional[OccupantSummary] = None
    changed_at: Optional[datetime] = None
