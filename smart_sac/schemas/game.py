from typing import List

from pydantic import Field

from smart_sac.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from smart_sac.schemas.equipment import EquipmentResponse

__all__ = ["GameCreate", "GameResponse", "EquipmentAdded", "EquipmentRemoved"]


class GameCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)


class GameResponse(BaseResponseSchema):
    name: str
    equipment: List[EquipmentResponse] = Field(default_factory=list)


class EquipmentAdded(BaseSchema):
    equipment: EquipmentResponse
    game: GameResponse


class EquipmentRemoved(BaseSchema):
    game: GameResponse
    removed_equipment: EquipmentResponse
