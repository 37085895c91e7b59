"""
Equipment history response schemas.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from smart_sac.models.enums import EquipmentStatus
from smart_sac.schemas.common.base import BaseSchema
from smart_sac.schemas.equipment import EquipmentBrief
from smart_sac.schemas.user import OccupantSummary

__all__ = [
    "EquipmentHistoryResponse",
    "HistoryPage",
    "HistoryCount",
    "RecentHistory",
    "HistoryByEquipment",
    "HistoryQuery",
]


class EquipmentHistoryResponse(BaseSchema):
    """One archived state: what the item looked like before a transition."""

    id: str
    equipment_id: str
    status: EquipmentStatus = Field(..., description="Status the item transitioned out of")
    user_id: Optional[str] = None
    roll_no: Optional[str] = None
    duration: Optional[str] = None
    changed_at: datetime
    expire_at: datetime
    equipment: Optional[EquipmentBrief] = None
    user: Optional[OccupantSummary] = None


class HistoryPage(BaseSchema):
    entries: List[EquipmentHistoryResponse]
    page: int
    total_pages: int
    total: int


class HistoryCount(BaseSchema):
    total_history: int
    total_pages: int


class RecentHistory(BaseSchema):
    history: List[EquipmentHistoryResponse]
    count: int


HistoryByEquipment = Dict[str, List[EquipmentHistoryResponse]]


class HistoryQuery(BaseSchema):
    """Filters for a history listing."""

    equipment_id: Optional[str] = Field(default=None, description="Restrict to one item")
    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
