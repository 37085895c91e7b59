"""
Dashboard payloads. Sections that failed to load are listed in
`unavailable` and left empty.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from smart_sac.models.enums import TicketStatus
from smart_sac.schemas.common.base import BaseSchema
from smart_sac.schemas.equipment import EquipmentBrief, EquipmentResponse, EquipmentWithOccupant
from smart_sac.schemas.equipment_history import EquipmentHistoryResponse
from smart_sac.schemas.user import OccupantSummary

__all__ = [
    "AnnouncementResponse",
    "TicketSummary",
    "AdminDashboard",
    "StudentDashboard",
]


class AnnouncementResponse(BaseSchema):
    id: str
    heading: str
    content: str
    footer: str = ""
    created_at: datetime
    expire_at: datetime


class TicketSummary(BaseSchema):
    id: str
    heading: str
    content: str
    status: TicketStatus
    created_at: datetime
    sender: Optional[OccupantSummary] = None
    equipment: Optional[EquipmentBrief] = None


class AdminDashboard(BaseSchema):
    equipment: List[EquipmentResponse] = Field(default_factory=list)
    announcements: List[AnnouncementResponse] = Field(default_factory=list)
    tickets: List[TicketSummary] = Field(default_factory=list)
    equipment_history: List[EquipmentHistoryResponse] = Field(default_factory=list)
    active_ticket_count: Optional[int] = None
    unavailable: List[str] = Field(default_factory=list)


class StudentDashboard(BaseSchema):
    equipment: List[EquipmentWithOccupant] = Field(default_factory=list)
    announcements: List[AnnouncementResponse] = Field(default_factory=list)
    open_tickets: Optional[int] = None
    booked_items: List[EquipmentResponse] = Field(default_factory=list)
    unavailable: List[str] = Field(default_factory=list)
