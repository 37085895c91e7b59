# smart_sac/models/__init__.py
"""
SQLAlchemy models. Importing this package registers every table on
`Base.metadata`.
"""

from smart_sac.models.base import Base, BaseModel
from smart_sac.models.enums import ACTIVE_TICKET_STATUSES, EquipmentStatus, TicketStatus
from smart_sac.models.user import User
from smart_sac.models.game import Game
from smart_sac.models.equipment import Equipment
from smart_sac.models.equipment_history import EquipmentHistory
from smart_sac.models.announcement import Announcement
from smart_sac.models.ticket import Ticket

__all__ = [
    "Base",
    "BaseModel",
    "ACTIVE_TICKET_STATUSES",
    "EquipmentStatus",
    "TicketStatus",
    "User",
    "Game",
    "Equipment",
    "EquipmentHistory",
    "Announcement",
    "Ticket",
]
