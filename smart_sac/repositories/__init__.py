from smart_sac.repositories.base import BaseRepository
from smart_sac.repositories.announcement_repository import AnnouncementRepository
from smart_sac.repositories.equipment_history_repository import EquipmentHistoryRepository
from smart_sac.repositories.equipment_repository import EquipmentRepository
from smart_sac.repositories.game_repository import GameRepository
from smart_sac.repositories.ticket_repository import TicketRepository
from smart_sac.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "AnnouncementRepository",
    "EquipmentHistoryRepository",
    "EquipmentRepository",
    "GameRepository",
    "TicketRepository",
    "UserRepository",
]
