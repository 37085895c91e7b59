"""
Read side of the equipment audit trail.
"""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from smart_sac.config.settings import settings
from smart_sac.core.constants import RECENT_HISTORY_LIMIT
from smart_sac.core.exceptions import EquipmentNotFoundError
from smart_sac.core.pagination import count_pages, normalize_pagination
from smart_sac.repositories import EquipmentHistoryRepository, EquipmentRepository
from smart_sac.schemas.equipment_history import (
    EquipmentHistoryResponse,
    HistoryByEquipment,
    HistoryCount,
    HistoryPage,
    RecentHistory,
)
from smart_sac.services.base import BaseService
from smart_sac.utils.datetime_utils import Clock, DateTimeHelper


class EquipmentHistoryService(BaseService):
    """Paged and recent views over live (non-expired) history entries."""

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        page_size: Optional[int] = None,
    ):
        super().__init__(db_session)
        self.history_repo = EquipmentHistoryRepository(db_session)
        self.equipment_repo = EquipmentRepository(db_session)
        self.clock: Clock = clock or DateTimeHelper.utcnow
        self.page_size = page_size or settings.HISTORY_PAGE_SIZE

    def _ensure_equipment(self, equipment_id: str) -> None:
        if self.equipment_repo.get(equipment_id) is None:
            raise EquipmentNotFoundError(equipment_id)

    def list_history(self, equipment_id: Optional[str] = None, page: int = 1) -> HistoryPage:
        """
        One page of history, newest first.

        Args:
            equipment_id: Restrict to one item (must exist)
            page: 1-based page number

        Returns:
            HistoryPage with entries and page totals
        """
        if equipment_id:
            self._ensure_equipment(equipment_id)

        params = normalize_pagination(page, self.page_size)
        now = self.clock()
        total = self.history_repo.count_live(now=now, equipment_id=equipment_id)
        entries = self.history_repo.list_page(
            now=now,
            equipment_id=equipment_id,
            offset=params.offset,
            limit=params.limit,
        )
        return HistoryPage(
            entries=[EquipmentHistoryResponse.model_validate(e) for e in entries],
            page=params.page,
            total_pages=count_pages(total, params.page_size),
            total=total,
        )

    def count_history(self, equipment_id: str) -> HistoryCount:
        self._ensure_equipment(equipment_id)
        total = self.history_repo.count_live(now=self.clock(), equipment_id=equipment_id)
        return HistoryCount(total_history=total, total_pages=count_pages(total, self.page_size))

    def recent_history(self, limit: int = RECENT_HISTORY_LIMIT) -> RecentHistory:
        entries = self.history_repo.list_page(now=self.clock(), offset=0, limit=limit)
        history = [EquipmentHistoryResponse.model_validate(e) for e in entries]
        return RecentHistory(history=history, count=len(history))

    def recent_history_by_equipment(self, limit: int = RECENT_HISTORY_LIMIT) -> HistoryByEquipment:
        """Newest `limit` entries for every item, keyed by equipment name."""
        now = self.clock()
        grouped: Dict[str, List[EquipmentHistoryResponse]] = {}
        for equipment in self.equipment_repo.list_all():
            entries = self.history_repo.list_for_equipment(equipment.id, now=now, limit=limit)
            grouped[equipment.name] = [EquipmentHistoryResponse.model_validate(e) for e in entries]
        return grouped
