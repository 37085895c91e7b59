"""
Equipment history queries.

Entries whose `expire_at` has passed are treated as gone even before
the retention sweep physically deletes them.
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import Select, delete, func, select
from sqlalchemy.orm import Session, joinedload

from smart_sac.models.equipment_history import EquipmentHistory
from smart_sac.repositories.base import BaseRepository


class EquipmentHistoryRepository(BaseRepository[EquipmentHistory]):

    def __init__(self, session: Session):
        super().__init__(session, EquipmentHistory)

    def _live(self, stmt: Select, now: datetime) -> Select:
        return stmt.where(EquipmentHistory.expire_at > now)

    def append(self, entry: EquipmentHistory) -> EquipmentHistory:
        self.session.add(entry)
        self.session.flush()
        return entry

    def list_page(
        self,
        *,
        now: datetime,
        equipment_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Sequence[EquipmentHistory]:
        """Newest-first page of live entries, optionally for one item."""
        stmt = self._live(select(EquipmentHistory), now).options(
            joinedload(EquipmentHistory.equipment),
            joinedload(EquipmentHistory.user),
        )
        if equipment_id:
            stmt = stmt.where(EquipmentHistory.equipment_id == equipment_id)
        stmt = stmt.order_by(EquipmentHistory.changed_at.desc()).offset(offset).limit(limit)
        return self.session.execute(stmt).scalars().all()

    def count_live(self, *, now: datetime, equipment_id: Optional[str] = None) -> int:
        stmt = self._live(select(func.count(EquipmentHistory.id)), now)
        if equipment_id:
            stmt = stmt.where(EquipmentHistory.equipment_id == equipment_id)
        return self.session.execute(stmt).scalar_one()

    def list_for_equipment(self, equipment_id: str, *, now: datetime, limit: int) -> Sequence[EquipmentHistory]:
        return self.list_page(now=now, equipment_id=equipment_id, offset=0, limit=limit)

    def purge_expired(self, *, now: datetime, batch_size: int = 500) -> int:
        """Delete expired entries in batches; returns how many were removed."""
        removed = 0
        while True:
            ids = self.session.execute(
                select(EquipmentHistory.id)
                .where(EquipmentHistory.expire_at <= now)
                .limit(batch_size)
            ).scalars().all()
            if not ids:
                break
            result = self.session.execute(
                delete(EquipmentHistory)
                .where(EquipmentHistory.id.in_(ids))
                .execution_options(synchronize_session=False)
            )
            removed += result.rowcount or 0
            if len(ids) < batch_size:
                break
        return removed
