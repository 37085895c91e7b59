"""
Equipment record queries.

Soft-deleted equipment is invisible to every method unless a caller
explicitly asks for it.
"""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from smart_sac.models.equipment import Equipment
from smart_sac.repositories.base import BaseRepository


class EquipmentRepository(BaseRepository[Equipment]):

    def __init__(self, session: Session):
        super().__init__(session, Equipment)

    def get_by_name(self, name: str, *, include_deleted: bool = False) -> Optional[Equipment]:
        stmt = select(Equipment).where(Equipment.name == name.strip().lower())
        if not include_deleted:
            stmt = stmt.where(Equipment.is_deleted.is_(False))
        return self.session.execute(stmt).scalar_one_or_none()

    def list_all(self, *, with_occupants: bool = False) -> Sequence[Equipment]:
        stmt = self._base_select().order_by(Equipment.name)
        if with_occupants:
            stmt = stmt.options(selectinload(Equipment.user))
        return self.session.execute(stmt).scalars().all()

    def list_held_by(self, user_id: str) -> Sequence[Equipment]:
        stmt = self._base_select().where(Equipment.user_id == user_id).order_by(Equipment.name)
        return self.session.execute(stmt).scalars().all()

    def save(self, equipment: Equipment) -> Equipment:
        """Flush pending changes; the version check runs here."""
        self.session.add(equipment)
        self.session.flush()
        return equipment
