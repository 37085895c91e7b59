"""
Game catalog entry grouping the equipment used to play it.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from smart_sac.models.base import BaseModel
from smart_sac.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from smart_sac.models.equipment import Equipment

__all__ = ["Game"]


class Game(BaseModel, TimestampMixin):
    """
    A game offered at the activity center.

    Removing a game hard-deletes its equipment (and, through the
    equipment, their history).
    """

    __tablename__ = "games"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    equipment: Mapped[List["Equipment"]] = relationship(
        "Equipment",
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Equipment.name",
    )

    @validates("name")
    def _normalize_name(self, key, value):
        return value.strip().lower() if value else value

    def __repr__(self) -> str:
        return f"<Game(name={self.name})>"
