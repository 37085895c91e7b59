"""
Equipment record: one row per physical item with its current occupancy.

Only the lifecycle service changes status, occupant and duration; every
such change is paired with an EquipmentHistory row in the same transaction.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from smart_sac.models.base import BaseModel
from smart_sac.models.enums import EquipmentStatus, enum_values
from smart_sac.models.mixins import SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from smart_sac.models.equipment_history import EquipmentHistory
    from smart_sac.models.game import Game
    from smart_sac.models.user import User

__all__ = ["Equipment"]


class Equipment(BaseModel, TimestampMixin, SoftDeleteMixin):
    """
    Physical equipment item.

    Attributes:
        name: Unique, lower-cased item name (e.g. "snooker-table")
        status: Current status; exactly one of available, in-use, broken
        user_id: Occupant account, only while in-use and resolved
        roll_no: Occupant roll number, only while in-use
        duration: Occupied-duration label, only while in-use
        game_id: Owning game
        version: Optimistic concurrency counter, bumped on every update
    """

    __tablename__ = "equipment"
    __table_args__ = (
        Index("ix_equipment_status", "status"),
        Index("ix_equipment_user_id", "user_id"),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    status: Mapped[EquipmentStatus] = mapped_column(
        Enum(
            EquipmentStatus,
            name="equipment_status_enum",
            values_callable=enum_values,
            native_enum=False,
            create_constraint=True,
            length=20,
        ),
        nullable=False,
        default=EquipmentStatus.AVAILABLE,
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    roll_no: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    game_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    user: Mapped[Optional["User"]] = relationship("User", back_populates="held_equipment")
    game: Mapped[Optional["Game"]] = relationship("Game", back_populates="equipment")
    history: Mapped[List["EquipmentHistory"]] = relationship(
        "EquipmentHistory",
        back_populates="equipment",
        cascade="all, delete-orphan",
    )

    @validates("name")
    def _normalize_name(self, key, value):
        return value.strip().lower() if value else value

    def __repr__(self) -> str:
        return f"<Equipment(name={self.name}, status={self.status})>"
