"""
Append-only audit trail of equipment status transitions.

Each row describes the state an item was in *before* a transition: the
status being left, who held it and for how long. Rows expire three
months after they are written.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smart_sac.models.base import BaseModel
from smart_sac.models.enums import EquipmentStatus, enum_values

if TYPE_CHECKING:
    from smart_sac.models.equipment import Equipment
    from smart_sac.models.user import User

__all__ = ["EquipmentHistory"]


class EquipmentHistory(BaseModel):
    """
    One archived equipment state.

    Attributes:
        equipment_id: Equipment the entry belongs to
        status: Status the equipment was transitioning out of
        user_id: Occupant account before the transition
        roll_no: Occupant roll number before the transition
        duration: Occupied-duration label before the transition
        changed_at: When the transition happened
        expire_at: When the entry becomes eligible for deletion
    """

    __tablename__ = "equipment_history"
    __table_args__ = (
        Index("ix_equipment_history_equipment_changed", "equipment_id", "changed_at"),
        Index("ix_equipment_history_changed_at", "changed_at"),
        Index("ix_equipment_history_expire_at", "expire_at"),
    )

    equipment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("equipment.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[EquipmentStatus] = mapped_column(
        Enum(
            EquipmentStatus,
            name="equipment_history_status_enum",
            values_callable=enum_values,
            native_enum=False,
            create_constraint=True,
            length=20,
        ),
        nullable=False,
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    roll_no: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expire_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    equipment: Mapped["Equipment"] = relationship("Equipment", back_populates="history")
    user: Mapped[Optional["User"]] = relationship("User")

    def __repr__(self) -> str:
        return (
            f"<EquipmentHistory(equipment_id={self.equipment_id}, "
            f"status={self.status}, changed_at={self.changed_at})>"
        )


@event.listens_for(EquipmentHistory, "before_update")
def _reject_history_update(mapper, connection, target):
    raise ValueError("Equipment history entries are immutable")
