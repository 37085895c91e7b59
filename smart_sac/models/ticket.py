"""
Complaint ticket raised by a student, optionally about an equipment item.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smart_sac.models.base import BaseModel
from smart_sac.models.enums import TicketStatus, enum_values
from smart_sac.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from smart_sac.models.equipment import Equipment
    from smart_sac.models.user import User

__all__ = ["Ticket"]


class Ticket(BaseModel, TimestampMixin):
    __tablename__ = "tickets"
    __table_args__ = (
        Index("ix_tickets_sender_status", "sender_id", "status"),
    )

    heading: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    footer: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    equipment_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("equipment.id", ondelete="SET NULL"),
        nullable=True,
    )
    sender_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[TicketStatus] = mapped_column(
        Enum(
            TicketStatus,
            name="ticket_status_enum",
            values_callable=enum_values,
            native_enum=False,
            create_constraint=True,
            length=20,
        ),
        nullable=False,
        default=TicketStatus.OPEN,
        index=True,
    )

    sender: Mapped["User"] = relationship("User")
    equipment: Mapped[Optional["Equipment"]] = relationship("Equipment")
