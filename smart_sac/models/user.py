"""
Student account model.

Only the fields the equipment desk needs are mapped here; credentials
and profile management belong to the accounts service.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smart_sac.models.base import BaseModel
from smart_sac.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from smart_sac.models.equipment import Equipment

__all__ = ["User"]


class User(BaseModel, TimestampMixin):
    """
    Registered student account.

    Attributes:
        fullname: Display name
        email: Unique contact address
        roll_no: Unique institute roll number, the key used at the equipment desk
        phone_number: Optional phone number shown on the student dashboard
    """

    __tablename__ = "users"

    fullname: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    roll_no: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    held_equipment: Mapped[List["Equipment"]] = relationship(
        "Equipment",
        back_populates="user",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, roll_no={self.roll_no})>"
