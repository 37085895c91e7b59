"""
Announcement posted by the SAC admins; read by the dashboards.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from smart_sac.config.settings import settings
from smart_sac.models.base import BaseModel
from smart_sac.models.mixins import TimestampMixin
from smart_sac.utils.datetime_utils import DateTimeHelper

__all__ = ["Announcement"]


def _default_expiry() -> datetime:
    return DateTimeHelper.add_days(DateTimeHelper.utcnow(), settings.ANNOUNCEMENT_DEFAULT_TTL_DAYS)


class Announcement(BaseModel, TimestampMixin):
    __tablename__ = "announcements"

    heading: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    footer: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    expire_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_default_expiry,
        index=True,
    )
