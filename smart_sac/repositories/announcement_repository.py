from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from smart_sac.models.announcement import Announcement
from smart_sac.repositories.base import BaseRepository


class AnnouncementRepository(BaseRepository[Announcement]):

    def __init__(self, session: Session):
        super().__init__(session, Announcement)

    def latest_active(self, *, now: datetime, limit: int) -> Sequence[Announcement]:
        stmt = (
            select(Announcement)
            .where(Announcement.expire_at > now)
            .order_by(Announcement.created_at.desc())
            .limit(limit)
        )
        return self.session.execute(stmt).scalars().all()
