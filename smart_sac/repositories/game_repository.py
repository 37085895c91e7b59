"""
Game catalog queries.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from smart_sac.models.game import Game
from smart_sac.repositories.base import BaseRepository


class GameRepository(BaseRepository[Game]):

    def __init__(self, session: Session):
        super().__init__(session, Game)

    def get_by_name(self, name: str) -> Optional[Game]:
        stmt = (
            select(Game)
            .where(Game.name == name.strip().lower())
            .options(selectinload(Game.equipment))
        )
        return self.session.execute(stmt).scalar_one_or_none()
