"""
Account directory lookups used by the equipment desk.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from smart_sac.models.user import User
from smart_sac.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, session: Session):
        super().__init__(session, User)

    def find_by_roll_no(self, roll_no: Optional[str]) -> Optional[User]:
        """Resolve an occupant hint (roll number) to a registered account."""
        if not roll_no or not roll_no.strip():
            return None
        stmt = select(User).where(User.roll_no == roll_no.strip())
        return self.session.execute(stmt).scalar_one_or_none()
