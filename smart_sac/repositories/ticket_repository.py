from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from smart_sac.models.enums import ACTIVE_TICKET_STATUSES, TicketStatus
from smart_sac.models.ticket import Ticket
from smart_sac.repositories.base import BaseRepository


class TicketRepository(BaseRepository[Ticket]):

    def __init__(self, session: Session):
        super().__init__(session, Ticket)

    def latest(self, *, limit: int) -> Sequence[Ticket]:
        stmt = (
            select(Ticket)
            .options(joinedload(Ticket.sender), joinedload(Ticket.equipment))
            .order_by(Ticket.created_at.desc())
            .limit(limit)
        )
        return self.session.execute(stmt).scalars().all()

    def count_active(self) -> int:
        stmt = select(func.count(Ticket.id)).where(Ticket.status.in_(ACTIVE_TICKET_STATUSES))
        return self.session.execute(stmt).scalar_one()

    def count_open_for_sender(self, sender_id: str) -> int:
        stmt = select(func.count(Ticket.id)).where(
            Ticket.sender_id == sender_id,
            Ticket.status == TicketStatus.OPEN,
        )
        return self.session.execute(stmt).scalar_one()
