"""
Dashboard aggregation for the admin and student home screens.

Each section is fetched on its own worker thread with its own session.
A section that fails is reported in `unavailable` and the remaining
sections are still returned.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from smart_sac.config.settings import settings
from smart_sac.core.constants import (
    DASHBOARD_ANNOUNCEMENT_LIMIT,
    DASHBOARD_HISTORY_LIMIT,
    DASHBOARD_TICKET_LIMIT,
)
from smart_sac.core.exceptions import UserNotFoundError
from smart_sac.core.logging import get_logger
from smart_sac.db.session import Database
from smart_sac.repositories import (
    AnnouncementRepository,
    EquipmentHistoryRepository,
    EquipmentRepository,
    TicketRepository,
    UserRepository,
)
from smart_sac.schemas.dashboard import (
    AdminDashboard,
    AnnouncementResponse,
    StudentDashboard,
    TicketSummary,
)
from smart_sac.schemas.equipment import EquipmentResponse, EquipmentWithOccupant
from smart_sac.schemas.equipment_history import EquipmentHistoryResponse
from smart_sac.utils.datetime_utils import Clock, DateTimeHelper

Section = Callable[[Session], Any]


class DashboardService:
    """
    Concurrent dashboard fan-out.

    Args:
        database: Persistence handle; every section opens its own session
        clock: Source of "now" for expiry filtering
        max_workers: Upper bound on concurrent section fetches
    """

    def __init__(
        self,
        database: Database,
        clock: Optional[Clock] = None,
        max_workers: Optional[int] = None,
    ):
        self.database = database
        self.clock: Clock = clock or DateTimeHelper.utcnow
        self.max_workers = max_workers or settings.DASHBOARD_MAX_WORKERS
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Fan-out
    # -------------------------------------------------------------------------

    def _fetch(self, section: Section) -> Any:
        with self.database.session() as db:
            return section(db)

    def _gather(self, sections: Dict[str, Section]) -> Tuple[Dict[str, Any], List[str]]:
        results: Dict[str, Any] = {}
        unavailable: List[str] = []

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="dashboard") as pool:
            futures = {pool.submit(self._fetch, fn): name for name, fn in sections.items()}
            for future in as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as e:
                    self._logger.error(
                        f"Dashboard section '{name}' failed: {e}",
                        exc_info=True,
                        extra={"section": name},
                    )
                    unavailable.append(name)

        return results, sorted(unavailable)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _all_equipment(self, db: Session) -> List[EquipmentResponse]:
        return [EquipmentResponse.model_validate(e) for e in EquipmentRepository(db).list_all()]

    def _equipment_with_occupants(self, db: Session) -> List[EquipmentWithOccupant]:
        items = EquipmentRepository(db).list_all(with_occupants=True)
        return [EquipmentWithOccupant.model_validate(e) for e in items]

    def _latest_announcements(self, db: Session) -> List[AnnouncementResponse]:
        items = AnnouncementRepository(db).latest_active(
            now=self.clock(), limit=DASHBOARD_ANNOUNCEMENT_LIMIT
        )
        return [AnnouncementResponse.model_validate(a) for a in items]

    def _latest_tickets(self, db: Session) -> List[TicketSummary]:
        items = TicketRepository(db).latest(limit=DASHBOARD_TICKET_LIMIT)
        return [TicketSummary.model_validate(t) for t in items]

    def _active_ticket_count(self, db: Session) -> int:
        return TicketRepository(db).count_active()

    def _latest_history(self, db: Session) -> List[EquipmentHistoryResponse]:
        items = EquipmentHistoryRepository(db).list_page(
            now=self.clock(), offset=0, limit=DASHBOARD_HISTORY_LIMIT
        )
        return [EquipmentHistoryResponse.model_validate(h) for h in items]

    # -------------------------------------------------------------------------
    # Dashboards
    # -------------------------------------------------------------------------

    def admin_dashboard(self) -> AdminDashboard:
        results, unavailable = self._gather({
            "equipment": self._all_equipment,
            "announcements": self._latest_announcements,
            "tickets": self._latest_tickets,
            "equipment_history": self._latest_history,
            "active_ticket_count": self._active_ticket_count,
        })
        return AdminDashboard(
            equipment=results.get("equipment", []),
            announcements=results.get("announcements", []),
            tickets=results.get("tickets", []),
            equipment_history=results.get("equipment_history", []),
            active_ticket_count=results.get("active_ticket_count"),
            unavailable=unavailable,
        )

    def student_dashboard(self, user_id: str) -> StudentDashboard:
        """
        Home screen for one student.

        Raises:
            UserNotFoundError: No account with that ID
        """
        with self.database.session() as db:
            if UserRepository(db).get(user_id) is None:
                raise UserNotFoundError(user_id)

        def open_tickets(db: Session) -> int:
            return TicketRepository(db).count_open_for_sender(user_id)

        def booked_items(db: Session) -> List[EquipmentResponse]:
            return [EquipmentResponse.model_validate(e) for e in EquipmentRepository(db).list_held_by(user_id)]

        results, unavailable = self._gather({
            "equipment": self._equipment_with_occupants,
            "announcements": self._latest_announcements,
            "open_tickets": open_tickets,
            "booked_items": booked_items,
        })
        return StudentDashboard(
            equipment=results.get("equipment", []),
            announcements=results.get("announcements", []),
            open_tickets=results.get("open_tickets"),
            booked_items=results.get("booked_items", []),
            unavailable=unavailable,
        )
