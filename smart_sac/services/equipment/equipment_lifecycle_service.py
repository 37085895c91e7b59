"""
Equipment lifecycle: the only code path that changes an item's status.

Every transition archives the item's outgoing state as an EquipmentHistory
row and applies the new state in the same database transaction.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from smart_sac.config.settings import settings
from smart_sac.core.constants import OCCUPANT_FIELD_MAX_LENGTH
from smart_sac.core.exceptions import (
    ConflictError,
    EquipmentNotFoundError,
    PersistenceError,
    create_validation_error,
)
from smart_sac.models.enums import EquipmentStatus
from smart_sac.models.equipment import Equipment
from smart_sac.models.equipment_history import EquipmentHistory
from smart_sac.repositories import EquipmentHistoryRepository, EquipmentRepository, UserRepository
from smart_sac.schemas.equipment import EquipmentResponse, EquipmentUpdateResult
from smart_sac.schemas.user import OccupantSummary
from smart_sac.services.base import BaseService
from smart_sac.utils.datetime_utils import Clock, DateTimeHelper


@dataclass
class TransitionOutcome:
    """Result of a status transition."""

    equipment: Equipment
    was_registered: bool
    occupant: Optional[OccupantSummary]
    history_entry: EquipmentHistory
    changed_at: datetime

    def to_schema(self) -> EquipmentUpdateResult:
        return EquipmentUpdateResult(
            equipment=EquipmentResponse.model_validate(self.equipment),
            was_registered=self.was_registered,
            occupant=self.occupant,
            changed_at=self.changed_at,
        )


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class EquipmentLifecycleService(BaseService):
    """
    Moves equipment between available, in-use and broken.

    Args:
        db_session: Session owning the transaction
        clock: Source of "now" for history timestamps
        retention_months: Lifetime of history entries
    """

    def __init__(
        self,
        db_session: Session,
        clock: Optional[Clock] = None,
        retention_months: Optional[int] = None,
    ):
        super().__init__(db_session)
        self.equipment_repo = EquipmentRepository(db_session)
        self.history_repo = EquipmentHistoryRepository(db_session)
        self.user_repo = UserRepository(db_session)
        self.clock: Clock = clock or DateTimeHelper.utcnow
        self.retention_months = (
            settings.HISTORY_RETENTION_MONTHS if retention_months is None else retention_months
        )

    def _validate(
        self,
        equipment_id: Optional[str],
        new_status: Union[EquipmentStatus, str, None],
        occupant_hint: Optional[str],
        duration: Optional[str],
    ) -> EquipmentStatus:
        field_errors: Dict[str, List[str]] = {}

        if _is_blank(equipment_id):
            field_errors["equipment_id"] = ["equipment_id is required"]

        target: Optional[EquipmentStatus] = None
        if new_status is None or (isinstance(new_status, str) and not new_status.strip()):
            field_errors["status"] = ["status is required"]
        else:
            try:
                target = EquipmentStatus(new_status)
            except ValueError:
                allowed = ", ".join(s.value for s in EquipmentStatus)
                field_errors["status"] = [f"status must be one of: {allowed}"]

        if target is EquipmentStatus.IN_USE:
            limit = OCCUPANT_FIELD_MAX_LENGTH
            if _is_blank(occupant_hint):
                field_errors["roll_no"] = ["roll_no is required for in-use status"]
            elif len(occupant_hint.strip()) > limit:
                field_errors["roll_no"] = [f"roll_no must be at most {limit} characters"]
            if _is_blank(duration):
                field_errors["duration"] = ["duration is required for in-use status"]
            elif len(duration.strip()) > limit:
                field_errors["duration"] = [f"duration must be at most {limit} characters"]

        if field_errors:
            raise create_validation_error(field_errors)
        return target

    def transition(
        self,
        equipment_id: Optional[str],
        new_status: Union[EquipmentStatus, str, None],
        occupant_hint: Optional[str] = None,
        duration: Optional[str] = None,
    ) -> TransitionOutcome:
        """
        Apply a status transition.

        Args:
            equipment_id: Equipment to transition
            new_status: Target status
            occupant_hint: Roll number of the occupant (in-use only)
            duration: Occupied-duration label (in-use only)

        Returns:
            TransitionOutcome with the updated equipment and occupant resolution

        Raises:
            ValidationError: Missing or malformed input
            EquipmentNotFoundError: No such equipment
            ConflictError: Equipment changed concurrently
            PersistenceError: The write failed; nothing was kept
        """
        target = self._validate(equipment_id, new_status, occupant_hint, duration)

        try:
            with self.transaction():
                equipment = self.equipment_repo.get(equipment_id)
                if equipment is None:
                    raise EquipmentNotFoundError(equipment_id)

                previous_status = equipment.status
                changed_at = self.clock()
                entry = self.history_repo.append(
                    EquipmentHistory(
                        equipment_id=equipment.id,
                        status=previous_status,
                        user_id=equipment.user_id,
                        roll_no=equipment.roll_no,
                        duration=equipment.duration,
                        changed_at=changed_at,
                        expire_at=DateTimeHelper.add_months(changed_at, self.retention_months),
                    )
                )

                occupant: Optional[OccupantSummary] = None
                was_registered = False
                if target is EquipmentStatus.IN_USE:
                    hint = occupant_hint.strip()
                    account = self.user_repo.find_by_roll_no(hint)
                    if account is not None:
                        equipment.user = account
                        equipment.user_id = account.id
                        equipment.roll_no = account.roll_no
                        occupant = OccupantSummary.model_validate(account)
                        was_registered = True
                    else:
                        equipment.user = None
                        equipment.user_id = None
                        equipment.roll_no = hint
                        occupant = OccupantSummary(roll_no=hint)
                    equipment.duration = duration.strip()
                else:
                    equipment.user = None
                    equipment.user_id = None
                    equipment.roll_no = None
                    equipment.duration = None

                equipment.status = target
                self.equipment_repo.save(equipment)
        except StaleDataError as exc:
            self._logger.warning(
                "Equipment modified concurrently, transition discarded",
                extra={"equipment_id": equipment_id, "to_status": target.value},
            )
            raise ConflictError(
                "Equipment was modified by another request; reload and retry",
                resource_type="Equipment",
                resource_id=equipment_id,
            ) from exc
        except SQLAlchemyError as exc:
            self._logger.error(
                f"Failed to persist equipment transition: {exc}",
                exc_info=True,
                extra={"equipment_id": equipment_id, "to_status": target.value},
            )
            raise PersistenceError(
                "Failed to update equipment status",
                operation="transition",
                table=Equipment.__tablename__,
            ) from exc

        self._logger.info(
            "Equipment status changed",
            extra={
                "equipment_id": equipment.id,
                "from_status": previous_status.value,
                "to_status": target.value,
                "registered": was_registered,
            },
        )
        return TransitionOutcome(
            equipment=equipment,
            was_registered=was_registered,
            occupant=occupant,
            history_entry=entry,
            changed_at=changed_at,
        )
