"""
Equipment lifecycle transitions: history archiving, occupant resolution,
validation and transactional failure handling.
"""
import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from smart_sac.core.exceptions import (
    ConflictError,
    EquipmentNotFoundError,
    ErrorCode,
    PersistenceError,
    ValidationError,
)
from smart_sac.models import Equipment, EquipmentHistory, EquipmentStatus
from smart_sac.repositories import EquipmentRepository
from smart_sac.services.equipment import EquipmentHistoryService, EquipmentLifecycleService
from smart_sac.utils.datetime_utils import DateTimeHelper


def history_count(database, equipment_id=None) -> int:
    with database.session() as db:
        stmt = select(func.count(EquipmentHistory.id))
        if equipment_id:
            stmt = stmt.where(EquipmentHistory.equipment_id == equipment_id)
        return db.execute(stmt).scalar_one()


def reload(database, equipment_id) -> Equipment:
    with database.session() as db:
        return db.get(Equipment, equipment_id)


@pytest.fixture
def service(db_session, clock):
    return EquipmentLifecycleService(db_session, clock=clock)


class TestSnookerTableScenario:

    def test_checkout_to_unregistered_student(self, service, database, snooker_table):
        outcome = service.transition(snooker_table.id, "in-use", occupant_hint="CSE21042", duration="1h")

        assert outcome.was_registered is False
        assert outcome.occupant.roll_no == "CSE21042"
        assert outcome.occupant.id is None

        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus.IN_USE
        assert stored.user_id is None
        assert stored.roll_no == "CSE21042"
        assert stored.duration == "1h"

        with database.session() as db:
            entries = db.execute(select(EquipmentHistory)).scalars().all()
        assert len(entries) == 1
        assert entries[0].status == EquipmentStatus.AVAILABLE
        assert entries[0].roll_no is None
        assert entries[0].duration is None

    def test_break_after_checkout_archives_occupancy(self, service, database, snooker_table):
        service.transition(snooker_table.id, "in-use", occupant_hint="CSE21042", duration="1h")
        outcome = service.transition(snooker_table.id, "broken")

        assert outcome.was_registered is False
        assert outcome.occupant is None

        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus.BROKEN
        assert stored.user_id is None
        assert stored.roll_no is None
        assert stored.duration is None

        latest = outcome.history_entry
        assert latest.status == EquipmentStatus.IN_USE
        assert latest.roll_no == "CSE21042"
        assert latest.duration == "1h"
        assert history_count(database, snooker_table.id) == 2


class TestTransitions:

    def test_one_history_entry_per_call(self, service, database, snooker_table):
        service.transition(snooker_table.id, EquipmentStatus.BROKEN)
        service.transition(snooker_table.id, EquipmentStatus.AVAILABLE)
        service.transition(snooker_table.id, EquipmentStatus.IN_USE, occupant_hint="ME21001", duration="30m")

        assert history_count(database, snooker_table.id) == 3

    def test_repeated_available_is_idempotent_but_recorded(self, service, database, snooker_table):
        first = service.transition(snooker_table.id, "available")
        second = service.transition(snooker_table.id, "available")

        assert first.equipment.status == EquipmentStatus.AVAILABLE
        assert second.equipment.status == EquipmentStatus.AVAILABLE
        assert first.history_entry.status == EquipmentStatus.AVAILABLE
        assert second.history_entry.status == EquipmentStatus.AVAILABLE
        assert history_count(database, snooker_table.id) == 2

    @pytest.mark.parametrize("target", ["available", "broken"])
    def test_leaving_in_use_clears_occupancy(self, service, database, snooker_table, make_user, target):
        make_user(roll_no="EE21007")
        service.transition(snooker_table.id, "in-use", occupant_hint="EE21007", duration="2h")

        service.transition(snooker_table.id, target)

        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus(target)
        assert stored.user_id is None
        assert stored.roll_no is None
        assert stored.duration is None

    def test_registered_occupant_is_linked(self, service, database, snooker_table, make_user):
        student = make_user(roll_no="CSE21042")

        outcome = service.transition(snooker_table.id, "in-use", occupant_hint="CSE21042", duration="1h")

        assert outcome.was_registered is True
        assert outcome.occupant.id == student.id
        assert outcome.occupant.fullname == student.fullname
        assert reload(database, snooker_table.id).user_id == student.id

    def test_account_roll_number_wins_over_hint(self, service, database, snooker_table, make_user):
        make_user(roll_no="R1")

        outcome = service.transition(snooker_table.id, "in-use", occupant_hint="  R1 ", duration="1h")

        assert outcome.was_registered is True
        assert reload(database, snooker_table.id).roll_no == "R1"

    def test_history_records_previous_occupant_account(self, service, snooker_table, make_user):
        student = make_user(roll_no="CE21015")
        service.transition(snooker_table.id, "in-use", occupant_hint="CE21015", duration="45m")

        outcome = service.transition(snooker_table.id, "available")

        assert outcome.history_entry.user_id == student.id
        assert outcome.history_entry.roll_no == "CE21015"
        assert outcome.history_entry.duration == "45m"

    def test_history_expires_three_months_after_change(self, service, snooker_table):
        outcome = service.transition(snooker_table.id, "broken")

        entry = outcome.history_entry
        assert entry.changed_at == outcome.changed_at
        assert entry.expire_at == DateTimeHelper.add_months(outcome.changed_at, 3)

    def test_history_listing_is_newest_first(self, service, db_session, clock, snooker_table):
        service.transition(snooker_table.id, "in-use", occupant_hint="A1", duration="1h")
        service.transition(snooker_table.id, "available")
        service.transition(snooker_table.id, "broken")

        page = EquipmentHistoryService(db_session, clock=clock).list_history(snooker_table.id)

        stamps = [DateTimeHelper.as_utc(e.changed_at) for e in page.entries]
        assert stamps == sorted(stamps, reverse=True)
        assert [e.status for e in page.entries] == ["available", "in-use", "available"]


class TestValidation:

    @pytest.mark.parametrize(
        "roll_no, duration, missing",
        [
            (None, "1h", "roll_no"),
            ("CSE21042", None, "duration"),
            ("   ", "1h", "roll_no"),
            ("CSE21042", "", "duration"),
        ],
    )
    def test_in_use_requires_roll_no_and_duration(
        self, service, database, snooker_table, roll_no, duration, missing
    ):
        with pytest.raises(ValidationError) as exc_info:
            service.transition(snooker_table.id, "in-use", occupant_hint=roll_no, duration=duration)

        assert missing in exc_info.value.field_errors
        assert exc_info.value.status_code == 400
        assert history_count(database) == 0
        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus.AVAILABLE
        assert stored.version == snooker_table.version

    @pytest.mark.parametrize(
        "roll_no, duration, too_long",
        [
            ("CSE" + "1" * 48, "1h", "roll_no"),
            ("CSE21042", "x" * 51, "duration"),
        ],
    )
    def test_occupant_fields_fit_their_columns(
        self, service, database, snooker_table, roll_no, duration, too_long
    ):
        with pytest.raises(ValidationError) as exc_info:
            service.transition(snooker_table.id, "in-use", occupant_hint=roll_no, duration=duration)

        assert list(exc_info.value.field_errors) == [too_long]
        assert history_count(database) == 0
        assert reload(database, snooker_table.id).status == EquipmentStatus.AVAILABLE

    def test_occupant_fields_at_column_width_are_accepted(self, service, snooker_table):
        outcome = service.transition(snooker_table.id, "in-use", occupant_hint="R" * 50, duration="d" * 50)

        assert outcome.equipment.roll_no == "R" * 50
        assert outcome.equipment.duration == "d" * 50

    @pytest.mark.parametrize("status", [None, "", "lost", "IN_USE"])
    def test_status_must_be_known(self, service, database, snooker_table, status):
        with pytest.raises(ValidationError) as exc_info:
            service.transition(snooker_table.id, status)

        assert "status" in exc_info.value.field_errors
        assert history_count(database) == 0

    def test_equipment_id_required(self, service, database):
        with pytest.raises(ValidationError) as exc_info:
            service.transition("", "available")

        assert "equipment_id" in exc_info.value.field_errors
        assert history_count(database) == 0

    def test_unknown_equipment_is_not_found(self, service, database, snooker_table):
        with pytest.raises(EquipmentNotFoundError) as exc_info:
            service.transition("does-not-exist", "broken")

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == ErrorCode.EQUIPMENT_NOT_FOUND
        assert history_count(database) == 0
        assert reload(database, snooker_table.id).status == EquipmentStatus.AVAILABLE

    def test_removed_equipment_is_not_found(self, service, db_session, database, snooker_table):
        EquipmentRepository(db_session).delete(snooker_table)
        db_session.commit()

        with pytest.raises(EquipmentNotFoundError):
            service.transition(snooker_table.id, "broken")
        assert history_count(database) == 0


class TestFailureHandling:

    def test_failed_equipment_write_discards_history(self, service, database, snooker_table, monkeypatch):
        def failing_save(equipment):
            raise OperationalError("UPDATE equipment", {}, Exception("disk I/O error"))

        monkeypatch.setattr(service.equipment_repo, "save", failing_save)

        with pytest.raises(PersistenceError) as exc_info:
            service.transition(snooker_table.id, "in-use", occupant_hint="CSE21042", duration="1h")

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == ErrorCode.DATABASE_ERROR
        assert history_count(database) == 0
        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus.AVAILABLE
        assert stored.roll_no is None

    def test_stale_copy_raises_conflict(self, database, clock, snooker_table):
        with database.session() as first_db, database.session() as second_db:
            first = EquipmentLifecycleService(first_db, clock=clock)
            second = EquipmentLifecycleService(second_db, clock=clock)

            # Both requests read the same version before either writes. The
            # identity map holds weak references, so the stale copy is kept here.
            current = first.equipment_repo.get(snooker_table.id)
            stale = second.equipment_repo.get(snooker_table.id)
            assert current.version == stale.version == 1

            first.transition(snooker_table.id, "in-use", occupant_hint="CSE21042", duration="1h")

            with pytest.raises(ConflictError) as exc_info:
                second.transition(snooker_table.id, "broken")

        assert exc_info.value.status_code == 409
        assert exc_info.value.details["retryable"] is True
        assert history_count(database, snooker_table.id) == 1
        stored = reload(database, snooker_table.id)
        assert stored.status == EquipmentStatus.IN_USE
        assert stored.roll_no == "CSE21042"

    def test_retry_after_conflict_succeeds(self, database, clock, snooker_table):
        with database.session() as first_db, database.session() as second_db:
            first = EquipmentLifecycleService(first_db, clock=clock)
            second = EquipmentLifecycleService(second_db, clock=clock)
            stale = second.equipment_repo.get(snooker_table.id)

            first.transition(snooker_table.id, "broken")
            with pytest.raises(ConflictError):
                second.transition(snooker_table.id, "available")

            # Rollback expired the stale copy, so a retry reloads it
            outcome = second.transition(snooker_table.id, "available")
            assert stale.version == 3

        assert outcome.history_entry.status == EquipmentStatus.BROKEN
        assert history_count(database, snooker_table.id) == 2
