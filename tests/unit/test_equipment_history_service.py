import pytest

from smart_sac.core.exceptions import EquipmentNotFoundError
from smart_sac.services.equipment import EquipmentHistoryService, EquipmentLifecycleService


@pytest.fixture
def lifecycle(db_session, clock):
    return EquipmentLifecycleService(db_session, clock=clock)


@pytest.fixture
def history(db_session, clock):
    return EquipmentHistoryService(db_session, clock=clock)


def flip(lifecycle, equipment, times):
    """Alternate an item between broken and available `times` times."""
    for i in range(times):
        lifecycle.transition(equipment.id, "broken" if i % 2 == 0 else "available")


def test_pages_hold_ten_entries(lifecycle, history, snooker_table):
    flip(lifecycle, snooker_table, 23)

    first = history.list_history(snooker_table.id, page=1)
    last = history.list_history(snooker_table.id, page=3)

    assert len(first.entries) == 10
    assert len(last.entries) == 3
    assert first.total == 23
    assert first.total_pages == 3
    assert last.page == 3


def test_page_past_the_end_is_empty(lifecycle, history, snooker_table):
    flip(lifecycle, snooker_table, 4)

    page = history.list_history(snooker_table.id, page=5)

    assert page.entries == []
    assert page.total == 4
    assert page.total_pages == 1


def test_pages_do_not_overlap(lifecycle, history, snooker_table):
    flip(lifecycle, snooker_table, 15)

    first = {e.id for e in history.list_history(snooker_table.id, page=1).entries}
    second = {e.id for e in history.list_history(snooker_table.id, page=2).entries}

    assert len(first) == 10
    assert len(second) == 5
    assert first.isdisjoint(second)


def test_listing_without_equipment_covers_all_items(lifecycle, history, make_equipment):
    cue = make_equipment('cue-rack')
    board = make_equipment('carrom-board')
    flip(lifecycle, cue, 2)
    flip(lifecycle, board, 3)

    page = history.list_history()

    assert page.total == 5
    assert {e.equipment.name for e in page.entries} == {'cue-rack', 'carrom-board'}


def test_listing_unknown_equipment_is_not_found(history):
    with pytest.raises(EquipmentNotFoundError):
        history.list_history('missing-id')


def test_entries_carry_equipment_and_occupant(lifecycle, history, snooker_table, make_user):
    student = make_user(roll_no='CSE21042')
    lifecycle.transition(snooker_table.id, 'in-use', occupant_hint='CSE21042', duration='1h')
    lifecycle.transition(snooker_table.id, 'available')

    newest = history.list_history(snooker_table.id).entries[0]

    assert newest.status == 'in-use'
    assert newest.equipment.name == 'snooker-table'
    assert newest.user.email == student.email
    assert newest.user.roll_no == 'CSE21042'


def test_expired_entries_are_hidden(lifecycle, history, clock, snooker_table):
    flip(lifecycle, snooker_table, 2)
    clock.advance(days=100)
    flip(lifecycle, snooker_table, 1)

    # Three months after the first two entries, only the newest one is live
    clock.advance(days=1)

    page = history.list_history(snooker_table.id)
    assert page.total == 1
    assert len(page.entries) == 1
    assert history.count_history(snooker_table.id).total_history == 1


def test_count_history(lifecycle, history, snooker_table):
    flip(lifecycle, snooker_table, 11)

    count = history.count_history(snooker_table.id)

    assert count.total_history == 11
    assert count.total_pages == 2


def test_count_history_for_unused_item(history, snooker_table):
    count = history.count_history(snooker_table.id)

    assert count.total_history == 0
    assert count.total_pages == 0


def test_recent_history_returns_latest_ten(lifecycle, history, make_equipment):
    cue = make_equipment('cue-rack')
    board = make_equipment('carrom-board')
    flip(lifecycle, cue, 7)
    flip(lifecycle, board, 6)

    recent = history.recent_history()

    assert recent.count == 10
    assert len(recent.history) == 10
    # The six board entries are the newest
    assert [e.equipment.name for e in recent.history[:6]] == ['carrom-board'] * 6


def test_recent_history_by_equipment(lifecycle, history, make_equipment):
    cue = make_equipment('cue-rack')
    board = make_equipment('carrom-board')
    make_equipment('table-tennis-net')
    flip(lifecycle, cue, 12)
    flip(lifecycle, board, 2)

    grouped = history.recent_history_by_equipment()

    assert set(grouped) == {'cue-rack', 'carrom-board', 'table-tennis-net'}
    assert len(grouped['cue-rack']) == 10
    assert len(grouped['carrom-board']) == 2
    assert grouped['table-tennis-net'] == []
