"""
Smart SAC - Test Configuration and Fixtures
"""
import os
from datetime import timedelta
from typing import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from faker import Faker
from httpx import ASGITransport, AsyncClient

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite:///./test.db'
os.environ['HISTORY_PURGE_ENABLED'] = 'false'
os.environ['LOG_FORMAT'] = 'text'
os.environ['LOG_LEVEL'] = 'WARNING'

from smart_sac.db.init_db import init_db
from smart_sac.db.session import Database
from smart_sac.main import create_app
from smart_sac.models import Announcement, Equipment, EquipmentStatus, Game, Ticket, TicketStatus, User
from smart_sac.utils.datetime_utils import DateTimeHelper

fake = Faker()


class TickingClock:
    """Clock that moves forward on every read so timestamps never tie."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or DateTimeHelper.utcnow()
        self.step = step

    def __call__(self):
        value = self.current
        self.current += self.step
        return value

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture
def database(tmp_path) -> Database:
    """File-backed SQLite database per test"""
    db = Database(f"sqlite:///{tmp_path / 'smart_sac.db'}", echo=False).init()
    init_db(db)
    yield db
    db.dispose()


@pytest.fixture
def db_session(database: Database):
    with database.session() as session:
        yield session


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def make_user(db_session) -> Callable[..., User]:
    """Create a registered student"""
    def _make_user(roll_no=None, **overrides) -> User:
        user = User(
            fullname=overrides.pop('fullname', fake.name()),
            email=overrides.pop('email', fake.unique.email()),
            roll_no=roll_no or fake.unique.bothify('CSE2####'),
            phone_number=overrides.pop('phone_number', fake.numerify('9#########')),
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def game(db_session) -> Game:
    game = Game(name='Snooker')
    db_session.add(game)
    db_session.commit()
    return game


@pytest.fixture
def make_equipment(db_session, game) -> Callable[..., Equipment]:
    def _make_equipment(name=None, status=EquipmentStatus.AVAILABLE, owner_game=None) -> Equipment:
        equipment = Equipment(
            name=name or fake.unique.slug(),
            status=status,
            game=owner_game or game,
        )
        db_session.add(equipment)
        db_session.commit()
        return equipment
    return _make_equipment


@pytest.fixture
def snooker_table(make_equipment) -> Equipment:
    return make_equipment('snooker-table')


@pytest.fixture
def make_announcement(db_session) -> Callable[..., Announcement]:
    def _make_announcement(**overrides) -> Announcement:
        announcement = Announcement(
            heading=overrides.pop('heading', fake.sentence(nb_words=4)),
            content=overrides.pop('content', fake.paragraph()),
            **overrides,
        )
        db_session.add(announcement)
        db_session.commit()
        return announcement
    return _make_announcement


@pytest.fixture
def make_ticket(db_session) -> Callable[..., Ticket]:
    def _make_ticket(sender: User, status=TicketStatus.OPEN, equipment=None, **overrides) -> Ticket:
        ticket = Ticket(
            heading=overrides.pop('heading', fake.sentence(nb_words=4)),
            content=overrides.pop('content', fake.paragraph()),
            sender=sender,
            equipment=equipment,
            status=status,
            **overrides,
        )
        db_session.add(ticket)
        db_session.commit()
        return ticket
    return _make_ticket


@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database=database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Test client bound to the per-test database"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac
