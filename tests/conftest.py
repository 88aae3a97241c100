"""Shared pytest fixtures for nomadbank tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal
import pytest

from nomadbank.database.factories import create_sqlite_database
from nomadbank.domain.account import AccountService
from nomadbank.domain.entities import Account, Strategy
from nomadbank.domain.strategy import StrategyService
from nomadbank.domain.task import TaskService

USER_ID = "user-1"


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed draws.

    ``random()`` pops from ``floats`` and ``randrange()`` pops from ``ints``;
    ``shuffle()`` leaves the list in its original order.
    """

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self):
        return self.floats.pop(0)

    def randrange(self, stop):
        value = self.ints.pop(0)
        assert 0 <= value < stop, f"scripted draw {value} outside range({stop})"
        return value

    def shuffle(self, items):
        pass


@pytest.fixture
def scripted_random():
    """Return the ScriptedRandom class for building replayed draws."""
    return ScriptedRandom


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    """Return the user ID the sample data belongs to."""
    return USER_ID


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def strategy_service(temp_db):
    """Create a StrategyService with a temporary database."""
    return StrategyService(temp_db)


@pytest.fixture
def task_service(temp_db):
    """Create a TaskService with a temporary database."""
    return TaskService(temp_db, clock=lambda: datetime(2025, 3, 1, 12, 0, 0))


@pytest.fixture
def sample_accounts(account_service):
    """Create three active accounts for USER_ID and return their entities."""
    ids = [
        account_service.create_account(user_id=USER_ID, name=name)
        for name in ("Alpha", "Bravo", "Charlie")
    ]
    return [account_service.get_account(account_id) for account_id in ids]


@pytest.fixture
def sample_strategy(strategy_service):
    """Create a user strategy and return its entity."""
    strategy_id = strategy_service.create_strategy(
        user_id=USER_ID,
        name="Test Strategy",
        interval_min=10,
        interval_max=20,
        time_start="09:00",
        time_end="18:00",
        amount_min=Decimal("10"),
        amount_max=Decimal("30"),
        daily_limit=2,
    )
    return strategy_service.get_strategy(strategy_id)


@pytest.fixture
def make_account():
    """Return a factory for in-memory Account entities."""

    def _make(account_id, group_name=None, is_active=True):
        return Account(
            id=account_id,
            user_id=USER_ID,
            name=f"Account {account_id}",
            is_active=is_active,
            group_name=group_name,
            strategy_id=None,
            amount_min=Decimal("10"),
            amount_max=Decimal("100"),
            created_at=datetime.now(UTC),
        )

    return _make


@pytest.fixture
def make_strategy():
    """Return a factory for in-memory Strategy entities."""

    def _make(**overrides):
        values = dict(
            id="strategy-1",
            user_id=USER_ID,
            name="Test",
            interval_min=30,
            interval_max=60,
            time_start="09:00",
            time_end="21:00",
            skip_weekend=False,
            amount_min=Decimal("10"),
            amount_max=Decimal("30"),
            daily_limit=3,
            is_system=False,
            created_at=datetime.now(UTC),
        )
        values.update(overrides)
        return Strategy(**values)

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
