"""Tests for the SQLAlchemy store."""

import uuid
from datetime import date, datetime
from decimal import Decimal

import pytest

from nomadbank.database.base import Database
from nomadbank.domain.entities import GeneratedTask, GenerationHistory, TaskStatus
from nomadbank.domain.errors import NotFoundError, PersistenceError


def _task(user_id, from_id, to_id, cycle=1, group_name="", when=None, task_id=None):
    when = when or datetime(2025, 3, 3, 10, 0, 0)
    return GeneratedTask(
        id=task_id or str(uuid.uuid4()),
        user_id=user_id,
        group_name=group_name,
        cycle=cycle,
        anchor_date=when.date(),
        execute_at=when,
        from_account_id=from_id,
        to_account_id=to_id,
        amount=Decimal("12.34"),
    )


def _create_account(db, user_id, name, group_name=None):
    return db.create_account(
        user_id=user_id,
        name=name,
        group_name=group_name,
        amount_min=Decimal("10"),
        amount_max=Decimal("100"),
    )


def _create_strategy(db, user_id, name, is_system=False):
    return db.create_strategy(
        user_id=user_id,
        name=name,
        interval_min=30,
        interval_max=60,
        time_start="09:00",
        time_end="21:00",
        skip_weekend=False,
        amount_min=Decimal("10"),
        amount_max=Decimal("30"),
        daily_limit=3,
        is_system=is_system,
    )


def test_store_implements_interface(temp_db):
    """Test that the factory returns a Database."""
    assert isinstance(temp_db, Database)


class TestAccounts:
    """Tests for account storage."""

    def test_round_trip(self, temp_db, user_id):
        """Test that a stored account reads back with its fields."""
        account_id = _create_account(temp_db, user_id, "Main", group_name="travel")
        account = temp_db.get_account(account_id)

        assert account.name == "Main"
        assert account.group_name == "travel"
        assert account.amount_min == Decimal("10")
        assert account.is_active is True
        assert account.created_at is not None

    def test_missing_account(self, temp_db):
        """Test that an unknown ID returns None."""
        assert temp_db.get_account("nope") is None

    def test_active_accounts_filtering(self, temp_db, user_id):
        """Test active and group filters of list_active_accounts."""
        a = _create_account(temp_db, user_id, "A", group_name="travel")
        b = _create_account(temp_db, user_id, "B", group_name="travel")
        c = _create_account(temp_db, user_id, "C")
        _create_account(temp_db, "user-2", "D", group_name="travel")
        temp_db.update_account_active(b, False)

        assert {acc.id for acc in temp_db.list_active_accounts(user_id)} == {a, c}
        assert [acc.id for acc in temp_db.list_active_accounts(user_id, "travel")] == [a]

    def test_update_missing_account(self, temp_db):
        """Test that toggling an unknown account raises."""
        with pytest.raises(NotFoundError):
            temp_db.update_account_active("nope", False)


class TestStrategies:
    """Tests for strategy storage."""

    def test_list_includes_system_first(self, temp_db, user_id):
        """Test that system strategies come first and other users' are hidden."""
        own = _create_strategy(temp_db, user_id, "Own")
        system = _create_strategy(temp_db, "", "Preset", is_system=True)
        _create_strategy(temp_db, "user-2", "Theirs")

        assert [s.id for s in temp_db.list_strategies(user_id)] == [system, own]

    def test_delete_missing_strategy(self, temp_db):
        """Test that deleting an unknown strategy raises."""
        with pytest.raises(NotFoundError):
            temp_db.delete_strategy("nope")


class TestTasks:
    """Tests for task storage."""

    @pytest.fixture
    def pair(self, temp_db, user_id):
        return _create_account(temp_db, user_id, "A"), _create_account(temp_db, user_id, "B")

    def test_history_empty(self, temp_db, user_id):
        """Test that no tasks means cycle 0 and no date."""
        assert temp_db.get_last_cycle_and_date(user_id, "") == GenerationHistory(0, None)

    def test_history_uses_highest_cycle(self, temp_db, user_id, pair):
        """Test that history reports the latest task of the highest cycle."""
        a, b = pair
        temp_db.create_tasks_batch([
            _task(user_id, a, b, cycle=1, when=datetime(2025, 5, 1, 9, 0)),
            _task(user_id, a, b, cycle=2, when=datetime(2025, 4, 2, 9, 0)),
            _task(user_id, b, a, cycle=2, when=datetime(2025, 4, 9, 15, 30)),
            _task(user_id, a, b, cycle=7, group_name="travel", when=datetime(2025, 6, 1, 9, 0)),
        ])

        history = temp_db.get_last_cycle_and_date(user_id, "")
        assert history.last_cycle == 2
        assert history.last_executed_at == datetime(2025, 4, 9, 15, 30)

        assert temp_db.get_last_cycle_and_date(user_id, "travel").last_cycle == 7

    def test_batch_round_trip(self, temp_db, user_id, pair):
        """Test that stored tasks read back unchanged."""
        a, b = pair
        task = _task(user_id, a, b)
        temp_db.create_tasks_batch([task])

        stored = temp_db.get_task(task.id)
        assert stored == task

    def test_empty_batch_is_noop(self, temp_db, user_id):
        """Test that an empty batch stores nothing and does not fail."""
        temp_db.create_tasks_batch([])

        assert temp_db.list_tasks(user_id) == []

    def test_failed_batch_stores_nothing(self, temp_db, user_id, pair):
        """Test all-or-nothing writes on a duplicate primary key."""
        a, b = pair
        tasks = [
            _task(user_id, a, b, task_id="same-id"),
            _task(user_id, b, a, task_id="other-id"),
            _task(user_id, a, b, task_id="same-id"),
        ]

        with pytest.raises(PersistenceError) as excinfo:
            temp_db.create_tasks_batch(tasks)

        assert excinfo.value.__cause__ is not None
        assert temp_db.list_tasks(user_id) == []

    def test_store_usable_after_failed_batch(self, temp_db, user_id, pair):
        """Test that the session recovers after a rollback."""
        a, b = pair
        with pytest.raises(PersistenceError):
            temp_db.create_tasks_batch([
                _task(user_id, a, b, task_id="dup"),
                _task(user_id, a, b, task_id="dup"),
            ])

        temp_db.create_tasks_batch([_task(user_id, a, b)])
        assert len(temp_db.list_tasks(user_id)) == 1

    def test_update_status(self, temp_db, user_id, pair):
        """Test status updates."""
        a, b = pair
        task = _task(user_id, a, b)
        temp_db.create_tasks_batch([task])

        updated = temp_db.update_task_status(
            task.id, TaskStatus.COMPLETED, datetime(2025, 3, 3, 11, 0)
        )

        assert updated.status == TaskStatus.COMPLETED
        assert temp_db.get_task(task.id).completed_at == datetime(2025, 3, 3, 11, 0)

    def test_update_missing_task(self, temp_db):
        """Test that updating an unknown task raises."""
        with pytest.raises(NotFoundError):
            temp_db.update_task_status("nope", TaskStatus.SKIPPED, None)

    def test_cycles_and_delete(self, temp_db, user_id, pair):
        """Test distinct cycles and per-user deletion."""
        a, b = pair
        temp_db.create_tasks_batch([
            _task(user_id, a, b, cycle=3),
            _task(user_id, b, a, cycle=1),
            _task(user_id, a, b, cycle=3),
            _task("user-2", a, b, cycle=9),
        ])

        assert temp_db.list_task_cycles(user_id) == [1, 3]
        assert temp_db.delete_tasks(user_id) == 3
        assert temp_db.list_task_cycles("user-2") == [9]

    def test_anchor_date_type(self, temp_db, user_id, pair):
        """Test that anchor dates come back as dates."""
        a, b = pair
        task = _task(user_id, a, b)
        temp_db.create_tasks_batch([task])

        assert temp_db.get_task(task.id).anchor_date == date(2025, 3, 3)
