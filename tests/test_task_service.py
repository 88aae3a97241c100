"""Tests for reviewing and settling transfer tasks."""

import random
import re
from datetime import datetime

import pytest

from nomadbank.cli.main import cli
from nomadbank.domain.entities import GenerationRequest, TaskStatus
from nomadbank.domain.errors import ConflictError, NotFoundError
from nomadbank.domain.generation import GenerationService
from nomadbank.domain.randomizer import Randomizer


@pytest.fixture
def generated(temp_db, user_id, sample_accounts, sample_strategy):
    """Generate two cycles of tasks for the sample accounts."""
    service = GenerationService(
        temp_db,
        randomizer=Randomizer(random.Random(4)),
        clock=lambda: datetime(2025, 3, 1, 12, 0, 0),
    )
    service.generate(user_id, GenerationRequest(strategy_id=sample_strategy.id, cycles=2))
    return temp_db.list_tasks(user_id)


class TestTaskService:
    """Tests for TaskService."""

    def test_list_in_execution_order(self, task_service, user_id, generated):
        """Test that tasks come back chronologically."""
        tasks = task_service.list_tasks(user_id)

        assert len(tasks) == 8
        times = [t.execute_at for t in tasks]
        assert times == sorted(times)

    def test_filters(self, task_service, user_id, generated):
        """Test cycle, status and group filters."""
        assert {t.cycle for t in task_service.list_tasks(user_id, cycle=2)} == {2}
        assert len(task_service.list_tasks(user_id, status=TaskStatus.PENDING)) == 8
        assert task_service.list_tasks(user_id, status=TaskStatus.COMPLETED) == []
        assert len(task_service.list_tasks(user_id, group_name="")) == 8
        assert task_service.list_tasks(user_id, group_name="travel") == []

    def test_other_user_sees_nothing(self, task_service, generated):
        """Test that tasks are scoped to their owner."""
        assert task_service.list_tasks("user-2") == []

    def test_list_cycles(self, task_service, user_id, generated):
        """Test distinct cycle numbers."""
        assert task_service.list_cycles(user_id) == [1, 2]

    def test_complete_task(self, task_service, user_id, generated):
        """Test completing a pending task stamps the completion time."""
        task = task_service.complete_task(user_id, generated[0].id)

        assert task.status == TaskStatus.COMPLETED
        assert task.completed_at == datetime(2025, 3, 1, 12, 0, 0)

    def test_skip_task(self, task_service, user_id, generated):
        """Test skipping a pending task."""
        task = task_service.skip_task(user_id, generated[0].id)

        assert task.status == TaskStatus.SKIPPED
        assert task.completed_at is None

    def test_finished_task_cannot_change(self, task_service, user_id, generated):
        """Test that only pending tasks can be completed or skipped."""
        task_service.complete_task(user_id, generated[0].id)

        with pytest.raises(ConflictError, match="already completed"):
            task_service.skip_task(user_id, generated[0].id)

    def test_unknown_task(self, task_service, user_id):
        """Test settling a missing task."""
        with pytest.raises(NotFoundError):
            task_service.complete_task(user_id, "nope")

    def test_other_users_task(self, task_service, generated):
        """Test that another user's task is treated as missing."""
        with pytest.raises(NotFoundError):
            task_service.complete_task("user-2", generated[0].id)

    def test_delete_restarts_numbering(
        self, temp_db, task_service, user_id, generated, sample_strategy
    ):
        """Test that clearing tasks makes the next run start at cycle 1."""
        assert task_service.delete_tasks(user_id) == 8
        assert task_service.list_tasks(user_id) == []

        result = GenerationService(temp_db).generate(
            user_id, GenerationRequest(strategy_id=sample_strategy.id, cycles=1)
        )
        assert result.start_cycle == 1


class TestTaskCLI:
    """Tests for the task commands."""

    @pytest.fixture
    def prepared(self, cli_runner, temp_db):
        """Create two accounts and a strategy through the CLI."""
        db_args = ["--db-path", temp_db.database_path]
        cli_runner.invoke(cli, db_args + ["account", "create", "Wise"])
        cli_runner.invoke(cli, db_args + ["account", "create", "Bank"])
        result = cli_runner.invoke(cli, db_args + ["strategy", "create", "Mine"])
        strategy_id = re.search(r"\(ID: ([^)]+)\)", result.output).group(1)
        return db_args, strategy_id

    def test_generate_requires_strategy(self, cli_runner, prepared):
        """Test that generation without --strategy fails."""
        db_args, _ = prepared
        result = cli_runner.invoke(cli, db_args + ["task", "generate"])

        assert result.exit_code == 1
        assert "strategy is required" in result.output

    def test_generate_and_list(self, cli_runner, prepared):
        """Test generating cycles and listing the tasks."""
        db_args, strategy_id = prepared

        result = cli_runner.invoke(
            cli, db_args + ["task", "generate", "--strategy", strategy_id, "--cycles", "2"]
        )
        assert result.exit_code == 0
        assert "Generated 4 tasks (cycles 1-2)" in result.output

        result = cli_runner.invoke(cli, db_args + ["task", "list"])
        assert result.exit_code == 0
        assert "Wise" in result.output
        assert "4 tasks" in result.output

        result = cli_runner.invoke(cli, db_args + ["task", "cycles"])
        assert result.output.strip() == "1, 2"

    def test_list_empty(self, cli_runner, prepared):
        """Test listing before anything is generated."""
        db_args, _ = prepared
        result = cli_runner.invoke(cli, db_args + ["task", "list"])

        assert "No tasks found." in result.output

    def test_clear_requires_confirmation(self, cli_runner, prepared):
        """Test that declining the prompt keeps tasks."""
        db_args, strategy_id = prepared
        cli_runner.invoke(cli, db_args + ["task", "generate", "--strategy", strategy_id])

        result = cli_runner.invoke(cli, db_args + ["task", "clear"], input="n\n")
        assert "Deletion cancelled." in result.output

        result = cli_runner.invoke(cli, db_args + ["task", "clear", "--yes"])
        assert "Deleted 8 tasks" in result.output
