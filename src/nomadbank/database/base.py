"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain services
from nomadbank.domain.entities import (
    Account,
    GeneratedTask,
    GenerationHistory,
    Strategy,
    TaskStatus,
)


class Database(ABC):
    """Abstract database interface for nomadbank."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        user_id: str,
        name: str,
        group_name: Optional[str],
        amount_min: Decimal,
        amount_max: Decimal,
        strategy_id: Optional[str] = None,
    ) -> str:
        """Create a new active account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: str) -> list[Account]:
        """List all accounts of a user."""
        pass

    @abstractmethod
    def list_active_accounts(
        self, user_id: str, group_name: Optional[str] = None
    ) -> list[Account]:
        """List a user's active accounts, optionally restricted to one group."""
        pass

    @abstractmethod
    def list_account_groups(self, user_id: str) -> list[str]:
        """List distinct non-empty group labels of a user's accounts."""
        pass

    @abstractmethod
    def update_account_active(self, account_id: str, is_active: bool) -> None:
        """Set the active flag of an account."""
        pass

    # Strategy operations
    @abstractmethod
    def create_strategy(
        self,
        user_id: str,
        name: str,
        interval_min: int,
        interval_max: int,
        time_start: str,
        time_end: str,
        skip_weekend: bool,
        amount_min: Decimal,
        amount_max: Decimal,
        daily_limit: int,
        is_system: bool = False,
    ) -> str:
        """Create a strategy. Returns strategy ID."""
        pass

    @abstractmethod
    def get_strategy(self, strategy_id: str) -> Optional[Strategy]:
        """Get strategy by ID."""
        pass

    @abstractmethod
    def list_strategies(self, user_id: str) -> list[Strategy]:
        """List a user's strategies together with the system strategies."""
        pass

    @abstractmethod
    def delete_strategy(self, strategy_id: str) -> None:
        """Delete a strategy."""
        pass

    # Task operations
    @abstractmethod
    def create_tasks_batch(self, tasks: Sequence[GeneratedTask]) -> None:
        """Store all tasks atomically.

        Raises:
            PersistenceError: If the write fails; no task of the batch is kept
        """
        pass

    @abstractmethod
    def get_task(self, task_id: str) -> Optional[GeneratedTask]:
        """Get task by ID."""
        pass

    @abstractmethod
    def list_tasks(
        self,
        user_id: str,
        group_name: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        cycle: Optional[int] = None,
    ) -> list[GeneratedTask]:
        """List tasks ordered by execution time with optional filters."""
        pass

    @abstractmethod
    def list_task_cycles(self, user_id: str) -> list[int]:
        """List distinct cycle numbers of a user's tasks in ascending order."""
        pass

    @abstractmethod
    def get_last_cycle_and_date(self, user_id: str, group_name: str) -> GenerationHistory:
        """Get the highest cycle of a user/group and its latest execution time.

        Returns ``GenerationHistory(0, None)`` when no tasks exist. An empty
        group_name selects tasks generated over all accounts.
        """
        pass

    @abstractmethod
    def update_task_status(
        self, task_id: str, status: TaskStatus, completed_at: Optional[datetime]
    ) -> GeneratedTask:
        """Set the status of a task and return the updated task."""
        pass

    @abstractmethod
    def delete_tasks(self, user_id: str) -> int:
        """Delete all tasks of a user. Returns the number deleted."""
        pass
