"""Transfer task domain service."""

from datetime import datetime
from typing import Callable, Optional

from nomadbank.database.base import Database
from nomadbank.domain import errors
from nomadbank.domain.entities import GeneratedTask, TaskStatus


class TaskService:
    """Service for reviewing and settling generated transfer tasks."""

    def __init__(self, db: Database, clock: Optional[Callable[[], datetime]] = None):
        """Initialize task service.

        Args:
            db: Database instance
            clock: Returns the current local time; defaults to datetime.now
        """
        self.db = db
        self.clock = clock or datetime.now

    def list_tasks(
        self,
        user_id: str,
        group_name: Optional[str] = None,
        status: Optional[TaskStatus] = None,
        cycle: Optional[int] = None,
    ) -> list[GeneratedTask]:
        """List a user's tasks in execution order.

        Args:
            user_id: Owner of the tasks
            group_name: Optional group filter ("" selects all-account tasks)
            status: Optional status filter
            cycle: Optional cycle filter
        """
        return self.db.list_tasks(user_id, group_name=group_name, status=status, cycle=cycle)

    def list_cycles(self, user_id: str) -> list[int]:
        """List the distinct cycle numbers a user has tasks for."""
        return self.db.list_task_cycles(user_id)

    def complete_task(self, user_id: str, task_id: str) -> GeneratedTask:
        """Mark a pending task as completed.

        Raises:
            NotFoundError: If the task does not exist or belongs to another user
            ConflictError: If the task is not pending
        """
        self._require_pending(user_id, task_id)
        return self.db.update_task_status(task_id, TaskStatus.COMPLETED, self.clock())

    def skip_task(self, user_id: str, task_id: str) -> GeneratedTask:
        """Mark a pending task as skipped.

        Raises:
            NotFoundError: If the task does not exist or belongs to another user
            ConflictError: If the task is not pending
        """
        self._require_pending(user_id, task_id)
        return self.db.update_task_status(task_id, TaskStatus.SKIPPED, None)

    def delete_tasks(self, user_id: str) -> int:
        """Delete all of a user's tasks. Returns the number removed."""
        return self.db.delete_tasks(user_id)

    def _require_pending(self, user_id: str, task_id: str) -> GeneratedTask:
        task = self.db.get_task(task_id)
        if task is None or task.user_id != user_id:
            raise errors.NotFoundError(errors.task_not_found(task_id))
        if task.status != TaskStatus.PENDING:
            raise errors.ConflictError(errors.task_not_pending(task_id, task.status.value))
        return task
