"""Domain model entities for nomadbank.

These are pure data classes representing business concepts, independent of
database schema. The generation engine only ever reads accounts and
strategies and only ever creates tasks, so every entity is immutable.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """Lifecycle states of a transfer task."""

    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Account:
    """Tracked bank account domain entity."""

    id: str
    user_id: str
    name: str
    is_active: bool
    group_name: Optional[str]
    strategy_id: Optional[str]
    amount_min: Decimal
    amount_max: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Strategy:
    """Keep-alive strategy domain entity.

    Ranges are expected to be normalized (min <= max) by whoever created the
    strategy; the generation engine does not re-check them.
    """

    id: str
    user_id: str
    name: str
    interval_min: int
    interval_max: int
    time_start: str
    time_end: str
    skip_weekend: bool
    amount_min: Decimal
    amount_max: Decimal
    daily_limit: int
    is_system: bool
    created_at: datetime


@dataclass(frozen=True)
class TransferPair:
    """One directed transfer between two accounts within a cycle."""

    from_account: Account
    to_account: Account


@dataclass(frozen=True)
class GeneratedTask:
    """Transfer task domain entity.

    An empty group_name means the task was generated over all of the user's
    active accounts.
    """

    id: str
    user_id: str
    group_name: str
    cycle: int
    anchor_date: date
    execute_at: datetime
    from_account_id: str
    to_account_id: str
    amount: Decimal
    status: TaskStatus = TaskStatus.PENDING
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class GenerationHistory:
    """Last generated cycle and its final execution time for a user/group."""

    last_cycle: int = 0
    last_executed_at: Optional[datetime] = None


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters of one generation run."""

    strategy_id: str
    group_name: str = ""
    cycles: int = 4


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation run."""

    tasks_created: int
    start_cycle: int
    end_cycle: int
