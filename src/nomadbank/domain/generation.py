"""Multi-cycle task generation service."""

from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

import structlog

from nomadbank.database.base import Database
from nomadbank.domain import errors
from nomadbank.domain.entities import (
    Account,
    GeneratedTask,
    GenerationHistory,
    GenerationRequest,
    GenerationResult,
    Strategy,
)
from nomadbank.domain.pairing import generate_balanced_pairs
from nomadbank.domain.randomizer import Randomizer
from nomadbank.domain.scheduler import schedule_tasks

logger = structlog.get_logger(__name__)

DEFAULT_CYCLES = 4

# History dates before this year are treated as corrupt and ignored
MIN_PLAUSIBLE_YEAR = 2000


def generate_tasks(
    user_id: str,
    group_name: str,
    accounts: Sequence[Account],
    strategy: Strategy,
    cycles: int,
    start_cycle: int,
    start_date: date,
    randomizer: Randomizer,
) -> list[GeneratedTask]:
    """Generate ``cycles`` consecutive cycles of tasks.

    Each cycle after the first starts a random interval after the date of the
    previous cycle's last scheduled task, so any delay the scheduler
    introduced carries over into the following cycles.
    """
    all_tasks: list[GeneratedTask] = []
    current = start_date

    for offset in range(cycles):
        if offset > 0:
            current += timedelta(
                days=randomizer.interval_days(strategy.interval_min, strategy.interval_max)
            )

        pairs = generate_balanced_pairs(accounts, randomizer)
        cycle_tasks = schedule_tasks(
            user_id, group_name, start_cycle + offset, pairs, current, strategy, randomizer
        )
        all_tasks.extend(cycle_tasks)

        if cycle_tasks:
            current = cycle_tasks[-1].execute_at.date()

    return all_tasks


class GenerationService:
    """Service that plans keep-alive transfer tasks for a user's accounts."""

    def __init__(
        self,
        db: Database,
        randomizer: Optional[Randomizer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize generation service.

        Args:
            db: Database instance
            randomizer: Source of randomness; a fresh one per service if omitted
            clock: Returns the current local time; defaults to datetime.now
        """
        self.db = db
        self.randomizer = randomizer or Randomizer()
        self.clock = clock or datetime.now

    def generate(self, user_id: str, request: GenerationRequest) -> GenerationResult:
        """Generate and persist the next cycles of tasks for a user.

        Args:
            user_id: User to generate tasks for
            request: Strategy, optional account group and number of cycles

        Returns:
            Number of tasks created and the inclusive cycle range

        Raises:
            StrategyRequiredError: If no strategy ID was given
            StrategyNotFoundError: If the strategy does not exist
            NotEnoughAccountsError: If fewer than two active accounts match
            PersistenceError: If the batch could not be stored
        """
        if not request.strategy_id:
            raise errors.StrategyRequiredError(errors.strategy_required())

        strategy = self.db.get_strategy(request.strategy_id)
        if strategy is None:
            raise errors.StrategyNotFoundError(errors.strategy_not_found(request.strategy_id))

        group_name = request.group_name or ""
        accounts = self.db.list_active_accounts(user_id, group_name=group_name or None)
        if len(accounts) < errors.MIN_ACCOUNTS_FOR_GENERATION:
            raise errors.NotEnoughAccountsError(
                errors.not_enough_accounts(len(accounts), group_name)
            )

        cycles = request.cycles if request.cycles > 0 else DEFAULT_CYCLES

        history = self.db.get_last_cycle_and_date(user_id, group_name)
        start_cycle, start_date = self._next_start(history, strategy)

        tasks = generate_tasks(
            user_id,
            group_name,
            accounts,
            strategy,
            cycles,
            start_cycle,
            start_date,
            self.randomizer,
        )

        # Single write: either every cycle is stored or none is
        self.db.create_tasks_batch(tasks)

        end_cycle = start_cycle + cycles - 1
        logger.debug(
            "tasks_generated",
            user_id=user_id,
            group_name=group_name,
            strategy_id=strategy.id,
            tasks=len(tasks),
            start_cycle=start_cycle,
            end_cycle=end_cycle,
        )
        return GenerationResult(
            tasks_created=len(tasks), start_cycle=start_cycle, end_cycle=end_cycle
        )

    def _next_start(self, history: GenerationHistory, strategy: Strategy) -> tuple[int, date]:
        """Return the first cycle number and base date of the next run."""
        last_executed_at = history.last_executed_at
        if (
            history.last_cycle == 0
            or last_executed_at is None
            or last_executed_at.year < MIN_PLAUSIBLE_YEAR
        ):
            return history.last_cycle + 1, (self.clock() + timedelta(days=1)).date()

        interval = self.randomizer.interval_days(strategy.interval_min, strategy.interval_max)
        return history.last_cycle + 1, last_executed_at.date() + timedelta(days=interval)
