"""Calendar placement of transfer pairs.

The scheduler walks a cycle's pairs in order and moves a single "current
date" forward whenever placing the next pair on it would break one of the
constraints:

- no more than ``strategy.daily_limit`` tasks per date,
- an account that received on a date does not send on it, and an account
  that sent on a date does not receive on it,
- a flow A->B is not reversed (B->A) within ``REVERSAL_SPACING_DAYS``,
- optionally, no task lands on a Saturday or Sunday.
"""

import uuid
from datetime import date, timedelta
from enum import Enum
from typing import Sequence

from nomadbank.domain.entities import GeneratedTask, Strategy, TaskStatus, TransferPair
from nomadbank.domain.randomizer import Randomizer

REVERSAL_SPACING_DAYS = 3

SATURDAY = 5


class Direction(str, Enum):
    """Side of a transfer an account took on a given date."""

    IN = "in"
    OUT = "out"


def skip_weekend(day: date) -> date:
    """Return ``day`` or the first Monday after it if it falls on a weekend."""
    while day.weekday() >= SATURDAY:
        day += timedelta(days=1)
    return day


def schedule_tasks(
    user_id: str,
    group_name: str,
    cycle: int,
    pairs: Sequence[TransferPair],
    base_date: date,
    strategy: Strategy,
    randomizer: Randomizer,
) -> list[GeneratedTask]:
    """Assign each pair an execution date, time and amount.

    Args:
        user_id: Owner of the generated tasks
        group_name: Account group the tasks were generated for ("" for all)
        cycle: Cycle number stamped on every task
        pairs: Transfer pairs in the order they should be placed
        base_date: First date tasks may be placed on; recorded as anchor date
        strategy: Strategy supplying limits, time window and amount range
        randomizer: Source of amounts and execution times

    Returns:
        Pending tasks sorted by execution time
    """
    tasks: list[GeneratedTask] = []

    directions: dict[tuple[str, date], Direction] = {}
    last_flow: dict[tuple[str, str], date] = {}

    current = base_date
    daily_count = 0

    for pair in pairs:
        from_id = pair.from_account.id
        to_id = pair.to_account.id

        need_new_day = (
            daily_count >= strategy.daily_limit
            or directions.get((from_id, current)) == Direction.IN
            or directions.get((to_id, current)) == Direction.OUT
        )

        reversed_on = last_flow.get((to_id, from_id))
        if reversed_on is not None:
            earliest = reversed_on + timedelta(days=REVERSAL_SPACING_DAYS)
            if current < earliest:
                current = earliest
                daily_count = 0
                directions = {
                    key: direction
                    for key, direction in directions.items()
                    if key[1] == current
                }

        if need_new_day:
            current += timedelta(days=1)
            daily_count = 0

        if strategy.skip_weekend:
            current = skip_weekend(current)

        directions[(from_id, current)] = Direction.OUT
        directions[(to_id, current)] = Direction.IN
        last_flow[(from_id, to_id)] = current

        amount = randomizer.amount(strategy.amount_min, strategy.amount_max)
        execute_at = randomizer.time_of_day(current, strategy.time_start, strategy.time_end)

        tasks.append(
            GeneratedTask(
                id=str(uuid.uuid4()),
                user_id=user_id,
                group_name=group_name,
                cycle=cycle,
                anchor_date=base_date,
                execute_at=execute_at,
                from_account_id=from_id,
                to_account_id=to_id,
                amount=amount,
                status=TaskStatus.PENDING,
            )
        )
        daily_count += 1

    # Times within one date are drawn independently of placement order
    tasks.sort(key=lambda task: task.execute_at)
    return tasks
