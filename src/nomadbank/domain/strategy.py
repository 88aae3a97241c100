"""Strategy domain service."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from nomadbank.database.base import Database
from nomadbank.domain import errors
from nomadbank.domain.entities import Strategy as StrategyEntity
from nomadbank.utils.time_parser import parse_time_of_day

DEFAULT_INTERVAL_MIN = 30
DEFAULT_INTERVAL_MAX = 60
DEFAULT_TIME_START = "09:00"
DEFAULT_TIME_END = "21:00"
DEFAULT_AMOUNT_MIN = Decimal("10")
DEFAULT_AMOUNT_MAX = Decimal("30")
DEFAULT_DAILY_LIMIT = 3


@dataclass(frozen=True)
class StrategyPreset:
    """Built-in strategy available to every user."""

    name: str
    interval_min: int
    interval_max: int
    time_start: str
    time_end: str
    skip_weekend: bool
    amount_min: Decimal
    amount_max: Decimal
    daily_limit: int


SYSTEM_PRESETS = (
    StrategyPreset("Standard", 30, 60, "09:00", "21:00", False, Decimal("10"), Decimal("30"), 3),
    StrategyPreset("Relaxed", 60, 90, "10:00", "20:00", False, Decimal("5"), Decimal("20"), 2),
    StrategyPreset("Workdays", 20, 40, "09:30", "17:30", True, Decimal("10"), Decimal("50"), 2),
)


class StrategyService:
    """Service for managing keep-alive strategies."""

    def __init__(self, db: Database):
        """Initialize strategy service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_strategy(
        self,
        user_id: str,
        name: str,
        interval_min: int = DEFAULT_INTERVAL_MIN,
        interval_max: int = DEFAULT_INTERVAL_MAX,
        time_start: str = DEFAULT_TIME_START,
        time_end: str = DEFAULT_TIME_END,
        skip_weekend: bool = False,
        amount_min: Decimal = DEFAULT_AMOUNT_MIN,
        amount_max: Decimal = DEFAULT_AMOUNT_MAX,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
    ) -> str:
        """Create a user strategy.

        Non-positive numbers fall back to the defaults and reversed ranges are
        swapped, so the stored strategy always has min <= max. Time strings are
        validated here so the scheduler can rely on them.

        Returns:
            Strategy ID

        Raises:
            ValidationError: If the name is empty or a time is not HH:MM
        """
        name = name.strip()
        if not name:
            raise errors.ValidationError("Strategy name cannot be empty")

        time_start = _normalize_time(time_start or DEFAULT_TIME_START)
        time_end = _normalize_time(time_end or DEFAULT_TIME_END)

        if interval_min <= 0:
            interval_min = DEFAULT_INTERVAL_MIN
        if interval_max <= 0:
            interval_max = DEFAULT_INTERVAL_MAX
        if interval_min > interval_max:
            interval_min, interval_max = interval_max, interval_min

        if amount_min <= 0:
            amount_min = DEFAULT_AMOUNT_MIN
        if amount_max <= 0:
            amount_max = DEFAULT_AMOUNT_MAX
        if amount_min > amount_max:
            amount_min, amount_max = amount_max, amount_min

        if daily_limit <= 0:
            daily_limit = DEFAULT_DAILY_LIMIT

        return self.db.create_strategy(
            user_id=user_id,
            name=name,
            interval_min=interval_min,
            interval_max=interval_max,
            time_start=time_start,
            time_end=time_end,
            skip_weekend=skip_weekend,
            amount_min=amount_min,
            amount_max=amount_max,
            daily_limit=daily_limit,
            is_system=False,
        )

    def get_strategy(self, strategy_id: str) -> Optional[StrategyEntity]:
        """Get strategy by ID."""
        return self.db.get_strategy(strategy_id)

    def list_strategies(self, user_id: str) -> list[StrategyEntity]:
        """List the user's own strategies plus the system presets (presets first)."""
        return self.db.list_strategies(user_id)

    def delete_strategy(self, user_id: str, strategy_id: str) -> None:
        """Delete one of the user's strategies.

        Raises:
            StrategyNotFoundError: If the strategy does not exist
            PermissionDeniedError: If it is a system preset or another user's
        """
        strategy = self.db.get_strategy(strategy_id)
        if strategy is None:
            raise errors.StrategyNotFoundError(errors.strategy_not_found(strategy_id))
        if strategy.is_system:
            raise errors.PermissionDeniedError("System strategies cannot be deleted")
        if strategy.user_id != user_id:
            raise errors.PermissionDeniedError(f"Strategy {strategy_id} belongs to another user")

        self.db.delete_strategy(strategy_id)

    def ensure_system_strategies(self) -> int:
        """Create any missing system presets.

        Returns:
            Number of presets created
        """
        existing = {s.name for s in self.db.list_strategies(user_id="") if s.is_system}
        created = 0
        for preset in SYSTEM_PRESETS:
            if preset.name in existing:
                continue
            self.db.create_strategy(
                user_id="",
                name=preset.name,
                interval_min=preset.interval_min,
                interval_max=preset.interval_max,
                time_start=preset.time_start,
                time_end=preset.time_end,
                skip_weekend=preset.skip_weekend,
                amount_min=preset.amount_min,
                amount_max=preset.amount_max,
                daily_limit=preset.daily_limit,
                is_system=True,
            )
            created += 1
        return created


def _normalize_time(value: str) -> str:
    """Validate a time string and return it zero-padded as HH:MM."""
    try:
        hour, minute = parse_time_of_day(value)
    except ValueError as e:
        raise errors.ValidationError(errors.invalid_time_of_day(value)) from e
    return f"{hour:02d}:{minute:02d}"
