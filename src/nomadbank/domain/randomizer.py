"""Bounded randomness for task generation.

Every random draw made while generating tasks goes through a Randomizer,
which wraps an injected ``random.Random``. Pass a seeded generator (or a
scripted stand-in exposing ``random``, ``randrange`` and ``shuffle``) to make
a generation run reproducible.
"""

import random
from datetime import date, datetime
from decimal import Decimal, ROUND_DOWN, ROUND_UP
from typing import Sequence, TypeVar, Union

from nomadbank.utils.time_parser import parse_time_of_day_or_default

T = TypeVar("T")

Number = Union[Decimal, int, float, str]

# Quantization exponents for 0, 1 and 2 decimal places
AMOUNT_PRECISIONS = (Decimal("1"), Decimal("0.1"), Decimal("0.01"))

FALLBACK_WINDOW_MINUTES = 60
MINUTES_PER_DAY = 24 * 60


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Randomizer:
    """Source of interval jitter, human-looking amounts and execution times."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize randomizer.

        Args:
            rng: Random generator to draw from. A fresh, unseeded generator is
                created when omitted so instances never share state.
        """
        self._rng = rng or random.Random()

    def interval_days(self, minimum: int, maximum: int) -> int:
        """Return a uniform whole number of days in [minimum, maximum].

        A maximum below the minimum is clamped up to the minimum.
        """
        if maximum < minimum:
            maximum = minimum
        return minimum + self._rng.randrange(maximum - minimum + 1)

    def amount(self, minimum: Number, maximum: Number) -> Decimal:
        """Return a uniform amount in [minimum, maximum).

        The draw is truncated toward zero to 0, 1 or 2 decimal places, each
        precision chosen with equal probability, so amounts read like ones a
        person would type. If truncating to whole units or tenths falls below
        the minimum (a minimum with cents), the two-decimal truncation is used.
        A minimum with more than two decimals is rounded up to cents when no
        two-decimal amount fits the range, which may reach the maximum.
        """
        low = _to_decimal(minimum)
        high = _to_decimal(maximum)

        base = low + (high - low) * Decimal(self._rng.random())
        exponent = AMOUNT_PRECISIONS[self._rng.randrange(len(AMOUNT_PRECISIONS))]

        value = base.quantize(exponent, rounding=ROUND_DOWN)
        if value < low:
            value = base.quantize(AMOUNT_PRECISIONS[-1], rounding=ROUND_DOWN)
        if value < low:
            # No two-decimal amount lies in a range like [10.005, 10.009)
            value = low.quantize(AMOUNT_PRECISIONS[-1], rounding=ROUND_UP)
        return value

    def time_of_day(self, day: date, time_start: str, time_end: str) -> datetime:
        """Return a random moment on ``day`` inside the [start, end) window.

        Unparseable times fall back to 09:00. An end at or before the start
        widens the window to one hour after the start, cut off at midnight.
        """
        start_hour, start_minute = parse_time_of_day_or_default(time_start)
        end_hour, end_minute = parse_time_of_day_or_default(time_end)

        start_minutes = start_hour * 60 + start_minute
        end_minutes = end_hour * 60 + end_minute
        if end_minutes <= start_minutes:
            # A widened window never runs past midnight
            end_minutes = min(start_minutes + FALLBACK_WINDOW_MINUTES, MINUTES_PER_DAY)

        offset = start_minutes + self._rng.randrange(end_minutes - start_minutes)
        second = self._rng.randrange(60)

        return datetime(day.year, day.month, day.day, offset // 60, offset % 60, second)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Return a uniformly shuffled copy of ``items``."""
        result = list(items)
        self._rng.shuffle(result)
        return result
