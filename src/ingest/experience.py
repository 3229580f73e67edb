"""Years-of-experience estimation from upstream duration data.

Two algorithms, picked by the upstream shape:
  - interval sum over epoch-second start/end timestamps (Shape A)
  - year-range parsing of free-text durations like "2019 - 2022" (Shape B)

Entries with missing or unusable duration data contribute zero; they
never fail the whole estimate.
"""

import logging
import math
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Protocol

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
_YEAR_TOKEN = re.compile(r"\b\d{4}\b")


class TimedPosition(Protocol):
    """Anything exposing epoch-second bounds and a current-role flag."""

    @property
    def start_time(self) -> float | None: ...
    @property
    def end_time(self) -> float | None: ...
    @property
    def is_current(self) -> bool | None: ...


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def years_from_intervals(
    positions: Iterable[TimedPosition],
    now: datetime | None = None,
    days_per_year: float = 365.25,
) -> int:
    """Sum position durations in fractional years, rounded, floored at 0.

    Args:
        positions: Positions with start_time/end_time in epoch seconds.
        now: Estimation instant for current roles without an end (default: now, UTC).
        days_per_year: Length of a year in days.

    Returns:
        Total years of experience as a non-negative integer.
    """
    now_ts = (now or datetime.now(timezone.utc)).timestamp()
    seconds_per_year = days_per_year * SECONDS_PER_DAY

    total = 0.0
    for position in positions:
        start, end = position.start_time, position.end_time
        if start is None:
            continue
        if end is not None:
            elapsed = end - start
        elif position.is_current:
            elapsed = now_ts - start
        else:
            continue
        if not math.isfinite(elapsed):
            logger.debug("Skipping position with overflowing interval %r..%r", start, end)
            continue
        if elapsed > 0:
            total += elapsed / seconds_per_year

    if not math.isfinite(total):
        return 0
    return max(0, round_half_up(total))


def years_from_year_ranges(
    durations: Iterable[str | None],
    current_year: int | None = None,
    floor: int = 1,
) -> int:
    """Sum year spans parsed from free-text durations, floored at ``floor``.

    Two or more year tokens count as ``second - first``; a single token is an
    open-ended role counted up to ``current_year``.
    """
    if current_year is None:
        current_year = datetime.now().year

    total = 0
    for duration in durations:
        if not duration:
            continue
        years = [int(tok) for tok in _YEAR_TOKEN.findall(duration)]
        if len(years) >= 2:
            span = years[1] - years[0]
        elif len(years) == 1:
            span = current_year - years[0]
        else:
            logger.debug("No year tokens in duration %r", duration)
            continue
        total += max(0, span)

    return max(floor, total)
