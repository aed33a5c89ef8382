"""Countdown Calculator Component.

Turns a target instant and a reference "now" into either an expiry signal or
whole days, hours, minutes and seconds remaining. Also owns the parsing of the
caller-supplied date string into an aware datetime.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import pytz

logger = logging.getLogger(__name__)

# Time calculations
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

UNIT_LABELS = ("DAYS", "HOURS", "MINS", "SECS")

# Date-only ISO strings are midnight UTC, like a browser's Date parser treats them
_DATE_ONLY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


@dataclass(frozen=True)
class CountdownResult:
    expired: bool
    days: Optional[int] = None
    hours: Optional[int] = None
    minutes: Optional[int] = None
    seconds: Optional[int] = None

    @property
    def total_seconds(self) -> Optional[int]:
        """Whole seconds remaining, or None once expired."""
        if self.expired:
            return None
        return (self.days * SECONDS_PER_DAY + self.hours * SECONDS_PER_HOUR
                + self.minutes * SECONDS_PER_MINUTE + self.seconds)

    def units(self) -> List[Tuple[int, str]]:
        """Values paired with their labels in display order (days first)."""
        if self.expired:
            return []
        return list(zip((self.days, self.hours, self.minutes, self.seconds), UNIT_LABELS))


EXPIRED = CountdownResult(expired=True)


def compute_countdown(target: datetime, now: datetime) -> CountdownResult:
    """Decompose the time left between now and target.

    A target equal to now is already expired; only strictly positive
    differences produce a countdown. The remainder is floored to whole seconds.

    Args:
        target: Aware datetime the countdown runs to
        now: Aware datetime the countdown is evaluated at

    Returns:
        CountdownResult: expired, or the days/hours/minutes/seconds breakdown
    """
    diff = target - now
    if diff <= timedelta(0):
        return EXPIRED

    remaining = diff // timedelta(seconds=1)
    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remaining, SECONDS_PER_MINUTE)
    return CountdownResult(expired=False, days=days, hours=hours, minutes=minutes, seconds=seconds)


def parse_target_date(value: str, default_tz=pytz.utc) -> datetime:
    """Parse a caller-supplied date string into an aware datetime.

    Args:
        value: ISO 8601 date or date-time (e.g., 2025-12-31T23:59:59, 2025-12-31T23:59:59Z)
        default_tz: pytz timezone applied to date-times without an offset

    Returns:
        datetime: Timezone-aware target instant

    Raises:
        ValueError: If value cannot be parsed
    """
    try:
        text = value.strip()
        if _DATE_ONLY_PATTERN.match(text):
            return pytz.utc.localize(datetime.fromisoformat(text))

        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except (ValueError, AttributeError) as parse_err:
        logger.debug(f"Failed to parse target date '{value}': {parse_err}")
        raise ValueError(f"Invalid date '{value}': {parse_err}") from parse_err

    if parsed.tzinfo is None:
        parsed = default_tz.localize(parsed)
    return parsed


def utc_now() -> datetime:
    return datetime.now(pytz.utc)
