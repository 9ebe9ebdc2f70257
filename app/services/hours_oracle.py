"""Open/closed verdicts from Google Places weekday text.

Google's ``weekday_text`` is Monday-first ("月曜日: 7時00分～20時00分", ...),
while platform day numbering is Sunday=0. Every lookup goes through
``to_monday_index``.

Known limitation: only the first time range of a day is evaluated. A venue
with split hours ("11時00分～14時00分, 17時00分～22時00分") is reported closed
between and after the sessions covered by the first range.
"""
import logging
import re
from datetime import datetime
from typing import Optional, Sequence

from app.models.opening_hours import MINUTES_PER_DAY, OpenStatus, TimeRange, WeeklyHours

logger = logging.getLogger(__name__)

CLOSED_DAY_MARKERS = ("定休日", "休業日")
OPEN_24H_MARKERS = ("24 時間営業", "24時間営業")

# e.g. "7時00分～20時00分", "18時00分〜2時00分"
TIME_RANGE_PATTERN = re.compile(
    r"(\d{1,2})時(\d{2})分?[～〜~\-–](\d{1,2})時(\d{2})分?"
)

# Japanese late-night notation allows hours past 24 ("25時00分" = 1:00 next day)
MAX_HOUR = 47


def to_monday_index(platform_day: int) -> int:
    """Remap a Sunday=0 platform weekday to the Monday=0 index of weekday text.

    Sunday (0) -> 6, Monday (1) -> 0, ..., Saturday (6) -> 5.
    """
    return (platform_day + 6) % 7


def platform_day(now: datetime) -> int:
    """Sunday=0 weekday number of ``now``."""
    return now.isoweekday() % 7


def today_hours_text(
    weekly_hours: Optional[Sequence[str]], now: datetime
) -> Optional[str]:
    """Return today's entry of a Monday-first weekday table, if any."""
    if not weekly_hours:
        return None
    # Non-string entries count as missing
    table = [text if isinstance(text, str) else "" for text in weekly_hours]
    return WeeklyHours(weekday_text=table).get_day_text(
        to_monday_index(platform_day(now))
    )


def parse_time_range(text: str) -> Optional[TimeRange]:
    """Extract the first open-close range from a day's hours text.

    Returns:
        TimeRange, or None when no range is recognised
    """
    match = TIME_RANGE_PATTERN.search(text)
    if not match:
        return None

    open_hour, open_minute, close_hour, close_minute = (int(g) for g in match.groups())
    if max(open_hour, close_hour) > MAX_HOUR or max(open_minute, close_minute) > 59:
        return None

    close_total = close_hour * 60 + close_minute
    # "24時00分" ends the same day; later hours spill into the next one
    if close_total == MINUTES_PER_DAY:
        close_total = MINUTES_PER_DAY - 1

    return TimeRange(
        open_minute=(open_hour * 60 + open_minute) % MINUTES_PER_DAY,
        close_minute=close_total % MINUTES_PER_DAY,
    )


def is_within(time_range: TimeRange, minute_of_day: int) -> bool:
    """Check a minute of day against a range, both ends inclusive.

    A range whose close precedes its open closes the next day. Before the
    opening minute we are in the early-morning continuation of the previous
    session, so only the post-midnight segment applies.
    """
    open_m = time_range.open_minute
    close_m = time_range.close_minute

    if time_range.crosses_midnight:
        close_m += MINUTES_PER_DAY
        if minute_of_day < open_m:
            return minute_of_day <= close_m - MINUTES_PER_DAY

    return open_m <= minute_of_day <= close_m


def is_open_now(weekly_hours: Optional[Sequence[str]], now: datetime) -> OpenStatus:
    """Decide whether a venue is open at ``now``.

    Args:
        weekly_hours: 7 Monday-first weekday strings, or None
        now: Local wall-clock time of the venue

    Returns:
        OpenStatus.OPEN / CLOSED, or UNKNOWN when the text gives no answer
    """
    today_text = today_hours_text(weekly_hours, now)
    if today_text is None:
        return OpenStatus.UNKNOWN

    if any(marker in today_text for marker in CLOSED_DAY_MARKERS):
        return OpenStatus.CLOSED

    if any(marker in today_text for marker in OPEN_24H_MARKERS):
        return OpenStatus.OPEN

    time_range = parse_time_range(today_text)
    if time_range is None:
        logger.debug(f"[HoursOracle] Unrecognised hours text: {today_text!r}")
        return OpenStatus.UNKNOWN

    minute_of_day = now.hour * 60 + now.minute
    return OpenStatus.OPEN if is_within(time_range, minute_of_day) else OpenStatus.CLOSED
