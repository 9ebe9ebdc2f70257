"""Opening hours models for Google Places weekday text."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

MINUTES_PER_DAY = 24 * 60


class OpenStatus(str, Enum):
    """Tri-state open/closed verdict. ``unknown`` is a displayable state, not False."""
    OPEN = "open"
    CLOSED = "closed"
    UNKNOWN = "unknown"


class TimeRange(BaseModel):
    """One open-close range in minutes of day.

    ``close_minute < open_minute`` means the range spans midnight and closes
    on the next calendar day.
    """
    open_minute: int = Field(ge=0, lt=MINUTES_PER_DAY)
    close_minute: int = Field(ge=0, lt=MINUTES_PER_DAY)

    @property
    def crosses_midnight(self) -> bool:
        return self.close_minute < self.open_minute


class WeeklyHours(BaseModel):
    """Opening hours for a venue.

    Uses Google Places pre-formatted ``weekday_text`` which is Monday-first:
    ["月曜日: 11時00分～22時00分", ..., "日曜日: 定休日"]
    """

    weekday_text: list[str] = Field(default_factory=list)

    # Upstream flag, informational only; open status is re-derived from text
    open_now: Optional[bool] = None

    def get_day_text(self, monday_index: int) -> Optional[str]:
        """Get hours text for a day.

        Args:
            monday_index: Day of week (0=Monday, ..., 6=Sunday)

        Returns:
            Hours string for that day, or None if not available
        """
        if 0 <= monday_index < len(self.weekday_text):
            return self.weekday_text[monday_index] or None
        return None

    def has_hours(self) -> bool:
        """Check if opening hours data is available."""
        return bool(self.weekday_text)
