"""System clock bound to a reference timezone."""

import time
from datetime import date, datetime

import pytz

from motivation_cache.config import settings


class ZonedClock:
    """Clock implementation reading the system time.

    This class satisfies the Clock protocol. "Today" is the calendar date
    in the configured reference timezone, not the host's local zone.

    Example:
        ```python
        clock = ZonedClock.create("America/Guayaquil")
        clock.today()   # datetime.date(2026, 10, 17)
        clock.now_ms()  # 1792245600000
        ```
    """

    def __init__(self, timezone_name: str | None = None) -> None:
        """Initialize the clock.

        Args:
            timezone_name: IANA timezone name. Defaults to settings.reference_timezone.
        """
        self._tz = pytz.timezone(timezone_name or settings.reference_timezone)

    @classmethod
    def create(cls, timezone_name: str | None = None) -> "ZonedClock":
        """Factory method to create ZonedClock with defaults."""
        return cls(timezone_name=timezone_name)

    @property
    def timezone_name(self) -> str:
        return self._tz.zone

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def today(self) -> date:
        return datetime.now(self._tz).date()
