"""Clock protocol."""

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant and the local calendar date.

    The calendar date is computed in a fixed reference timezone.
    """

    def now_ms(self) -> int:
        """Return the current instant in epoch milliseconds."""
        ...

    def today(self) -> date:
        """Return today's date in the reference timezone."""
        ...
