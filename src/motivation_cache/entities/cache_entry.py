"""Cache entry domain entity."""

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple


class CacheKey(NamedTuple):
    """Structured key for one user's message of one category on one day.

    A tuple rather than a delimited string, so no component can collide
    with its neighbours whatever characters the category contains.
    """

    user_id: str
    date: date
    category: str


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a generated motivational message.

    Attributes:
        message: The generated text
        date: Local calendar date (reference timezone) the entry belongs to
        user_id: Identity the message was generated for
        category: Normalized category
        score: Clamped score the message was generated for
        created_at_ms: Epoch milliseconds of the last (re)generation
    """

    message: str
    date: date
    user_id: str
    category: str
    score: float
    created_at_ms: int

    @property
    def key(self) -> CacheKey:
        """The cache key this entry is stored under."""
        return CacheKey(self.user_id, self.date, self.category)
