"""Result of resolving a message request."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MessageSource(str, Enum):
    """Where a returned message came from."""

    IA = "ia"  # first generation for the key
    CACHE = "cache"
    REFRESH = "refresh"


@dataclass(frozen=True)
class MessageResolution:
    """Domain entity returned by MessageCacheService.resolve.

    Attributes:
        message: The message to show the user
        source: Provenance of the message
        date: Calendar date of the cache bucket
        category: Normalized category
        score_used: Score the message was written for
        minutes_until_retry: Minutes left in the staleness window (cache hits only)
        note: Explanation when a stale entry was kept
    """

    message: str
    source: MessageSource
    date: date
    category: str
    score_used: float
    minutes_until_retry: int | None = None
    note: str | None = None
