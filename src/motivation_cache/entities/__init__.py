"""Domain entities for internal representation.

These are pure frozen dataclasses / tuples used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, CacheKey
from .resolution import MessageResolution, MessageSource

__all__ = ["CacheEntryEntity", "CacheKey", "MessageResolution", "MessageSource"]
