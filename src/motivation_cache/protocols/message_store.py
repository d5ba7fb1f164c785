"""Message store protocol.

Defines the interface for the store holding one generated message per
(user, date, category). The lifecycle is create-then-overwrite only:
there is no delete and no eviction.
"""

from typing import Protocol, runtime_checkable

from motivation_cache.entities import CacheEntryEntity, CacheKey


@runtime_checkable
class MessageStore(Protocol):
    """Protocol for message store backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def get(self, key: CacheKey) -> CacheEntryEntity | None:
        """Get the entry stored under a key.

        Args:
            key: The structured cache key

        Returns:
            The entry, or None on a miss
        """
        ...

    def put(self, key: CacheKey, entry: CacheEntryEntity) -> None:
        """Insert or replace the entry stored under a key.

        Args:
            key: The structured cache key
            entry: The complete new entry
        """
        ...

    def count_all(self) -> int:
        """Count total entries in the store.

        Returns:
            Total number of stored entries
        """
        ...
