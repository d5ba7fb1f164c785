"""In-memory implementation of MessageStore.

Entries live in a dict for the lifetime of the process. Nothing is
persisted, so a restart starts with an empty store.
"""

from motivation_cache.entities import CacheEntryEntity, CacheKey


class InMemoryMessageStore:
    """Dict-backed message store.

    This class satisfies the MessageStore protocol through structural
    typing - no explicit inheritance needed.

    Entries are frozen dataclasses, so handing them out never exposes
    mutable state. Mutation happens only from the event loop thread.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, CacheEntryEntity] = {}

    def get(self, key: CacheKey) -> CacheEntryEntity | None:
        return self._entries.get(key)

    def put(self, key: CacheKey, entry: CacheEntryEntity) -> None:
        if entry.key != key:
            raise ValueError(f"Entry for {entry.key} cannot be stored under {key}")
        self._entries[key] = entry

    def count_all(self) -> int:
        return len(self._entries)
