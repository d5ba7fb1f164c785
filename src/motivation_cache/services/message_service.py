"""Message cache service for core business logic.

This service decides, for one (user, day, category), whether the stored
motivational message is reused or a new one is generated, coordinating
the store, the generator and the clock.
"""

import asyncio
import logging
import math
import time
from contextlib import asynccontextmanager

from motivation_cache.config import settings
from motivation_cache.entities import (
    CacheEntryEntity,
    CacheKey,
    MessageResolution,
    MessageSource,
)
from motivation_cache.exceptions import GenerationError, ValidationError
from motivation_cache.models import ResolutionStats
from motivation_cache.protocols import Clock, MessageGenerator, MessageStore

logger = logging.getLogger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 5.0

_MS_PER_MINUTE = 60_000
_MS_PER_HOUR = 3_600_000


def normalize_category(value: object) -> str:
    """Trim surrounding whitespace; an empty category is allowed.

    Raises:
        ValidationError: If the category is missing
    """
    if value is None:
        raise ValidationError("category is required")
    return str(value).strip()


def clamp_score(value: object) -> float:
    """Clamp a score to [0, 5]; non-numeric or non-finite input becomes 0.

    Integers too large for a float count as infinite, so they also become 0.
    """
    try:
        score = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return MIN_SCORE
    if not math.isfinite(score):
        return MIN_SCORE
    return min(MAX_SCORE, max(MIN_SCORE, score))


class MessageCacheService:
    """Per-user, per-category, per-day motivational message cache.

    Two gates bound calls to the generator:
    - Staleness window: an entry younger than the window is always reused.
    - Change threshold: once the window has passed, the entry is reused
      unless the score moved by at least the threshold.

    ``force=True`` skips both gates. Reuse never touches the stored entry,
    so a kept stale entry does not restart its window.

    This service depends on PROTOCOLS, not concrete implementations:
    - MessageStore: in-memory today, any keyed store tomorrow
    - MessageGenerator: OpenAI, Ollama, or a scripted fake in tests
    - Clock: system clock in a reference timezone, or a fixed clock

    Example:
        ```python
        service = MessageCacheService.create(
            store=InMemoryMessageStore(),
            generator=OpenAIMessageGenerator.create(),
            clock=ZonedClock.create("America/Guayaquil"),
        )
        result = await service.resolve("u1", "Puntualidad", 4.8)
        result.source  # MessageSource.IA
        ```
    """

    def __init__(
        self,
        store: MessageStore,
        generator: MessageGenerator,
        clock: Clock,
        staleness_window_ms: int | None = None,
        change_threshold: float | None = None,
        generation_timeout: float | None = None,
    ) -> None:
        """Initialize the message cache service.

        Args:
            store: Message store backend (required).
            generator: Text generation service (required).
            clock: Source of the current instant and local date (required).
            staleness_window_ms: Minimum entry age before regeneration. Defaults to settings.
            change_threshold: Minimum score delta after the window. Defaults to settings.
            generation_timeout: Seconds before a generator call fails; 0 disables.
                Defaults to settings.
        """
        self._store = store
        self._generator = generator
        self._clock = clock
        self._window_ms = (
            settings.staleness_window_ms if staleness_window_ms is None else staleness_window_ms
        )
        self._threshold = (
            settings.change_threshold if change_threshold is None else change_threshold
        )
        self._timeout = (
            settings.generation_timeout_seconds if generation_timeout is None else generation_timeout
        )
        self._locks: dict[CacheKey, asyncio.Lock] = {}
        self._lock_users: dict[CacheKey, int] = {}
        self._stats = ResolutionStats()

    @classmethod
    def create(
        cls,
        store: MessageStore,
        generator: MessageGenerator,
        clock: Clock,
        staleness_window_ms: int | None = None,
        change_threshold: float | None = None,
        generation_timeout: float | None = None,
    ) -> "MessageCacheService":
        """Factory method to create MessageCacheService with settings defaults."""
        return cls(
            store=store,
            generator=generator,
            clock=clock,
            staleness_window_ms=staleness_window_ms,
            change_threshold=change_threshold,
            generation_timeout=generation_timeout,
        )

    async def resolve(
        self,
        user_id: str,
        category: object,
        raw_score: object,
        force: bool = False,
    ) -> MessageResolution:
        """Return the message for a user and category, generating it if needed.

        Business logic:
        1. Normalize category and score, read the clock once
        2. No entry for (user, today, category) -> generate, source "ia"
        3. Entry younger than the window -> reuse, with minutes until retry
        4. Older entry, score change below threshold -> reuse, with a note
        5. Otherwise (or force) -> regenerate and overwrite, source "refresh"

        Args:
            user_id: Identity resolved by the caller
            category: Raw category; trimmed
            raw_score: Raw score; clamped to [0, 5]
            force: Regenerate regardless of age and score change

        Returns:
            MessageResolution describing the message and its provenance

        Raises:
            ValidationError: If the category is missing
            GenerationError: If the generator fails; the stored entry is untouched
        """
        category = normalize_category(category)
        score = clamp_score(raw_score)
        now_ms = self._clock.now_ms()
        key = CacheKey(user_id, self._clock.today(), category)

        if not force:
            entry = self._store.get(key)
            if entry is not None:
                reused = self._try_reuse(entry, score, now_ms)
                if reused is not None:
                    return reused

        async with self._key_lock(key):
            # Another request may have generated while we waited.
            entry = self._store.get(key)
            if entry is not None and not force:
                reused = self._try_reuse(entry, score, now_ms)
                if reused is not None:
                    return reused

            message = await self._generate(category, score)
            self._store.put(
                key,
                CacheEntryEntity(
                    message=message,
                    date=key.date,
                    user_id=user_id,
                    category=category,
                    score=score,
                    created_at_ms=now_ms,
                ),
            )

        source = MessageSource.IA if entry is None else MessageSource.REFRESH
        logger.debug("%s: %s for %s (score %.2f)", source.value, category, user_id, score)
        self._stats.record_resolution(source)
        return MessageResolution(
            message=message,
            source=source,
            date=key.date,
            category=category,
            score_used=score,
        )

    def _try_reuse(
        self,
        entry: CacheEntryEntity,
        score: float,
        now_ms: int,
    ) -> MessageResolution | None:
        """Build a cache resolution if either gate keeps the entry, else None."""
        # An entry written after now_ms by a concurrent request counts as brand new.
        elapsed_ms = max(0, now_ms - entry.created_at_ms)

        if elapsed_ms < self._window_ms:
            remaining_ms = self._window_ms - elapsed_ms
            minutes = max(0, -(-remaining_ms // _MS_PER_MINUTE))
            logger.debug("cache: %s for %s, %d min left", entry.category, entry.user_id, minutes)
            return self._reuse(entry, minutes_until_retry=minutes)

        if abs(score - entry.score) < self._threshold:
            logger.debug("cache: %s for %s, score change below threshold", entry.category, entry.user_id)
            return self._reuse(entry, note=self.unchanged_note)

        return None

    def _reuse(
        self,
        entry: CacheEntryEntity,
        minutes_until_retry: int | None = None,
        note: str | None = None,
    ) -> MessageResolution:
        self._stats.record_resolution(MessageSource.CACHE)
        return MessageResolution(
            message=entry.message,
            source=MessageSource.CACHE,
            date=entry.date,
            category=entry.category,
            score_used=entry.score,
            minutes_until_retry=minutes_until_retry,
            note=note,
        )

    async def _generate(self, category: str, score: float) -> str:
        """Call the generator, with the configured timeout."""
        start_time = time.perf_counter()
        try:
            if self._timeout:
                return await asyncio.wait_for(
                    self._generator.generate(category, score), timeout=self._timeout
                )
            return await self._generator.generate(category, score)
        except asyncio.TimeoutError as e:
            self._stats.record_failure()
            logger.error("Generation for %r timed out after %ss", category, self._timeout)
            raise GenerationError(f"Generation timed out after {self._timeout}s") from e
        except GenerationError:
            self._stats.record_failure()
            logger.exception("Generation for %r failed", category)
            raise
        except Exception as e:
            self._stats.record_failure()
            logger.exception("Generator raised unexpectedly for %r", category)
            raise GenerationError(f"Generator failed: {e}") from e
        finally:
            self._stats.record_generation((time.perf_counter() - start_time) * 1000)

    @asynccontextmanager
    async def _key_lock(self, key: CacheKey):
        """Hold the per-key lock; it is dropped once no request uses it."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[key] -= 1
            if self._lock_users[key] == 0:
                del self._lock_users[key]
                del self._locks[key]

    @property
    def in_flight_keys(self) -> int:
        """Number of keys with a generation running or waiting."""
        return len(self._locks)

    @property
    def unchanged_note(self) -> str:
        """Note attached when a stale entry is kept for lack of score change."""
        return f"Sin cambio significativo tras {self._window_ms / _MS_PER_HOUR:g}h; se mantiene mensaje"

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with store size, gate settings and resolution counters
        """
        stats: dict = {
            "total_entries": self._store.count_all(),
            "staleness_window_ms": self._window_ms,
            "change_threshold": self._threshold,
            "model": self._generator.model_name,
        }
        stats.update(self._stats.to_dict())
        return stats

    async def is_healthy(self) -> bool:
        """Check if the generator is reachable."""
        return await self._generator.is_available()

    @property
    def store(self) -> MessageStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def generator(self) -> MessageGenerator:
        """Get the underlying generator (for testing)."""
        return self._generator
