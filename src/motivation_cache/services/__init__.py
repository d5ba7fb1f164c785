"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Store / Generator / Clock)

Usage:
    ```python
    from motivation_cache.services import MessageCacheService

    service = MessageCacheService.create(store=store, generator=generator, clock=clock)
    result = await service.resolve("u1", "Puntualidad", 4.8)
    ```
"""

from .message_service import MessageCacheService, clamp_score, normalize_category

__all__ = [
    "MessageCacheService",
    "clamp_score",
    "normalize_category",
]
