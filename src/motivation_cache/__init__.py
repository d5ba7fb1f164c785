"""Motivation Cache - daily motivational messages with an in-memory cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (MessageStore, MessageGenerator, Clock)
    - repositories: Store, LLM generator and clock implementations
    - services: Business logic (reuse vs. regenerate decisions)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from motivation_cache.repositories import (
        InMemoryMessageStore,
        OpenAIMessageGenerator,
        ZonedClock,
    )
    from motivation_cache.services import MessageCacheService

    service = MessageCacheService.create(
        store=InMemoryMessageStore(),
        generator=OpenAIMessageGenerator.create(),
        clock=ZonedClock.create(),
    )
    ```

For HTTP API:
    ```python
    from motivation_cache.api.app import app
    ```
"""

from motivation_cache.config import get_settings, settings
from motivation_cache.dto import GenerateMessageRequest, GenerateMessageResponse
from motivation_cache.entities import (
    CacheEntryEntity,
    CacheKey,
    MessageResolution,
    MessageSource,
)
from motivation_cache.exceptions import GenerationError, MotivationCacheError, ValidationError
from motivation_cache.handlers import MessageHandler
from motivation_cache.protocols import Clock, MessageGenerator, MessageStore
from motivation_cache.repositories import (
    InMemoryMessageStore,
    OllamaMessageGenerator,
    OpenAIMessageGenerator,
    ZonedClock,
)
from motivation_cache.services import MessageCacheService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "Clock",
    "MessageGenerator",
    "MessageStore",
    # Services (business logic)
    "MessageCacheService",
    # Handlers (HTTP)
    "MessageHandler",
    # Repositories
    "InMemoryMessageStore",
    "OllamaMessageGenerator",
    "OpenAIMessageGenerator",
    "ZonedClock",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheKey",
    "MessageResolution",
    "MessageSource",
    # Errors
    "MotivationCacheError",
    "ValidationError",
    "GenerationError",
    # DTOs (API contracts)
    "GenerateMessageRequest",
    "GenerateMessageResponse",
]
