"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from motivation_cache.api.identity import get_user_id
from motivation_cache.config import settings
from motivation_cache.handlers import MessageHandler
from motivation_cache.protocols import MessageGenerator
from motivation_cache.repositories import (
    InMemoryMessageStore,
    OllamaMessageGenerator,
    OpenAIMessageGenerator,
    ZonedClock,
)
from motivation_cache.services import MessageCacheService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> MessageHandler:
    """Dependency injection for MessageHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "message_handler", None)
    if handler is None:
        raise RuntimeError("MessageHandler not initialized. Check lifespan setup.")
    return handler


def build_generator(provider: str | None = None) -> MessageGenerator:
    """Create the generator selected by MESSAGE_PROVIDER."""
    provider = provider or settings.message_provider
    if provider == "ollama":
        return OllamaMessageGenerator.create()
    if provider == "openai":
        return OpenAIMessageGenerator.create()
    raise ValueError(f"Unknown message provider: {provider}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store, generator and clock (repositories) - created explicitly
    2. Service (business logic) - stored in app.state.message_service
    3. Handler (HTTP endpoints) - stored in app.state.message_handler

    Cleanup:
        Closes the generator client and removes services from app.state
    """
    store = InMemoryMessageStore()
    generator = build_generator()
    clock = ZonedClock.create(settings.reference_timezone)

    message_service = MessageCacheService.create(
        store=store,
        generator=generator,
        clock=clock,
    )

    app.state.message_service = message_service
    app.state.message_handler = MessageHandler(message_service=message_service)

    logger.info("Message service initialized")
    logger.info("Provider: %s (%s)", settings.message_provider, generator.model_name)
    logger.info("Reference timezone: %s", clock.timezone_name)
    logger.info(
        "Staleness window: %sh, change threshold: %s",
        settings.staleness_window_hours,
        settings.change_threshold,
    )

    yield

    await generator.close()
    del app.state.message_handler
    del app.state.message_service
    logger.info("Message service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[MessageHandler, Depends(get_handler)]
UserIdDep = Annotated[str, Depends(get_user_id)]
