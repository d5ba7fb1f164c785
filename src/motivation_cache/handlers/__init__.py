"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Store / Generator / Clock)
"""

from .message_handler import (
    GENERATION_ERROR_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    MessageHandler,
)

__all__ = [
    "GENERATION_ERROR_MESSAGE",
    "VALIDATION_ERROR_MESSAGE",
    "MessageHandler",
]
