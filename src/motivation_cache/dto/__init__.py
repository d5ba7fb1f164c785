"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.
Field names follow the public (Spanish) wire format.

Internal domain logic should use entities from the entities package.
"""

from .requests import GenerateMessageRequest
from .responses import (
    ErrorResponse,
    GenerateMessageResponse,
    HealthCheckResponse,
    StatsResponse,
)

__all__ = [
    "GenerateMessageRequest",
    "GenerateMessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "StatsResponse",
]
