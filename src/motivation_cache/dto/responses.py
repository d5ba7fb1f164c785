"""Response DTOs for API endpoints."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class GenerateMessageResponse(BaseModel):
    """Response DTO for POST /generar-mensaje.

    Optional fields are omitted from the JSON when not set.
    """

    mensaje: str = Field(..., description="The motivational message")
    fuente: Literal["ia", "cache", "refresh"] = Field(
        ...,
        description="'ia' first generation today, 'cache' reused, 'refresh' regenerated",
    )
    fecha: date = Field(..., description="Local calendar date of the cache bucket")
    categoria: str = Field(..., description="Normalized category")
    puntaje_usado: float = Field(
        ...,
        description="Score the message was written for",
        ge=0.0,
        le=5.0,
    )
    proximo_intento_en_min: int | None = Field(
        None,
        description="Minutes until the message may be regenerated",
        ge=0,
    )
    nota: str | None = Field(None, description="Why a stale message was kept")


class ErrorResponse(BaseModel):
    """Error envelope used by every error response."""

    mensaje: str = Field(..., description="Human-readable error")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    generator_healthy: bool = Field(..., description="Whether the generator provider is reachable")
    model: str = Field(..., description="Generator model name")


class StatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Number of stored messages", ge=0)
    staleness_window_ms: int = Field(..., description="Minimum entry age before regeneration", ge=0)
    change_threshold: float = Field(..., description="Minimum score change after the window", ge=0.0)
    model: str = Field(..., description="Generator model name")
    total_resolutions: int = Field(..., ge=0)
    ia: int = Field(..., ge=0)
    cache: int = Field(..., ge=0)
    refresh: int = Field(..., ge=0)
    reuse_rate: float = Field(..., ge=0.0, le=1.0)
    generator_calls: int = Field(..., ge=0)
    generator_failures: int = Field(..., ge=0)
    avg_generation_time_ms: float = Field(..., ge=0.0)
