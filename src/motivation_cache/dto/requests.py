"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class GenerateMessageRequest(BaseModel):
    """Request DTO for POST /generar-mensaje.

    The handler will convert this to a call to the service layer, which
    trims the category and clamps the score.
    """

    categoria: str | int | float | bool = Field(
        ...,
        description="Category to write about (e.g. 'Puntualidad'); trimmed, may be empty",
    )
    puntaje: float = Field(
        ...,
        description="Score in the category; clamped to 0-5, non-finite values become 0",
    )
    force: bool | None = Field(
        False,
        description="Regenerate even if a recent message exists",
    )

    @field_validator("puntaje", mode="before")
    @classmethod
    def _require_number(cls, value: Any) -> Any:
        # Numeric strings and booleans are not scores.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("puntaje must be a number")
        try:
            float(value)
        except OverflowError:
            # Integers past the float range are infinite; the service clamps them to 0.
            return float("inf")
        return value
