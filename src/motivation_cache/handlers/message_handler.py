"""HTTP handlers for motivational message operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error mapping.
"""

import logging

from fastapi import HTTPException, status

from motivation_cache.dto import (
    GenerateMessageRequest,
    GenerateMessageResponse,
    HealthCheckResponse,
    StatsResponse,
)
from motivation_cache.exceptions import GenerationError, ValidationError
from motivation_cache.services import MessageCacheService

logger = logging.getLogger(__name__)

VALIDATION_ERROR_MESSAGE = "Se requiere 'categoria' y 'puntaje' numérico"
GENERATION_ERROR_MESSAGE = "Error generando mensaje motivacional"


class MessageHandler:
    """HTTP handlers for message operations.

    This handler delegates business logic to MessageCacheService
    and handles HTTP-specific concerns like:
    - Converting resolutions to DTOs
    - Mapping error kinds to status codes

    Example:
        ```python
        handler = MessageHandler(message_service=service)

        @app.post("/generar-mensaje", response_model=GenerateMessageResponse)
        async def generate(request: GenerateMessageRequest):
            return await handler.generate_message(request, user_id="anon")
        ```
    """

    def __init__(self, message_service: MessageCacheService) -> None:
        """Initialize the message handler.

        Args:
            message_service: The message cache service (required).
        """
        self._service = message_service

    async def generate_message(
        self,
        request: GenerateMessageRequest,
        user_id: str,
    ) -> GenerateMessageResponse:
        """Handle POST /generar-mensaje requests.

        Args:
            request: The validated request DTO
            user_id: Identity resolved from the session or the anonymous bucket

        Returns:
            GenerateMessageResponse with the message and its provenance

        Raises:
            HTTPException: 400 on invalid input, 500 on generation failure
        """
        try:
            result = await self._service.resolve(
                user_id=user_id,
                category=request.categoria,
                raw_score=request.puntaje,
                force=bool(request.force),
            )
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=VALIDATION_ERROR_MESSAGE,
            ) from e
        except GenerationError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=GENERATION_ERROR_MESSAGE,
            ) from e
        except Exception as e:
            logger.exception("Unexpected failure resolving message for %s", user_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=GENERATION_ERROR_MESSAGE,
            ) from e

        return GenerateMessageResponse(
            mensaje=result.message,
            fuente=result.source.value,
            fecha=result.date,
            categoria=result.category,
            puntaje_usado=result.score_used,
            proximo_intento_en_min=result.minutes_until_retry,
            nota=result.note,
        )

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        return StatsResponse(**self._service.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with generator reachability
        """
        is_healthy = await self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            generator_healthy=is_healthy,
            model=self._service.generator.model_name,
        )
