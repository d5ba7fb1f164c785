import logging
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from motivation_cache.api.dependencies import HandlerDep, UserIdDep, lifespan
from motivation_cache.config import settings
from motivation_cache.dto import (
    ErrorResponse,
    GenerateMessageRequest,
    GenerateMessageResponse,
    HealthCheckResponse,
    StatsResponse,
)
from motivation_cache.handlers import VALIDATION_ERROR_MESSAGE

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level, logging.INFO),
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Motivation Cache API",
    description="Daily motivational messages per user and category, cached in memory",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400 with the service's error envelope."""
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"mensaje": VALIDATION_ERROR_MESSAGE},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"mensaje": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"mensaje": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Motivation Cache API",
        "version": "0.1.0",
        "description": "Daily motivational messages per user and category, cached in memory",
        "endpoints": {
            "message": "/generar-mensaje",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep, response: Response) -> HealthCheckResponse:
    """Health check endpoint; 503 when the generator is unreachable."""
    result = await handler.health_check()
    if not result.generator_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result


@app.post(
    "/generar-mensaje",
    response_model=GenerateMessageResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_message(
    request: GenerateMessageRequest,
    response: Response,
    handler: HandlerDep,
    user_id: UserIdDep,
) -> GenerateMessageResponse:
    """
    Return today's motivational message for the caller and category.

    Args:
        request: Category, score and optional force flag.

    Returns:
        The message with its source ("ia", "cache" or "refresh").
    """
    result = await handler.generate_message(request, user_id)
    # Freshness is decided here, never by browsers or proxies.
    response.headers["Cache-Control"] = "no-store"
    return result


@app.get("/stats", response_model=StatsResponse)
async def get_stats(handler: HandlerDep) -> StatsResponse:
    """Get cache statistics."""
    return await handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "motivation_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
