# -----------------------------------------------------------
# Matryoshka Embedding Service
# FastAPI transport for the embedding pipeline.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""FastAPI transport for the embedding pipeline.

The pipeline is synchronous; requests run it in a worker thread so the event
loop stays free while one request holds the session.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from embedder.errors import EmbedError
from embedder.infrastructure.clients import build_embedder
from embedder.models import EmbedRequest, EmbedResponse, ErrorResponse, HealthResponse
from embedder.pipeline import Embedder
from embedder.settings import Settings, settings as default_settings

logger = structlog.get_logger()

router = APIRouter()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def embed_error_handler(request: Request, exc: EmbedError) -> JSONResponse:
    """Map a pipeline error to its status code and caller-safe message."""
    if exc.is_client_error:
        logger.warning("embed_rejected", kind=exc.kind.value, detail=str(exc))
    else:
        logger.error("embed_failed", kind=exc.kind.value, detail=str(exc), exc_info=exc)
    debug = request.app.state.settings.debug
    return _error_response(exc.status_code, exc.user_message(debug))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed or schema-violating bodies are client errors."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning("invalid_request_body", detail=details)
    return _error_response(400, f"Invalid JSON: {details}")


@router.post(
    "/embed",
    response_model=EmbedResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def embed(body: EmbedRequest, request: Request) -> EmbedResponse:
    embedder: Embedder = request.app.state.embedder
    embedding = await asyncio.to_thread(embedder.embed, body.text, body.size)
    logger.info(
        "embedding_generated",
        text_len=len(body.text),
        embedding_size=body.size,
    )
    return EmbedResponse(embedding=embedding, size=len(embedding))


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    embedder: Embedder = request.app.state.embedder
    return HealthResponse(
        model_path=request.app.state.settings.model_path,
        dimensions=list(embedder.configuration.valid_dimensions),
    )


def create_app(
    embedder: Embedder | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        embedder: Pre-built pipeline. When omitted it is loaded from
            *app_settings* during lifespan startup; load failures abort startup.
        app_settings: Settings to use (defaults to the environment singleton).

    Returns:
        FastAPI: The configured application.
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app_instance: FastAPI):
        if app_instance.state.embedder is None:
            logger.info("lifespan_loading_embedder", model_path=app_settings.model_path)
            app_instance.state.embedder = await asyncio.to_thread(
                build_embedder, app_settings
            )
        yield
        logger.info("lifespan_shutdown")

    app = FastAPI(title="Matryoshka Embedding Service", lifespan=lifespan)
    app.state.embedder = embedder
    app.state.settings = app_settings
    app.include_router(router)
    app.add_exception_handler(EmbedError, embed_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app
