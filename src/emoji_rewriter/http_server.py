"""emoji-rewriter HTTP REST API."""

import asyncio
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from hypercorn.asyncio import serve
from hypercorn.config import Config as HyperConfig


if TYPE_CHECKING:
    from hypercorn.typing import ASGIFramework

from emoji_rewriter import __version__
from emoji_rewriter.config.logging import get_logger, setup_logging
from emoji_rewriter.config.settings import get_settings, log_env_status
from emoji_rewriter.exceptions import EmojiRewriterError, ErrorCode
from emoji_rewriter.infra.emoji_parser import get_emoji_parser
from emoji_rewriter.middleware import RequestIdMiddleware, get_request_id
from emoji_rewriter.models.error import (
    ErrorDetail,
    ErrorResponse,
    ValidationErrorResponse,
)
from emoji_rewriter.routes import emoji as emoji_routes
from emoji_rewriter.routes import health as health_routes


__all__ = ["app", "lifespan", "main"]


log = get_logger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the sequence table and run the probe before serving"""
    setup_logging()
    log_env_status(get_settings())

    parser = get_emoji_parser()
    log.info(
        "EMOJI_ENGINE_READY sequences={} native_supported={}",
        len(parser.matcher.table),
        parser.supports_native_emoji(),
    )

    yield


# =============================================================================
# App Setup
# =============================================================================

app = FastAPI(
    title="Emoji Rewriter",
    description="Emoji detection and <img> replacement for text and HTML",
    version=__version__,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

app.add_middleware(RequestIdMiddleware)

app.include_router(emoji_routes.router)
app.include_router(health_routes.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(EmojiRewriterError)
async def emoji_rewriter_error_handler(
    request: Request, exc: EmojiRewriterError
) -> ORJSONResponse:
    """Render EmojiRewriterError subclasses as ErrorResponse."""
    exc.context.request_id = get_request_id()

    log.warning(
        "EXCEPTION error_code={} type={} message={} request_id={}",
        exc.error_code.value,
        exc.__class__.__name__,
        exc.message,
        exc.context.request_id,
    )

    return ORJSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=exc.error_code.value,
            error_type=exc.__class__.__name__,
            message=exc.message,
            request_id=exc.context.request_id,
            details=exc.context.details,
        ).model_dump(),
        headers={"X-Request-ID": exc.context.request_id or ""},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Render pydantic validation failures with per-field details."""
    request_id = get_request_id()

    errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in err["loc"]),
            message=err["msg"],
            value=err.get("input"),
        )
        for err in exc.errors()
    ]

    log.warning(
        "VALIDATION_ERROR fields={} request_id={}",
        [e.field for e in errors],
        request_id,
    )

    return ORJSONResponse(
        status_code=422,
        content=ValidationErrorResponse(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            error_type="ValidationError",
            message="Input validation failed",
            request_id=request_id,
            details=None,
            errors=errors,
        ).model_dump(),
        headers={"X-Request-ID": request_id or ""},
    )


@app.exception_handler(Exception)
async def generic_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render unexpected exceptions as INTERNAL_ERROR.

    The stack trace goes to the log only.
    """
    request_id = get_request_id()

    log.exception(
        "UNHANDLED_EXCEPTION type={} message={} request_id={}",
        exc.__class__.__name__,
        str(exc),
        request_id,
    )

    return ORJSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_code=ErrorCode.INTERNAL_ERROR.value,
            error_type=exc.__class__.__name__,
            message="Internal server error",
            request_id=request_id,
            details=None,
        ).model_dump(),
        headers={"X-Request-ID": request_id or ""},
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Run HTTP server"""
    settings = get_settings()

    hyper_config = HyperConfig()
    hyper_config.bind = [f"{settings.http.host}:{settings.http.port}"]
    hyper_config.use_reloader = os.getenv("HTTP_RELOAD", "false").lower() == "true"
    hyper_config.alpn_protocols = (
        ["h2", "http/1.1"] if settings.http.http2_enabled else ["http/1.1"]
    )
    log.info(
        "HTTP_SERVER_START host={} port={} http2={}",
        settings.http.host,
        settings.http.port,
        settings.http.http2_enabled,
    )

    asyncio.run(serve(cast("ASGIFramework", app), hyper_config))


if __name__ == "__main__":
    main()
