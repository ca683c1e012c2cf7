"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_refinery.api.middleware import RequestIDMiddleware
from prompt_refinery.api.routes import api_router
from prompt_refinery.core.errors import PromptRefineryError
from prompt_refinery.infrastructure.redis import redis_client
from prompt_refinery.logging_config import setup_logging
from prompt_refinery.settings import settings

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    if settings.redis_enabled:
        await redis_client.connect()
    elif settings.environment == "production":
        logger.warning(
            "Redis disabled in production - daily usage counts are kept in memory "
            "and reset on every restart"
        )
    logger.info(
        f"Prompt Refinery started - llm_mode={settings.llm_mode}, "
        f"auth_provider={settings.auth_provider}, redis_enabled={settings.redis_enabled}"
    )
    yield
    # Shutdown
    await redis_client.disconnect()


app = FastAPI(
    title="Prompt Refinery API",
    description="Conversational prompt refinement with a daily generation quota",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(PromptRefineryError)
async def prompt_refinery_error_handler(request: Request, exc: PromptRefineryError) -> JSONResponse:
    """Translate service errors into ``{"error": ...}`` responses."""
    if exc.status_code >= 500:
        logger.error(
            f"Request failed - path={request.url.path}, error={type(exc).__name__}",
            exc_info=exc,
        )
    else:
        logger.info(
            f"Request rejected - path={request.url.path}, status={exc.status_code}, "
            f"error={type(exc).__name__}"
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same 400 as an invalid message."""
    logger.info(f"Invalid request body - path={request.url.path}, errors={exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Message is required or too long"})


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
