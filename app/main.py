# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the cleaning API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    CleaningServiceException,
    cleaning_service_exception_handler,
    validation_exception_handler,
)
from app.routers import health, actions, chat
from cleaning_actions import OPERATOR_REGISTRY, __version__

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration on startup; there is nothing to clean up on
    shutdown since every request builds its own engine.
    """
    logger.info(f"Starting cleaning API in {settings.ENVIRONMENT} mode")
    logger.info(f"{len(OPERATOR_REGISTRY)} action types registered")
    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY not set: /chat is disabled, summaries use templates")

    yield

    logger.info("Shutting down cleaning API")


# Create FastAPI application
app = FastAPI(
    title="Chat Cleaning Actions API",
    description="""
## Conversational Data Cleaning

Describe a cleaning step in plain English; a language model turns it into
structured actions and the engine applies them to your rows.

### How It Works

1. **Send a command** with your rows, column schema and detected issues
2. **Planner** converts the command into a list of actions
3. **Engine** applies the actions in order and returns the new rows
4. **Summary** describes what changed

Actions can also be sent directly to `/actions/apply`, with no language model involved.

### Quick Start

```bash
curl -X POST http://localhost:8000/api/v1/actions/apply \\
  -H "Content-Type: application/json" \\
  -d '{"data": [{"name": " bob "}], "actions": [{"type": "TRIM_TEXT", "column": "name"}]}'
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Chat",
            "description": "Natural language data cleaning interface",
        },
        {
            "name": "Actions",
            "description": "Action catalogue and direct application",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CleaningServiceException)
async def handle_cleaning_service_exception(request: Request, exc: CleaningServiceException):
    """Handle custom service exceptions."""
    return await cleaning_service_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Action catalogue and direct application
app.include_router(
    actions.router,
    prefix="/api/v1",
    tags=["Actions"]
)

# Chat endpoint
app.include_router(
    chat.router,
    prefix="/api/v1",
    tags=["Chat"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Chat Cleaning Actions API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
