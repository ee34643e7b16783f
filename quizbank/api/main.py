"""
FastAPI application for quizbank.

Provides REST API for:
- Question bank management and filtering
- Criteria-based quiz generation from cyclic pools
- Hand-picked quiz assembly
- Quiz grading and session history

All state lives in a Workspace created at startup and discarded at
shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config import get_settings
from quizbank import __version__
from quizbank.api.routers import bank_router, quiz_router
from quizbank.core.logging import configure_logging
from quizbank.workspace import Workspace

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    configure_logging(settings)
    logger.info("Starting quizbank service...")
    app.state.workspace = Workspace.create(settings)
    logger.info(f"Service started on {settings.api_host}:{settings.api_port}")

    yield

    # Shutdown
    logger.info("Shutting down quizbank service, discarding in-memory state...")
    app.state.workspace = None


app = FastAPI(
    title="Quiz Bank",
    description="""
    In-memory question bank and quiz assembly service.

    ## Features

    - **Question Bank**: Save, browse and filter extracted questions
    - **Quiz Generation**: Criteria-based quizzes that cycle through every matching question
    - **Quiz Assembly**: Hand-pick MCQ questions into a quiz
    - **Sessions**: Grade attempts and review history
    """,
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========================================
# Health & Status Endpoints
# ========================================


@app.get("/", tags=["Health"])
def root() -> dict[str, str]:
    """Root endpoint returning service info."""
    return {
        "service": "quizbank",
        "version": __version__,
        "status": "ok",
    }


@app.get("/health", tags=["Health"])
def health_check() -> dict[str, Any]:
    """Health check with in-memory state counts."""
    workspace: Workspace | None = getattr(app.state, "workspace", None)
    if workspace is None:
        return {"status": "starting"}

    return {
        "status": "ok",
        "questions": len(workspace.bank),
        "pools": len(workspace.pool),
        "assembled": workspace.assembly.count(),
        "sessions": len(workspace.sessions),
    }


# ========================================
# Routers
# ========================================

app.include_router(bank_router.router, prefix="/api/bank", tags=["Bank"])
app.include_router(quiz_router.router, prefix="/api/quiz", tags=["Quiz"])
