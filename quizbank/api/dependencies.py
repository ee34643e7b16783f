"""FastAPI dependencies."""
from __future__ import annotations

from fastapi import HTTPException, Request

from quizbank.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    """Workspace created by the application lifespan."""
    workspace = getattr(request.app.state, "workspace", None)
    if workspace is None:
        raise HTTPException(status_code=503, detail="Service is not ready")
    return workspace
