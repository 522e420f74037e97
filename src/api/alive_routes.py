"""Liveness probe route.

Endpoints:
  GET /alive: last published status; 200 when healthy, 503 otherwise
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

alive_router = APIRouter()


@alive_router.get("/alive")
def alive(request: Request) -> JSONResponse:
    """Report the most recent successful poll."""
    status = request.app.state.status_cell.snapshot()
    return JSONResponse(
        status_code=200 if status.healthy else 503,
        content=status.to_dict(),
    )
