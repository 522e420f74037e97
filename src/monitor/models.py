"""Pydantic models for the status API and the published status snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel

RUNNING = "RUNNING"

SERVICE_STATUS_QUERY = """query Service($id: ObjectID, $environmentId: ObjectID!) {
  service(_id: $id) {
    status(environmentID: $environmentId)
  }
}"""

# ── Outbound query ───────────────────────────────────────────────────────────


class StatusVariables(BaseModel):
    id: str
    environmentId: str


class StatusQuery(BaseModel):
    query: str = SERVICE_STATUS_QUERY
    variables: StatusVariables


# ── Response: {"data": {"service": {"status": "..."}}} ───────────────────────


class ServiceStatus(BaseModel):
    status: str


class StatusData(BaseModel):
    service: ServiceStatus


class StatusResponse(BaseModel):
    data: StatusData


# ── Published state ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PublishedStatus:
    """Result of the most recent successful poll."""

    healthy: bool = False
    observed_at: datetime | None = None
    remote_status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.healthy,
            "lastCheckedAt": self.observed_at.isoformat() if self.observed_at else None,
        }
