"""httpx-based client for the remote GraphQL service-status API.

``fetch_status`` returns the raw status string or raises one of the
StatusQueryError subclasses below.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from src.monitor.models import StatusQuery, StatusResponse, StatusVariables

logger = logging.getLogger(__name__)


class StatusQueryError(Exception):
    """Base class for failures of a single status query."""


class StatusRequestError(StatusQueryError):
    """Raised when the outbound request cannot be built (static config defect)."""


class StatusTransportError(StatusQueryError):
    """Raised when the status API is unreachable or times out."""


class StatusDecodeError(StatusQueryError):
    """Raised when the response body is not the expected shape."""


class StatusResponseError(StatusDecodeError):
    """Raised when the status API answers with an HTTP error status."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Status API error {status_code}: {detail}")


def validate_endpoint(endpoint: str) -> httpx.URL:
    """Parse ``endpoint`` and require an absolute http(s) URL."""
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as e:
        raise StatusRequestError(f"Invalid status endpoint {endpoint!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise StatusRequestError(f"Status endpoint must be an absolute http(s) URL: {endpoint!r}")
    return url


class StatusClient:
    """Async httpx client querying one service's status in one environment."""

    def __init__(
        self,
        endpoint: str,
        token: str,
        service_id: str,
        environment_id: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._token = token
        self._service_id = service_id
        self._environment_id = environment_id
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def build_request(self) -> httpx.Request:
        """Build the POST carrying the GraphQL status query."""
        url = validate_endpoint(self._endpoint)
        payload = StatusQuery(
            variables=StatusVariables(id=self._service_id, environmentId=self._environment_id),
        )
        try:
            return self._client.build_request(
                "POST", url, headers=self._headers, json=payload.model_dump(),
            )
        except (TypeError, ValueError, httpx.InvalidURL) as e:
            raise StatusRequestError(f"Failed to build status request: {e}") from e

    async def fetch_status(self) -> str:
        """POST the query and return ``data.service.status``."""
        request = self.build_request()
        try:
            resp = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise StatusTransportError("Status API request timed out") from e
        except httpx.DecodingError as e:
            raise StatusDecodeError(f"Undecodable status response: {e}") from e
        except httpx.RequestError as e:
            raise StatusTransportError(f"Status API unreachable: {e}") from e

        if resp.status_code >= 400:
            detail = resp.text
            try:
                detail = resp.json().get("errors", resp.text)
            except Exception:
                pass
            raise StatusResponseError(resp.status_code, str(detail))

        try:
            body = StatusResponse.model_validate_json(resp.content)
        except ValidationError as e:
            raise StatusDecodeError(f"Unexpected status response: {e}") from e
        return body.data.service.status

    async def aclose(self) -> None:
        await self._client.aclose()
