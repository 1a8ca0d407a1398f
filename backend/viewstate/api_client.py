"""HTTP client for the location API, used by the view-state controller."""
import logging
from typing import Any, Optional

import httpx

from utils.config import API_BASE_URL
from viewstate.errors import NetworkError

LOG = logging.getLogger(__name__)


def _server_error(response: httpx.Response) -> Optional[str]:
    """Pull the {"error": ...} text out of a failed response, if it has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


class LocationApiClient:
    """
    Thin wrapper over the four location endpoints.
    Failures are logged and re-raised as NetworkError; nothing is retried.
    """

    def __init__(self, base_url: str = API_BASE_URL, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, method: str, path: str, action: str, payload: Optional[dict] = None) -> Any:
        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            LOG.error("Error %s: %s", action, e)
            raise NetworkError(f"Failed to {action}") from e
        if response.is_error:
            server_error = _server_error(response)
            LOG.error("Error %s: HTTP %s %s", action, response.status_code, server_error or "")
            raise NetworkError(
                f"Failed to {action}",
                status_code=response.status_code,
                server_error=server_error,
            )
        try:
            return response.json()
        except ValueError as e:
            LOG.error("Error %s: response is not JSON", action)
            raise NetworkError(f"Failed to {action}", status_code=response.status_code) from e

    async def fetch_locations(self) -> list[dict]:
        """GET /locations."""
        data = await self._send("GET", "/locations", "fetch locations")
        return data or []

    async def add_location(self, location: dict) -> dict:
        """POST /locations/add. Returns the stored record."""
        return await self._send("POST", "/locations/add", "add location", location)

    async def update_location(self, location: dict) -> dict:
        """PUT /locations/update. Returns the stored record."""
        return await self._send("PUT", "/locations/update", "update location", location)

    async def delete_location(self, location_id: str) -> None:
        """DELETE /locations/delete with the id in the body."""
        await self._send("DELETE", "/locations/delete", "delete location", {"id": location_id})
