"""Reverse geocoding against a Nominatim-compatible endpoint."""
import logging
from typing import Optional

import httpx

from utils.config import GEOCODER_URL, GEOCODER_USER_AGENT
from viewstate.errors import GeocodingError

LOG = logging.getLogger(__name__)


class NominatimGeocoder:
    """Looks up a human-readable address for a coordinate pair. Best effort, no SLA."""

    def __init__(
        self,
        base_url: str = GEOCODER_URL,
        user_agent: str = GEOCODER_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, headers={"User-Agent": user_agent})

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def reverse(self, lat: float, lng: float) -> Optional[str]:
        """Return display_name for (lat, lng), or None when the service knows no address there."""
        params = {"format": "json", "lat": lat, "lon": lng}
        try:
            response = await self._client.get("/reverse", params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeocodingError(f"Reverse geocode failed for {lat},{lng}: {e}") from e
        if not isinstance(data, dict):
            return None
        address = data.get("display_name")
        if not address:
            LOG.debug("No address for %s,%s: %s", lat, lng, data.get("error"))
            return None
        return address
