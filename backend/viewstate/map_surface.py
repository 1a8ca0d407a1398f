"""Headless map surface: which pins to draw, where the view is centered, and click forwarding."""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from utils.config import DEFAULT_MAP_ZOOM
from viewstate.state import LatLng, ViewState

LOG = logging.getLogger(__name__)

LOADING_ADDRESS = "Loading..."


@dataclass(frozen=True)
class Marker:
    lat: float
    lng: float
    popup: tuple[str, ...]
    location_id: Optional[str] = None
    pending: bool = False


class MapSurface:
    """
    Stand-in for the map widget. render() turns a ViewState into markers,
    recenter() moves the view without touching zoom, click() forwards raw coordinates to listeners.
    """

    def __init__(self, center: LatLng, zoom: int = DEFAULT_MAP_ZOOM):
        self.center = center
        self.zoom = zoom
        self.markers: list[Marker] = []
        self._click_listeners: list[Callable[[float, float], Any]] = []

    def on_click(self, callback: Callable[[float, float], Any]) -> None:
        self._click_listeners.append(callback)

    async def click(self, lat: float, lng: float) -> None:
        for callback in self._click_listeners:
            result = callback(lat, lng)
            if inspect.isawaitable(result):
                await result

    def set_zoom(self, zoom: int) -> None:
        self.zoom = zoom

    def recenter(self, lat: float, lng: float) -> bool:
        """Move to (lat, lng) at the current zoom. (0, 0) is ignored. Returns True if the view moved."""
        if lat == 0 and lng == 0:
            return False
        self.center = LatLng(lat, lng)
        LOG.debug("Map recentered on %s,%s (zoom %s)", lat, lng, self.zoom)
        return True

    def render(self, state: ViewState) -> list[Marker]:
        markers = []
        pin = state.pending_pin
        if pin is not None and pin.is_placed:
            markers.append(
                Marker(
                    lat=pin.lat,
                    lng=pin.lng,
                    popup=(f"Address: {pin.address or LOADING_ADDRESS}",),
                    pending=True,
                )
            )
        for loc in state.locations:
            markers.append(
                Marker(
                    lat=loc.lat,
                    lng=loc.lng,
                    popup=(
                        loc.nama_lokasi,
                        f"Address: {loc.alamat}",
                        f"Coordinates: {loc.lat}, {loc.lng}",
                    ),
                    location_id=loc.id,
                )
            )
        self.markers = markers
        return markers
