"""View-state controller: applies state transitions for UI events and performs the matching I/O."""
import asyncio
import logging
import uuid
from typing import Callable, Optional

from viewstate.api_client import LocationApiClient
from viewstate.errors import GeocodingError, NetworkError
from viewstate.geocoder import NominatimGeocoder
from viewstate.map_surface import MapSurface
from viewstate.state import (
    LocationRecord,
    ViewState,
    address_resolved,
    delete_failed,
    delete_succeeded,
    edit_requested,
    field_changed,
    initial_state,
    load_failed,
    location_selected,
    locations_loaded,
    map_clicked,
    save_failed,
    save_succeeded,
    validate_submission,
)

LOG = logging.getLogger(__name__)


class LocationController:
    """
    Owns the current ViewState. Every event goes through _apply, which re-renders the map
    and recenters it whenever map_center changed.
    """

    def __init__(
        self,
        api: LocationApiClient,
        geocoder: NominatimGeocoder,
        map_surface: Optional[MapSurface] = None,
        state: Optional[ViewState] = None,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self.api = api
        self.geocoder = geocoder
        self.state = state or initial_state()
        self.map = map_surface or MapSurface(self.state.map_center)
        self.map.on_click(self.click_map)
        self._id_factory = id_factory
        self._geocode_tasks: set[asyncio.Task] = set()
        self.map.recenter(self.state.map_center.lat, self.state.map_center.lng)
        self.map.render(self.state)

    def _apply(self, new_state: ViewState) -> ViewState:
        old_center = self.state.map_center
        self.state = new_state
        if new_state.map_center != old_center:
            self.map.recenter(new_state.map_center.lat, new_state.map_center.lng)
        self.map.render(new_state)
        return new_state

    async def load(self) -> None:
        """Fetch all stored locations. Failures are recorded in last_error and re-raised."""
        try:
            rows = await self.api.fetch_locations()
        except NetworkError as e:
            self._apply(load_failed(self.state, str(e)))
            raise
        self._apply(locations_loaded(self.state, [LocationRecord.from_dict(row) for row in rows]))

    async def click_map(self, lat: float, lng: float) -> None:
        """Show the pending pin right away; its address is filled in by a background lookup."""
        self._apply(map_clicked(self.state, lat, lng))
        generation = self.state.geocode_generation
        task = asyncio.create_task(self._resolve_address(generation, lat, lng))
        self._geocode_tasks.add(task)
        task.add_done_callback(self._geocode_tasks.discard)

    async def _resolve_address(self, generation: int, lat: float, lng: float) -> None:
        try:
            address = await self.geocoder.reverse(lat, lng)
        except GeocodingError as e:
            LOG.warning("Address lookup failed: %s", e)
            return
        if address is None:
            return
        pin = self.state.pending_pin
        if pin is None or pin.generation != generation:
            LOG.debug("Discarding address for superseded click %s", generation)
            return
        self._apply(address_resolved(self.state, generation, address))

    async def wait_for_geocode(self) -> None:
        """Wait for in-flight address lookups."""
        if self._geocode_tasks:
            await asyncio.gather(*list(self._geocode_tasks))

    def set_field(self, name: str, value: str) -> None:
        self._apply(field_changed(self.state, name, value))

    def edit(self, location_id: str) -> None:
        if self.state.find(location_id) is None:
            LOG.warning("Edit requested for unknown location %s", location_id)
        self._apply(edit_requested(self.state, location_id))

    def select(self, location_id: str) -> None:
        self._apply(location_selected(self.state, location_id))

    async def submit(self) -> bool:
        """Validate, then create or update. Returns True when the record was saved."""
        validated, record = validate_submission(self.state, self._id_factory)
        self._apply(validated)
        if record is None:
            LOG.info("Form rejected: %s", ", ".join(sorted(validated.form.errors)))
            return False
        try:
            if validated.is_editing:
                saved = await self.api.update_location(record.to_dict())
            else:
                saved = await self.api.add_location(record.to_dict())
        except NetworkError as e:
            if validated.is_editing and e.status_code == 404:
                # Removed by another client: drop the stale row and leave edit mode.
                LOG.warning("Location %s no longer exists in the store", record.id)
                self._apply(delete_succeeded(self.state, record.id))
            self._apply(save_failed(self.state, e.server_error or str(e)))
            return False
        self._apply(save_succeeded(self.state, LocationRecord.from_dict(saved)))
        return True

    async def delete(self, location_id: str) -> bool:
        """Delete in the store first; the list only changes once the server confirms."""
        try:
            await self.api.delete_location(location_id)
        except NetworkError as e:
            self._apply(delete_failed(self.state, e.server_error or str(e)))
            return False
        self._apply(delete_succeeded(self.state, location_id))
        return True

    async def aclose(self) -> None:
        for task in list(self._geocode_tasks):
            task.cancel()
        await asyncio.gather(*list(self._geocode_tasks), return_exceptions=True)
        await self.api.aclose()
        await self.geocoder.aclose()
