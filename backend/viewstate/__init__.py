# View state: page state container, controller, API client, geocoder, map surface
from viewstate.api_client import LocationApiClient
from viewstate.controller import LocationController
from viewstate.errors import GeocodingError, NetworkError
from viewstate.geocoder import NominatimGeocoder
from viewstate.map_surface import MapSurface, Marker
from viewstate.state import LatLng, LocationRecord, PendingPin, ViewState, initial_state

__all__ = [
    "GeocodingError",
    "LatLng",
    "LocationApiClient",
    "LocationController",
    "LocationRecord",
    "MapSurface",
    "Marker",
    "NetworkError",
    "NominatimGeocoder",
    "PendingPin",
    "ViewState",
    "initial_state",
]
