"""
Page state for the location map: one immutable ViewState plus one pure transition per UI event.

Two axes matter for behaviour:
  - edit mode: creating (editing_id is None) or editing an existing record by id;
  - pending pin: absent, or an unsaved click location with an address that may still be loading.

Every transition takes a ViewState and returns a new one; nothing here performs I/O.
"""
import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional

from utils.config import DEFAULT_MAP_LAT, DEFAULT_MAP_LNG

NAME_REQUIRED = "Nama lokasi wajib diisi"
ADDRESS_REQUIRED = "Alamat wajib diisi"
INVALID_COORDINATES = "Invalid coordinates provided"

EDITABLE_FIELDS = ("nama_lokasi", "alamat")


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class LocationRecord:
    """One stored location as the API returns it."""

    id: str
    nama_lokasi: str
    alamat: str
    lat: float
    lng: float

    @classmethod
    def from_dict(cls, data: dict) -> "LocationRecord":
        """Build from an API body; extra keys such as "message" are ignored."""
        return cls(
            id=str(data["id"]),
            nama_lokasi=data["nama_lokasi"],
            alamat=data["alamat"],
            lat=float(data["lat"]),
            lng=float(data["lng"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nama_lokasi": self.nama_lokasi,
            "alamat": self.alamat,
            "lat": self.lat,
            "lng": self.lng,
        }


@dataclass(frozen=True)
class PendingPin:
    """Unsaved click location. generation ties it to the geocode request it started."""

    lat: float
    lng: float
    generation: int
    address: Optional[str] = None

    @property
    def is_placed(self) -> bool:
        """False at (0, 0), which stands for "no pin"."""
        return not (self.lat == 0 and self.lng == 0)


@dataclass(frozen=True)
class FormState:
    # Coordinates are kept as the strings the read-only inputs display.
    nama_lokasi: str = ""
    alamat: str = ""
    lat: str = "0"
    lng: str = "0"
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ViewState:
    locations: tuple[LocationRecord, ...] = ()
    form: FormState = field(default_factory=FormState)
    map_center: LatLng = field(default_factory=lambda: LatLng(DEFAULT_MAP_LAT, DEFAULT_MAP_LNG))
    pending_pin: Optional[PendingPin] = None
    editing_id: Optional[str] = None
    geocode_generation: int = 0
    last_error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def find(self, location_id: str) -> Optional[LocationRecord]:
        for loc in self.locations:
            if loc.id == location_id:
                return loc
        return None


def initial_state(center: Optional[LatLng] = None) -> ViewState:
    if center is None:
        return ViewState()
    return ViewState(map_center=center)


def locations_loaded(state: ViewState, records: Iterable[LocationRecord]) -> ViewState:
    return replace(state, locations=tuple(records), last_error=None)


def map_clicked(state: ViewState, lat: float, lng: float) -> ViewState:
    """New pending pin at the click; its address is unknown until address_resolved for this generation."""
    generation = state.geocode_generation + 1
    return replace(
        state,
        pending_pin=PendingPin(lat=lat, lng=lng, generation=generation),
        geocode_generation=generation,
        form=replace(state.form, lat=str(lat), lng=str(lng)),
    )


def address_resolved(state: ViewState, generation: int, address: str) -> ViewState:
    """Attach a geocoded address, unless a newer click (or a save) has replaced the pin since."""
    pin = state.pending_pin
    if pin is None or pin.generation != generation:
        return state
    return replace(state, pending_pin=replace(pin, address=address))


def field_changed(state: ViewState, name: str, value: str) -> ViewState:
    """Update a text input. Coordinates are not user-editable and are rejected here."""
    if name not in EDITABLE_FIELDS:
        raise ValueError(f"Field {name!r} is not editable")
    errors = {k: v for k, v in state.form.errors.items() if k != name}
    return replace(state, form=replace(state.form, errors=errors, **{name: value}))


def edit_requested(state: ViewState, location_id: str) -> ViewState:
    """Enter edit mode for a stored record; form and map follow it, the pending pin stays as it is."""
    loc = state.find(location_id)
    if loc is None:
        return state
    return replace(
        state,
        editing_id=loc.id,
        form=FormState(
            nama_lokasi=loc.nama_lokasi,
            alamat=loc.alamat,
            lat=str(loc.lat),
            lng=str(loc.lng),
        ),
        map_center=LatLng(loc.lat, loc.lng),
    )


def _parse_coordinate(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def validate_submission(
    state: ViewState,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> tuple[ViewState, Optional[LocationRecord]]:
    """
    Check the form before any network call.
    Returns the state with form errors filled in, and the record to send (None when invalid).
    New records get an id from id_factory; edits keep the editing id.
    """
    form = state.form
    errors: dict[str, str] = {}
    if not form.nama_lokasi.strip():
        errors["nama_lokasi"] = NAME_REQUIRED
    if not form.alamat.strip():
        errors["alamat"] = ADDRESS_REQUIRED
    lat = _parse_coordinate(form.lat)
    lng = _parse_coordinate(form.lng)
    if lat is None or lng is None:
        errors["coordinates"] = INVALID_COORDINATES
    new_state = replace(state, form=replace(form, errors=errors))
    if errors:
        return new_state, None
    record = LocationRecord(
        id=state.editing_id if state.is_editing else id_factory(),
        nama_lokasi=form.nama_lokasi,
        alamat=form.alamat,
        lat=lat,
        lng=lng,
    )
    return new_state, record


def save_succeeded(state: ViewState, saved: LocationRecord) -> ViewState:
    """Merge the stored record by id, recenter on it, and go back to an empty create form."""
    if state.find(saved.id) is not None:
        locations = tuple(saved if loc.id == saved.id else loc for loc in state.locations)
    else:
        locations = state.locations + (saved,)
    return replace(
        state,
        locations=locations,
        map_center=LatLng(saved.lat, saved.lng),
        pending_pin=None,
        editing_id=None,
        form=FormState(),
        last_error=None,
    )


def _failed(state: ViewState, message: str) -> ViewState:
    return replace(state, last_error=message)


def load_failed(state: ViewState, message: str) -> ViewState:
    return _failed(state, message)


def save_failed(state: ViewState, message: str) -> ViewState:
    """Keep the form, pin and edit mode so the user can retry."""
    return _failed(state, message)


def delete_failed(state: ViewState, message: str) -> ViewState:
    """The record stays listed; the store still has it."""
    return _failed(state, message)


def delete_succeeded(state: ViewState, location_id: str) -> ViewState:
    """Drop the record. If it was being edited, fall back to creating with an empty form."""
    new_state = replace(
        state,
        locations=tuple(loc for loc in state.locations if loc.id != location_id),
        last_error=None,
    )
    if state.editing_id == location_id:
        pin = state.pending_pin
        form = FormState(lat=str(pin.lat), lng=str(pin.lng)) if pin is not None else FormState()
        new_state = replace(new_state, editing_id=None, form=form)
    return new_state


def location_selected(state: ViewState, location_id: str) -> ViewState:
    """List click: recenter only."""
    loc = state.find(location_id)
    if loc is None:
        return state
    return replace(state, map_center=LatLng(loc.lat, loc.lng))
