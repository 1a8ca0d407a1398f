"""Unit tests for viewstate.state transitions."""
from dataclasses import replace

import pytest

from viewstate.state import (
    ADDRESS_REQUIRED,
    INVALID_COORDINATES,
    NAME_REQUIRED,
    FormState,
    LatLng,
    LocationRecord,
    address_resolved,
    delete_failed,
    delete_succeeded,
    edit_requested,
    field_changed,
    initial_state,
    location_selected,
    locations_loaded,
    map_clicked,
    save_failed,
    save_succeeded,
    validate_submission,
)

pytestmark = pytest.mark.unit

CAFE = LocationRecord(id="a1", nama_lokasi="Cafe X", alamat="Jl. Mawar 1", lat=-6.2, lng=106.8)
PARK = LocationRecord(id="b2", nama_lokasi="Taman", alamat="Jl. Kenanga 5", lat=-6.3, lng=106.9)


def _loaded():
    return locations_loaded(initial_state(), [CAFE, PARK])


def test_initial_state_is_creating_without_pin():
    state = initial_state(LatLng(1.0, 2.0))
    assert state.map_center == LatLng(1.0, 2.0)
    assert state.pending_pin is None
    assert state.is_editing is False
    assert state.form == FormState()


def test_record_from_dict_ignores_message():
    body = {**CAFE.to_dict(), "message": "Location added successfully."}
    assert LocationRecord.from_dict(body) == CAFE


class TestMapClick:
    def test_click_sets_pending_pin_and_form_coordinates(self):
        state = map_clicked(initial_state(), -6.25, 106.75)
        assert state.pending_pin.lat == -6.25
        assert state.pending_pin.lng == 106.75
        assert state.pending_pin.address is None
        assert state.pending_pin.generation == 1
        assert (state.form.lat, state.form.lng) == ("-6.25", "106.75")

    def test_click_while_editing_keeps_edit_mode(self):
        state = edit_requested(_loaded(), "a1")
        state = map_clicked(state, -6.0, 106.0)
        assert state.editing_id == "a1"
        assert state.form.nama_lokasi == "Cafe X"
        assert state.form.lat == "-6.0"

    def test_address_for_current_click_is_attached(self):
        state = map_clicked(initial_state(), -6.25, 106.75)
        state = address_resolved(state, 1, "Jl. Anggrek, Jakarta")
        assert state.pending_pin.address == "Jl. Anggrek, Jakarta"

    def test_stale_address_is_discarded(self):
        state = map_clicked(initial_state(), -6.25, 106.75)
        state = map_clicked(state, -6.5, 106.5)
        resolved = address_resolved(state, 1, "Old click address")
        assert resolved is state
        assert resolved.pending_pin.address is None

    def test_address_after_pin_cleared_is_discarded(self):
        state = map_clicked(initial_state(), -6.25, 106.75)
        state = save_succeeded(state, CAFE)
        assert address_resolved(state, 1, "Late").pending_pin is None

    def test_zero_zero_pin_is_not_placed(self):
        assert map_clicked(initial_state(), 0.0, 0.0).pending_pin.is_placed is False
        assert map_clicked(initial_state(), 0.0, 10.0).pending_pin.is_placed is True


class TestFormAndValidation:
    def test_field_changed_clears_that_fields_error(self):
        state, record = validate_submission(initial_state())
        assert record is None
        state = field_changed(state, "nama_lokasi", "Cafe X")
        assert state.form.nama_lokasi == "Cafe X"
        assert "nama_lokasi" not in state.form.errors
        assert state.form.errors["alamat"] == ADDRESS_REQUIRED

    def test_coordinates_are_not_editable(self):
        with pytest.raises(ValueError):
            field_changed(initial_state(), "lat", "1.0")

    def test_empty_name_and_address_rejected(self):
        state, record = validate_submission(map_clicked(initial_state(), 1.0, 2.0))
        assert record is None
        assert state.form.errors == {"nama_lokasi": NAME_REQUIRED, "alamat": ADDRESS_REQUIRED}

    def test_unparsable_coordinates_rejected(self):
        state = replace(initial_state(), form=FormState(nama_lokasi="A", alamat="B", lat="abc"))
        state, record = validate_submission(state)
        assert record is None
        assert state.form.errors == {"coordinates": INVALID_COORDINATES}

    def test_create_uses_new_id(self):
        state = map_clicked(initial_state(), -6.2, 106.8)
        state = field_changed(state, "nama_lokasi", "Cafe X")
        state = field_changed(state, "alamat", "Jl. Mawar 1")
        state, record = validate_submission(state, id_factory=lambda: "new-id")
        assert state.form.errors == {}
        assert record == LocationRecord(id="new-id", nama_lokasi="Cafe X", alamat="Jl. Mawar 1", lat=-6.2, lng=106.8)

    def test_edit_keeps_record_id(self):
        state = edit_requested(_loaded(), "a1")
        state = field_changed(state, "alamat", "Jl. Mawar 2")
        _, record = validate_submission(state, id_factory=lambda: "unused")
        assert record.id == "a1"
        assert record.alamat == "Jl. Mawar 2"
        assert (record.lat, record.lng) == (-6.2, 106.8)


class TestEditSaveDelete:
    def test_edit_populates_form_and_recenters(self):
        state = map_clicked(_loaded(), 5.0, 5.0)
        pin = state.pending_pin
        state = edit_requested(state, "b2")
        assert state.editing_id == "b2"
        assert state.form.nama_lokasi == "Taman"
        assert state.map_center == LatLng(-6.3, 106.9)
        assert state.pending_pin is pin

    def test_edit_unknown_id_is_noop(self):
        state = _loaded()
        assert edit_requested(state, "zzz") is state

    def test_save_while_creating_appends_and_resets(self):
        state = map_clicked(locations_loaded(initial_state(), [PARK]), -6.2, 106.8)
        state = save_succeeded(state, CAFE)
        assert state.locations == (PARK, CAFE)
        assert state.map_center == LatLng(-6.2, 106.8)
        assert state.pending_pin is None
        assert state.editing_id is None
        assert state.form == FormState()

    def test_save_while_editing_replaces_by_id(self):
        state = edit_requested(_loaded(), "a1")
        updated = LocationRecord(id="a1", nama_lokasi="Cafe X", alamat="Jl. Mawar 2", lat=-6.2, lng=106.8)
        state = save_succeeded(state, updated)
        assert state.locations == (updated, PARK)
        assert state.editing_id is None

    def test_save_failed_keeps_form_and_pin(self):
        state = field_changed(map_clicked(initial_state(), 1.0, 2.0), "nama_lokasi", "A")
        failed = save_failed(state, "Failed to add location")
        assert failed.last_error == "Failed to add location"
        assert failed.form == state.form
        assert failed.pending_pin == state.pending_pin

    def test_delete_removes_by_id(self):
        state = delete_succeeded(_loaded(), "a1")
        assert state.locations == (PARK,)

    def test_delete_failed_keeps_record(self):
        state = delete_failed(_loaded(), "Failed to delete location")
        assert state.locations == (CAFE, PARK)
        assert state.last_error == "Failed to delete location"

    def test_deleting_record_under_edit_reverts_to_creating(self):
        state = map_clicked(edit_requested(_loaded(), "a1"), 3.0, 4.0)
        state = delete_succeeded(state, "a1")
        assert state.editing_id is None
        assert state.form == FormState(lat="3.0", lng="4.0")
        assert state.pending_pin is not None

    def test_deleting_other_record_keeps_edit_mode(self):
        state = delete_succeeded(edit_requested(_loaded(), "a1"), "b2")
        assert state.editing_id == "a1"
        assert state.form.nama_lokasi == "Cafe X"

    def test_select_recenters_only(self):
        state = map_clicked(_loaded(), 1.0, 1.0)
        selected = location_selected(state, "b2")
        assert selected.map_center == LatLng(-6.3, 106.9)
        assert selected.pending_pin == state.pending_pin
        assert selected.editing_id is None
        assert selected.locations == state.locations
