"""Location API routes: list, add, update, delete."""
import logging
import math

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.errors import LocationNotFoundError, LocationValidationError, StoreError
from db import get_db
from repositories.location_repository import create_location as repo_create_location
from repositories.location_repository import delete_location as repo_delete_location
from repositories.location_repository import list_locations as repo_list_locations
from repositories.location_repository import update_location as repo_update_location
from schemas.locations import (
    ErrorResponse,
    LocationDeletedResponse,
    LocationPayload,
    LocationResponse,
    LocationSavedResponse,
)

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["locations"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

_RECORD_FIELDS = ("id", "nama_lokasi", "alamat", "lat", "lng")


def _validate_record(body: LocationPayload) -> None:
    """Raise LocationValidationError unless every record field is present and usable."""
    missing = []
    for field in _RECORD_FIELDS:
        value = getattr(body, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise LocationValidationError(f"Missing required fields: {', '.join(missing)}.")
    if not (math.isfinite(body.lat) and math.isfinite(body.lng)):
        raise LocationValidationError("Coordinates must be finite numbers.")
    # (0, 0) is the client's "no pin" sentinel, never a real placement.
    if body.lat == 0 and body.lng == 0:
        raise LocationValidationError("Coordinates are required; pick a point on the map.")


def _store_failure(db: Session, exc: SQLAlchemyError, message: str) -> StoreError:
    db.rollback()
    LOG.exception("%s (%s)", message, type(exc).__name__)
    return StoreError(message, details=type(exc).__name__)


def _to_response(loc) -> LocationResponse:
    return LocationResponse(id=loc.id, nama_lokasi=loc.nama_lokasi, alamat=loc.alamat, lat=loc.lat, lng=loc.lng)


@router.get("", response_model=list[LocationResponse], responses=_ERROR_RESPONSES)
def list_locations(db: Session = Depends(get_db)) -> list[LocationResponse]:
    """List all locations."""
    try:
        locations = repo_list_locations(db)
    except SQLAlchemyError as e:
        raise _store_failure(db, e, "Failed to fetch locations.") from e
    return [_to_response(loc) for loc in locations]


@router.post(
    "/add",
    response_model=LocationSavedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def add_location(body: LocationPayload, db: Session = Depends(get_db)) -> LocationSavedResponse:
    """Create a location with the caller-supplied id."""
    _validate_record(body)
    try:
        loc = repo_create_location(db, body.id, body.nama_lokasi, body.alamat, body.lat, body.lng)
    except SQLAlchemyError as e:
        raise _store_failure(db, e, "Failed to add location.") from e
    LOG.info("Added location %s (%s)", loc.id, loc.nama_lokasi)
    return LocationSavedResponse(message="Location added successfully.", **_to_response(loc).model_dump())


@router.put(
    "/update",
    response_model=LocationSavedResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
def update_location(body: LocationPayload, db: Session = Depends(get_db)) -> LocationSavedResponse:
    """Overwrite name, address and coordinates of an existing location."""
    _validate_record(body)
    try:
        loc = repo_update_location(db, body.id, body.nama_lokasi, body.alamat, body.lat, body.lng)
    except SQLAlchemyError as e:
        raise _store_failure(db, e, "Failed to update location.") from e
    if loc is None:
        raise LocationNotFoundError("Location not found.")
    LOG.info("Updated location %s", loc.id)
    return LocationSavedResponse(message="Location updated successfully.", **_to_response(loc).model_dump())


@router.delete("/delete", response_model=LocationDeletedResponse, responses=_ERROR_RESPONSES)
def delete_location(body: LocationPayload, db: Session = Depends(get_db)) -> LocationDeletedResponse:
    """Delete a location by id. Deleting an id that is already gone still succeeds."""
    if body.id is None or not body.id.strip():
        raise LocationValidationError("Missing required field: id.")
    try:
        removed = repo_delete_location(db, body.id)
    except SQLAlchemyError as e:
        raise _store_failure(db, e, "Failed to delete location.") from e
    if removed:
        LOG.info("Deleted location %s", body.id)
    else:
        LOG.info("Delete for unknown location %s; nothing removed", body.id)
    return LocationDeletedResponse(message="Location deleted successfully.", id=body.id)
