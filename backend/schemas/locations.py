"""Pydantic schemas for location API."""
from typing import Any, Optional

from pydantic import BaseModel, field_validator


class LocationPayload(BaseModel):
    """Body for add/update/delete. Fields are optional here; presence is checked per route so a miss is a 400."""

    id: Optional[str] = None
    nama_lokasi: Optional[str] = None
    alamat: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def reject_bool_coordinates(cls, value: Any) -> Any:
        # JSON true/false would otherwise be coerced to 1.0/0.0.
        if isinstance(value, bool):
            raise ValueError("coordinate must be a number")
        return value


class LocationResponse(BaseModel):
    """Location in API responses."""

    id: str
    nama_lokasi: str
    alamat: str
    lat: float
    lng: float


class LocationSavedResponse(LocationResponse):
    """Stored record plus a confirmation message (add/update)."""

    message: str


class LocationDeletedResponse(BaseModel):
    """Confirmation for delete."""

    message: str
    id: str


class ErrorResponse(BaseModel):
    """Error body for every non-2xx response."""

    error: str
    details: Optional[str] = None
