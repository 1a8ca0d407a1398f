# Schemas package
from .health import HealthResponse
from .locations import (
    ErrorResponse,
    LocationDeletedResponse,
    LocationPayload,
    LocationResponse,
    LocationSavedResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LocationDeletedResponse",
    "LocationPayload",
    "LocationResponse",
    "LocationSavedResponse",
]
