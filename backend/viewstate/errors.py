"""Client-side error types."""
from typing import Optional


class NetworkError(Exception):
    """A call to the location API failed in transport or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, server_error: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_error = server_error


class GeocodingError(Exception):
    """Reverse geocoding lookup failed. Always recoverable: the pending pin keeps no address."""
