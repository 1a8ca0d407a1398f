"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "8001"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# When TESTING=true, use test DB URL so tests never touch production.
if os.environ.get("TESTING") == "true":
    DATABASE_URL = os.environ.get("TESTING_DATABASE_URL", "sqlite:///:memory:")
else:
    DATABASE_URL = os.environ.get(
        "DATABASE_URL",
        "sqlite:///./locations.db",
    )

RUN_MIGRATIONS = os.environ.get("RUN_MIGRATIONS", "true").lower() == "true"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]

# Client side: where the view-state controller finds the record API and the reverse geocoder.
API_BASE_URL = os.environ.get("API_BASE_URL", f"http://localhost:{PORT}")
GEOCODER_URL = os.environ.get("GEOCODER_URL", "https://nominatim.openstreetmap.org")
GEOCODER_USER_AGENT = os.environ.get("GEOCODER_USER_AGENT", "location-pins/0.1")

DEFAULT_MAP_LAT = float(os.environ.get("DEFAULT_MAP_LAT", "-6.124852316256776"))
DEFAULT_MAP_LNG = float(os.environ.get("DEFAULT_MAP_LNG", "106.74177814322435"))
DEFAULT_MAP_ZOOM = int(os.environ.get("DEFAULT_MAP_ZOOM", "12"))
