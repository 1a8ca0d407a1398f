"""Location Pins — FastAPI backend."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

from utils.config import CORS_ORIGINS, LOG_LEVEL, RUN_MIGRATIONS

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.locations import router as locations_router
from api.routes import router

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="Location Pins",
    description="Named map points backed by a single locations table",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(router)
app.include_router(locations_router)


def run_migrations(backend_dir: str) -> None:
    """Run `alembic upgrade head` from backend_dir, which must hold alembic.ini and alembic/."""
    if not os.path.isfile(os.path.join(backend_dir, "alembic.ini")):
        raise RuntimeError(
            f"alembic.ini not found in {backend_dir}. Migrations ship with the source tree only: "
            "use an editable install (pip install -e .) or run from backend/, or set RUN_MIGRATIONS=false "
            "and migrate separately."
        )
    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=backend_dir,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    LOG.info("Database schema is at head")


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations."""
    if not RUN_MIGRATIONS:
        LOG.info("RUN_MIGRATIONS=false; skipping alembic upgrade")
        return
    run_migrations(os.path.dirname(os.path.abspath(__file__)))


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "location-pins", "docs": "/docs", "health": "/health"}


if __name__ == "__main__":
    import uvicorn

    from utils.config import PORT

    uvicorn.run(app, host="0.0.0.0", port=PORT)
