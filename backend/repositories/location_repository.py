"""Location repository: list, get, create, update, delete."""
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from models.location import Location


def list_locations(session: Session) -> list[Location]:
    """Return all locations in store order."""
    result = session.execute(select(Location))
    return list(result.scalars().all())


def get_location(session: Session, location_id: str) -> Optional[Location]:
    """Return a location by id or None."""
    return session.get(Location, location_id)


def create_location(
    session: Session,
    location_id: str,
    nama_lokasi: str,
    alamat: str,
    lat: float,
    lng: float,
) -> Location:
    """Insert a location with a caller-supplied id, commit, and return it."""
    loc = Location(id=location_id, nama_lokasi=nama_lokasi, alamat=alamat, lat=lat, lng=lng)
    session.add(loc)
    session.commit()
    session.refresh(loc)
    return loc


def update_location(
    session: Session,
    location_id: str,
    nama_lokasi: str,
    alamat: str,
    lat: float,
    lng: float,
) -> Optional[Location]:
    """Overwrite every field except id. Returns the updated row, or None if no row has that id."""
    result = session.execute(
        update(Location)
        .where(Location.id == location_id)
        .values(nama_lokasi=nama_lokasi, alamat=alamat, lat=lat, lng=lng)
        .execution_options(synchronize_session="fetch")
    )
    session.commit()
    if result.rowcount == 0:
        return None
    return get_location(session, location_id)


def delete_location(session: Session, location_id: str) -> int:
    """Delete a location by id. Returns the number of rows removed (0 if it did not exist)."""
    result = session.execute(delete(Location).where(Location.id == location_id))
    session.commit()
    return result.rowcount


def count_locations(session: Session) -> int:
    """Return the number of stored locations."""
    result = session.execute(select(func.count()).select_from(Location))
    return result.scalar() or 0
