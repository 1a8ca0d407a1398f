"""Location model for DB persistence."""
from sqlalchemy import Double, String
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Location(Base):
    """Locations table: id, nama_lokasi, alamat, lat, lng."""

    __tablename__ = "locations"

    # Client generated (uuid4) and never changed after insert.
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    nama_lokasi: Mapped[str] = mapped_column(String(255), nullable=False)
    alamat: Mapped[str] = mapped_column(String(512), nullable=False)
    lat: Mapped[float] = mapped_column(Double, nullable=False)
    lng: Mapped[float] = mapped_column(Double, nullable=False)
