"""SQLAlchemy declarative base. Models register on Base when their module is imported."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models."""
