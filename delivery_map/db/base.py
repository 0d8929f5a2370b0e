"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from delivery_map.models import delivery_pin as _delivery_pin  # noqa: E402,F401
from delivery_map.models import map_settings as _map_settings  # noqa: E402,F401
