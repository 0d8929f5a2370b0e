"""Delivery pin ORM model."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from delivery_map.db.base import Base

PIN_DELIVERY_MODES = ("sameDay", "scheduled", "both")
RADIUS_UNITS = ("km", "miles")

DEFAULT_PIN_DELIVERY_MODE: str = "both"
DEFAULT_PIN_COLOR: str = "#FF0000"
DEFAULT_RADIUS_UNIT: str = "km"
DEFAULT_ZONE_COLOR: str = "#5dade2"
DEFAULT_BORDER_THICKNESS: float = 2.0
DEFAULT_FILL_OPACITY: float = 0.25


class DeliveryPin(Base):
    """Delivery hub marker with an optional circular coverage zone."""

    __tablename__ = "delivery_pins"
    __table_args__ = (Index("ix_delivery_pins_shop_created_at", "shop", "created_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    shop: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    delivery_mode: Mapped[str] = mapped_column(String(16), nullable=False, default=DEFAULT_PIN_DELIVERY_MODE)
    color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_PIN_COLOR)

    has_radius: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    radius_distance: Mapped[float | None] = mapped_column(Float, nullable=True)
    radius_unit: Mapped[str] = mapped_column(String(8), nullable=False, default=DEFAULT_RADIUS_UNIT)
    fill_color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_ZONE_COLOR)
    border_color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_ZONE_COLOR)
    border_thickness: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_BORDER_THICKNESS)
    fill_opacity: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_FILL_OPACITY)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
