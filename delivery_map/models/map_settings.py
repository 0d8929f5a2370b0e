"""Per-shop map settings ORM model."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from delivery_map.db.base import Base

MAP_MODES = ("interactive", "custom_tiles")
LEGACY_MAP_MODE: str = "default"
DELIVERY_MODES = ("sameDay", "scheduled")
BUTTON_ALIGNMENTS = ("left", "center", "right")
BUTTON_SHAPES = ("square", "rounded", "pill")

SAME_DAY_CENTER: str = '{"lat":40.7128,"lng":-74.0060}'
SCHEDULED_CENTER: str = '{"lat":39.8283,"lng":-98.5795}'

# Column name -> value used when a shop has no stored row.
MAP_SETTINGS_DEFAULTS: dict[str, Any] = {
    "same_day_mode": "interactive",
    "same_day_image_url": None,
    "same_day_geo_json": None,
    "same_day_zoom_level": 11,
    "same_day_center": SAME_DAY_CENTER,
    "same_day_tile_provider": None,
    "same_day_tile_api_key": None,
    "scheduled_mode": "interactive",
    "scheduled_image_url": None,
    "scheduled_geo_json": None,
    "scheduled_zoom_level": 4,
    "scheduled_center": SCHEDULED_CENTER,
    "scheduled_tile_provider": None,
    "scheduled_tile_api_key": None,
    "toggle_text_same_day": "Same Day Delivery",
    "toggle_text_scheduled": "Scheduled Delivery",
    "button_color": "#000000",
    "button_active_color": "#1a73e8",
    "button_inactive_color": "#f1f3f4",
    "button_alignment": "center",
    "button_shape": "rounded",
    "default_mode": "sameDay",
    "show_description": True,
    "description_same_day": "We deliver same-day within the NYC metropolitan area.",
    "description_scheduled": "Scheduled delivery available nationwide.",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MapSettings(Base):
    """Map and toggle configuration, one row per shop."""

    __tablename__ = "map_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    shop: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    same_day_mode: Mapped[str] = mapped_column(String(32), nullable=False, default=MAP_SETTINGS_DEFAULTS["same_day_mode"])
    same_day_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    same_day_geo_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    same_day_zoom_level: Mapped[int] = mapped_column(Integer, nullable=False, default=MAP_SETTINGS_DEFAULTS["same_day_zoom_level"])
    same_day_center: Mapped[str] = mapped_column(String(255), nullable=False, default=SAME_DAY_CENTER)
    same_day_tile_provider: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    same_day_tile_api_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    scheduled_mode: Mapped[str] = mapped_column(String(32), nullable=False, default=MAP_SETTINGS_DEFAULTS["scheduled_mode"])
    scheduled_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    scheduled_geo_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_zoom_level: Mapped[int] = mapped_column(Integer, nullable=False, default=MAP_SETTINGS_DEFAULTS["scheduled_zoom_level"])
    scheduled_center: Mapped[str] = mapped_column(String(255), nullable=False, default=SCHEDULED_CENTER)
    scheduled_tile_provider: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    scheduled_tile_api_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    toggle_text_same_day: Mapped[str] = mapped_column(String(255), nullable=False, default=MAP_SETTINGS_DEFAULTS["toggle_text_same_day"])
    toggle_text_scheduled: Mapped[str] = mapped_column(String(255), nullable=False, default=MAP_SETTINGS_DEFAULTS["toggle_text_scheduled"])
    button_color: Mapped[str] = mapped_column(String(32), nullable=False, default=MAP_SETTINGS_DEFAULTS["button_color"])
    button_active_color: Mapped[str] = mapped_column(String(32), nullable=False, default=MAP_SETTINGS_DEFAULTS["button_active_color"])
    button_inactive_color: Mapped[str] = mapped_column(String(32), nullable=False, default=MAP_SETTINGS_DEFAULTS["button_inactive_color"])
    button_alignment: Mapped[str] = mapped_column(String(16), nullable=False, default=MAP_SETTINGS_DEFAULTS["button_alignment"])
    button_shape: Mapped[str] = mapped_column(String(16), nullable=False, default=MAP_SETTINGS_DEFAULTS["button_shape"])
    default_mode: Mapped[str] = mapped_column(String(16), nullable=False, default=MAP_SETTINGS_DEFAULTS["default_mode"])
    show_description: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description_same_day: Mapped[str | None] = mapped_column(Text, nullable=True, default=MAP_SETTINGS_DEFAULTS["description_same_day"])
    description_scheduled: Mapped[str | None] = mapped_column(Text, nullable=True, default=MAP_SETTINGS_DEFAULTS["description_scheduled"])

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
