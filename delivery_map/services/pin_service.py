"""Shop-scoped delivery pin storage."""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from delivery_map.models.delivery_pin import (
    DEFAULT_BORDER_THICKNESS,
    DEFAULT_FILL_OPACITY,
    DEFAULT_PIN_COLOR,
    DEFAULT_RADIUS_UNIT,
    DEFAULT_ZONE_COLOR,
    DeliveryPin,
)
from delivery_map.models.map_settings import DELIVERY_MODES
from delivery_map.schemas.pin import PinCreate, PinUpdate
from delivery_map.services.errors import NotFoundError, StorageError, ValidationError
from delivery_map.services.geo import validate_coordinates
from delivery_map.services.shop_scope import require_shop

logger = logging.getLogger(__name__)


def _require_title(value: str | None) -> str:
    title: str = (value or "").strip()
    if not title:
        raise ValidationError("title is required")
    return title


def _require_positive(value: float | None, name: str) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be a positive number")
    return float(value)


def clamp_fill_opacity(value: float | None) -> float:
    """Default a missing opacity and clamp supplied values into 0..1."""
    if value is None:
        return DEFAULT_FILL_OPACITY
    if not math.isfinite(value):
        raise ValidationError("fillOpacity must be a number between 0 and 1")
    return min(max(float(value), 0.0), 1.0)


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(message) from exc


def list_pins(db: Session, shop: str, delivery_mode: str | None = None) -> list[DeliveryPin]:
    """Return the shop's pins, newest first, optionally limited to one delivery mode."""
    shop = require_shop(shop)
    query = db.query(DeliveryPin).filter(DeliveryPin.shop == shop)
    if delivery_mode is not None:
        if delivery_mode not in DELIVERY_MODES:
            raise ValidationError(f"Unknown delivery mode: {delivery_mode}")
        query = query.filter(DeliveryPin.delivery_mode.in_([delivery_mode, "both"]))

    try:
        return query.order_by(DeliveryPin.created_at.desc()).all()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to list pins") from exc


def get_pin(db: Session, shop: str, pin_id: str) -> DeliveryPin:
    """Return one pin owned by shop or raise NotFoundError."""
    shop = require_shop(shop)
    try:
        pin: DeliveryPin | None = (
            db.query(DeliveryPin)
            .filter(DeliveryPin.id == pin_id, DeliveryPin.shop == shop)
            .first()
        )
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to read pin") from exc
    if pin is None:
        raise NotFoundError("Pin not found")
    return pin


def create_pin(db: Session, shop: str, payload: PinCreate, *, now: datetime | None = None) -> DeliveryPin:
    """Validate, default and persist a new pin."""
    shop = require_shop(shop)
    title: str = _require_title(payload.title)
    latitude, longitude = validate_coordinates(payload.latitude, payload.longitude)

    pin = DeliveryPin(
        shop=shop,
        title=title,
        latitude=latitude,
        longitude=longitude,
        delivery_mode=payload.delivery_mode,
        color=payload.color or DEFAULT_PIN_COLOR,
        has_radius=payload.has_radius,
        radius_distance=None,
        radius_unit=DEFAULT_RADIUS_UNIT,
        fill_color=DEFAULT_ZONE_COLOR,
        border_color=DEFAULT_ZONE_COLOR,
        border_thickness=DEFAULT_BORDER_THICKNESS,
        fill_opacity=DEFAULT_FILL_OPACITY,
        created_at=now or datetime.now(timezone.utc),
    )
    if payload.has_radius:
        pin.radius_distance = _require_positive(payload.radius_distance, "radiusDistance")
        pin.radius_unit = payload.radius_unit or DEFAULT_RADIUS_UNIT
        pin.fill_color = payload.fill_color or DEFAULT_ZONE_COLOR
        pin.border_color = payload.border_color or DEFAULT_ZONE_COLOR
        if payload.border_thickness is not None:
            pin.border_thickness = _require_positive(payload.border_thickness, "borderThickness")
        pin.fill_opacity = clamp_fill_opacity(payload.fill_opacity)

    db.add(pin)
    _commit(db, "Failed to create pin")
    db.refresh(pin)
    logger.info("[STORE] Created pin id=%s shop=%s radius=%s", pin.id, shop, pin.has_radius)
    return pin


def _zone_changes(pin: DeliveryPin, values: dict[str, Any]) -> dict[str, Any]:
    changes: dict[str, Any] = {
        "radius_distance": _require_positive(values.get("radius_distance", pin.radius_distance), "radiusDistance"),
    }
    for field in ("radius_unit", "fill_color", "border_color"):
        if field in values:
            if values[field] is None:
                raise ValidationError(f"{to_camel(field)} cannot be empty")
            changes[field] = values[field]
    if "border_thickness" in values:
        changes["border_thickness"] = _require_positive(values["border_thickness"], "borderThickness")
    if "fill_opacity" in values:
        changes["fill_opacity"] = clamp_fill_opacity(values["fill_opacity"])
    return changes


def update_pin(db: Session, shop: str, pin_id: str, payload: PinUpdate) -> DeliveryPin:
    """Overwrite the fields present in payload on a pin owned by shop."""
    values: dict[str, Any] = payload.model_dump(exclude_unset=True)
    pin: DeliveryPin = get_pin(db, shop, pin_id)

    changes: dict[str, Any] = {}
    if "title" in values:
        changes["title"] = _require_title(values["title"])
    if "latitude" in values or "longitude" in values:
        changes["latitude"], changes["longitude"] = validate_coordinates(
            values.get("latitude", pin.latitude),
            values.get("longitude", pin.longitude),
        )
    for field in ("delivery_mode", "color"):
        if field in values:
            if values[field] is None:
                raise ValidationError(f"{to_camel(field)} cannot be empty")
            changes[field] = values[field]

    has_radius = values.get("has_radius", pin.has_radius)
    if has_radius is None:
        raise ValidationError("hasRadius cannot be empty")
    if has_radius:
        changes.update(_zone_changes(pin, values))
    else:
        # Zone fields are ignored while the zone is off.
        changes["radius_distance"] = None
    changes["has_radius"] = has_radius

    for field, value in changes.items():
        setattr(pin, field, value)
    _commit(db, "Failed to update pin")
    db.refresh(pin)
    logger.info("[STORE] Updated pin id=%s shop=%s fields=%s", pin.id, pin.shop, sorted(values))
    return pin


def delete_pin(db: Session, shop: str, pin_id: str) -> None:
    """Delete a pin owned by shop; a missing or foreign pin raises NotFoundError."""
    shop = require_shop(shop)
    pin: DeliveryPin = get_pin(db, shop, pin_id)
    db.delete(pin)
    _commit(db, "Failed to delete pin")
    logger.info("[STORE] Deleted pin id=%s shop=%s", pin_id, shop)
