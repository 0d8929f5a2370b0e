"""Coordinate and radius helpers."""

import json
import math
from typing import Any

from delivery_map.services.errors import ValidationError

METERS_PER_UNIT: dict[str, float] = {
    "km": 1000.0,
    "miles": 1609.34,
}


def radius_in_meters(distance: float, unit: str) -> float:
    """Convert a radius magnitude in km or miles to meters."""
    try:
        factor: float = METERS_PER_UNIT[unit]
    except KeyError as exc:
        raise ValidationError(f"Unsupported radius unit: {unit}") from exc
    return distance * factor


def parse_coordinate(value: Any, *, name: str, limit: float) -> float:
    """Parse one coordinate as a finite float within [-limit, limit]."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{name} is required")
    try:
        parsed: float = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number") from exc
    if not math.isfinite(parsed):
        raise ValidationError(f"{name} must be a finite number")
    if not -limit <= parsed <= limit:
        raise ValidationError(f"{name} must be between {-limit:g} and {limit:g}")
    return parsed


def validate_coordinates(latitude: Any, longitude: Any) -> tuple[float, float]:
    """Return (latitude, longitude) as floats or raise ValidationError."""
    return (
        parse_coordinate(latitude, name="latitude", limit=90.0),
        parse_coordinate(longitude, name="longitude", limit=180.0),
    )


def parse_center(value: Any) -> dict[str, float]:
    """Parse a map center given as JSON text or a mapping into {lat, lng}."""
    raw: Any = value
    if isinstance(value, str):
        try:
            raw = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValidationError("center must be JSON like {\"lat\": 0, \"lng\": 0}") from exc
    if not isinstance(raw, dict) or "lat" not in raw or "lng" not in raw:
        raise ValidationError("center must contain lat and lng")
    lat, lng = validate_coordinates(raw["lat"], raw["lng"])
    return {"lat": lat, "lng": lng}


def dump_center(center: dict[str, float]) -> str:
    """Serialize a parsed center to the compact stored form."""
    return json.dumps({"lat": center["lat"], "lng": center["lng"]}, separators=(",", ":"))
