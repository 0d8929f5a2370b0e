"""Shop key handling shared by settings and pin services."""

from delivery_map.services.errors import ValidationError


def require_shop(shop: str | None) -> str:
    """Return the trimmed shop key or raise when it is missing."""
    normalized: str = (shop or "").strip()
    if not normalized:
        raise ValidationError("Shop parameter is required")
    return normalized
