"""Map settings resolution shared by the dashboard and every public read path."""

import logging
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from delivery_map.models.map_settings import (
    DELIVERY_MODES,
    LEGACY_MAP_MODE,
    MAP_MODES,
    MAP_SETTINGS_DEFAULTS,
    MapSettings,
)
from delivery_map.schemas.settings import MapCenter, MapSettingsPatch, MapSettingsResponse, ModeView
from delivery_map.services import geo
from delivery_map.services.errors import StorageError, ValidationError
from delivery_map.services.shop_scope import require_shop

logger = logging.getLogger(__name__)

MODE_FIELDS: tuple[str, ...] = ("same_day_mode", "scheduled_mode")
REQUIRED_FIELDS: frozenset[str] = frozenset(
    column.name
    for column in MapSettings.__table__.columns
    if not column.nullable and column.name in MAP_SETTINGS_DEFAULTS
)
MODE_PREFIXES: dict[str, str] = {"sameDay": "same_day", "scheduled": "scheduled"}


def normalize_map_mode(value: str | None) -> str | None:
    """Map the retired static mode onto the interactive map."""
    if value == LEGACY_MAP_MODE:
        return "interactive"
    return value


def default_settings(shop: str) -> MapSettingsResponse:
    """Return the complete default record for a shop without persisting it."""
    return MapSettingsResponse(shop=shop, **MAP_SETTINGS_DEFAULTS)


def _compose(row: MapSettings) -> MapSettingsResponse:
    values: dict[str, Any] = {}
    for field, default in MAP_SETTINGS_DEFAULTS.items():
        value = getattr(row, field)
        if value is None and field in REQUIRED_FIELDS:
            value = default
        values[field] = value

    for field in MODE_FIELDS:
        mode = normalize_map_mode(values[field])
        if mode not in MAP_MODES:
            logger.warning("[STORE] Unknown %s=%r for shop=%s; using default", field, mode, row.shop)
            mode = MAP_SETTINGS_DEFAULTS[field]
        values[field] = mode

    return MapSettingsResponse(shop=row.shop, **values)


def get_stored_settings(db: Session, shop: str) -> MapSettings | None:
    """Return the persisted settings row for shop, if any."""
    try:
        return db.query(MapSettings).filter(MapSettings.shop == shop).first()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to read map settings") from exc


def resolve_settings(db: Session, shop: str) -> MapSettingsResponse:
    """Compose stored settings with defaults; never writes."""
    shop = require_shop(shop)
    row: MapSettings | None = get_stored_settings(db, shop)
    if row is None:
        return default_settings(shop)
    return _compose(row)


def get_or_create_settings(db: Session, shop: str) -> MapSettingsResponse:
    """Resolve settings for the dashboard, persisting the default row on first visit."""
    shop = require_shop(shop)
    row: MapSettings | None = get_stored_settings(db, shop)
    if row is not None:
        return _compose(row)

    row = MapSettings(shop=shop, **MAP_SETTINGS_DEFAULTS)
    db.add(row)
    try:
        db.commit()
    except IntegrityError:
        # Another session created the row first.
        db.rollback()
        row = get_stored_settings(db, shop)
        if row is None:
            raise StorageError("Failed to create map settings")
        return _compose(row)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to create map settings") from exc

    db.refresh(row)
    logger.info("[STORE] Created default map settings for shop=%s", shop)
    return _compose(row)


def _patch_values(patch: MapSettingsPatch) -> dict[str, Any]:
    values: dict[str, Any] = patch.model_dump(exclude_unset=True)
    for field in MODE_FIELDS:
        if field in values:
            values[field] = normalize_map_mode(values[field])
    for field, value in values.items():
        if value is None and field in REQUIRED_FIELDS:
            raise ValidationError(f"{to_camel(field)} cannot be empty")
    return values


def _apply(row: MapSettings, values: dict[str, Any]) -> None:
    for field, value in values.items():
        setattr(row, field, value)


def save_settings(db: Session, shop: str, patch: MapSettingsPatch) -> MapSettingsResponse:
    """Upsert settings: create over defaults when absent, else update present fields."""
    shop = require_shop(shop)
    values: dict[str, Any] = _patch_values(patch)

    row: MapSettings | None = get_stored_settings(db, shop)
    created: bool = row is None
    if row is None:
        row = MapSettings(shop=shop, **{**MAP_SETTINGS_DEFAULTS, **values})
        db.add(row)
    else:
        _apply(row, values)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        row = get_stored_settings(db, shop)
        if row is None:
            raise StorageError("Failed to save map settings")
        _apply(row, values)
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageError("Failed to save map settings") from exc
        created = False
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Failed to save map settings") from exc

    db.refresh(row)
    logger.info(
        "[STORE] %s map settings for shop=%s fields=%s",
        "Created" if created else "Updated",
        shop,
        sorted(values),
    )
    return _compose(row)


def resolve_mode_view(settings: MapSettingsResponse, delivery_mode: str) -> ModeView:
    """Project resolved settings onto the same-day or scheduled map."""
    if delivery_mode not in DELIVERY_MODES:
        raise ValidationError(f"Unknown delivery mode: {delivery_mode}")
    prefix: str = MODE_PREFIXES[delivery_mode]
    values: dict[str, Any] = settings.model_dump()

    center_field: str = f"{prefix}_center"
    try:
        center: dict[str, float] = geo.parse_center(values[center_field])
    except ValidationError:
        logger.warning("[STORE] Malformed %s for shop=%s; using default", center_field, settings.shop)
        center = geo.parse_center(MAP_SETTINGS_DEFAULTS[center_field])

    return ModeView(
        delivery_mode=delivery_mode,
        map_mode=values[f"{prefix}_mode"],
        image_url=values[f"{prefix}_image_url"],
        geo_json=values[f"{prefix}_geo_json"],
        zoom_level=values[f"{prefix}_zoom_level"],
        center=MapCenter(**center),
        tile_provider=values[f"{prefix}_tile_provider"],
        tile_api_key=values[f"{prefix}_tile_api_key"],
        toggle_text=values[f"toggle_text_{prefix}"],
        show_description=settings.show_description,
        description=values[f"description_{prefix}"],
    )
