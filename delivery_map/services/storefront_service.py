"""Read model shared by the direct storefront API and the App Proxy."""

import logging
from typing import NamedTuple

from sqlalchemy.orm import Session

from delivery_map.schemas.pin import PinResponse
from delivery_map.schemas.settings import MapSettingsResponse, ModeView
from delivery_map.services.errors import StorageError
from delivery_map.services.pin_service import list_pins
from delivery_map.services.settings_service import resolve_mode_view, resolve_settings
from delivery_map.services.shop_scope import require_shop

logger = logging.getLogger(__name__)


class PublicPins(NamedTuple):
    """Pins served to the storefront; ``degraded`` marks the empty outage fallback."""

    pins: list[PinResponse]
    degraded: bool = False


def read_public_settings(db: Session, shop: str) -> MapSettingsResponse:
    """Resolved settings for the storefront; storage failures propagate."""
    return resolve_settings(db, shop)


def read_public_pins(db: Session, shop: str, delivery_mode: str | None = None) -> PublicPins:
    """Pins for the storefront; a storage failure degrades to an empty list."""
    shop = require_shop(shop)
    try:
        pins = list_pins(db, shop, delivery_mode)
    except StorageError:
        logger.exception("[STOREFRONT] Pin read failed for shop=%s; serving empty list", shop)
        return PublicPins(pins=[], degraded=True)
    return PublicPins(pins=[PinResponse.model_validate(pin) for pin in pins])


def read_mode_view(db: Session, shop: str, delivery_mode: str) -> tuple[ModeView, PublicPins]:
    """Settings projected onto one delivery mode plus the pins visible in it."""
    settings = read_public_settings(db, shop)
    view: ModeView = resolve_mode_view(settings, delivery_mode)
    return view, read_public_pins(db, shop, delivery_mode)
