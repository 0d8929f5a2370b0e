"""Unauthenticated storefront reads, served on the direct API and the App Proxy.

Both transports register the very same handlers, so the widget gets identical
data for a shop whichever network path it uses.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from delivery_map.core.config import settings
from delivery_map.db.session import get_db
from delivery_map.services.errors import StorageError, ValidationError
from delivery_map.services.storefront_service import (
    PublicPins,
    read_mode_view,
    read_public_pins,
    read_public_settings,
)

router: APIRouter = APIRouter()
proxy_router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
ERROR_HEADERS: dict[str, str] = {"Access-Control-Allow-Origin": "*"}
# Outage fallbacks are served uncached.
FALLBACK_HEADERS: dict[str, str] = {**ERROR_HEADERS, "Cache-Control": "no-store"}


def _public_headers() -> dict[str, str]:
    return {**CORS_HEADERS, "Cache-Control": f"public, max-age={settings.public_cache_max_age}"}


def _bad_request(exc: ValidationError) -> JSONResponse:
    return JSONResponse({"error": str(exc)}, status_code=400, headers=ERROR_HEADERS)


def _pins_headers(pins: PublicPins) -> dict[str, str]:
    return FALLBACK_HEADERS if pins.degraded else _public_headers()


def get_public_settings(request: Request, shop: str, db: Session = Depends(get_db)) -> JSONResponse:
    """Return resolved settings for shop, defaults included."""
    logger.info("[STOREFRONT] Settings request path=%s shop=%s", request.url.path, shop)
    try:
        resolved = read_public_settings(db, shop)
    except ValidationError as exc:
        return _bad_request(exc)
    except StorageError:
        logger.exception("[STOREFRONT] Error fetching map settings for shop=%s", shop)
        return JSONResponse({"error": "Failed to fetch settings"}, status_code=500, headers=ERROR_HEADERS)

    return JSONResponse({"settings": resolved.model_dump(by_alias=True, mode="json")}, headers=_public_headers())


def get_public_pins(
    request: Request,
    shop: str,
    mode: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Return pins for shop newest first; an outage yields an uncached empty list."""
    try:
        result = read_public_pins(db, shop, mode)
    except ValidationError as exc:
        return _bad_request(exc)

    logger.info("[STOREFRONT] Pins request path=%s shop=%s count=%d", request.url.path, shop, len(result.pins))
    return JSONResponse(
        {"pins": [pin.model_dump(by_alias=True, mode="json") for pin in result.pins]},
        headers=_pins_headers(result),
    )


def get_mode_view(shop: str, mode: str, db: Session = Depends(get_db)) -> JSONResponse:
    """Return one delivery mode's map configuration with the pins visible in it."""
    try:
        view, result = read_mode_view(db, shop, mode)
    except ValidationError as exc:
        return _bad_request(exc)
    except StorageError:
        logger.exception("[STOREFRONT] Error fetching map view for shop=%s mode=%s", shop, mode)
        return JSONResponse({"error": "Failed to fetch settings"}, status_code=500, headers=ERROR_HEADERS)

    return JSONResponse(
        {
            "view": view.model_dump(by_alias=True, mode="json"),
            "pins": [pin.model_dump(by_alias=True, mode="json") for pin in result.pins],
        },
        headers=_pins_headers(result),
    )


def missing_shop() -> JSONResponse:
    """Reject public reads that name no shop."""
    return _bad_request(ValidationError("Shop parameter is required"))


def preflight() -> Response:
    """Answer CORS preflight for public reads."""
    return Response(status_code=204, headers=CORS_HEADERS)


def _register(target: APIRouter, settings_path: str, pins_path: str, view_path: str) -> None:
    for path, endpoint in ((settings_path, get_public_settings), (pins_path, get_public_pins)):
        target.add_api_route(path, endpoint, methods=["GET"])
        target.add_api_route(path, preflight, methods=["OPTIONS"])
        target.add_api_route(path.removesuffix("{shop}"), missing_shop, methods=["GET"])
    target.add_api_route(view_path, get_mode_view, methods=["GET"])
    target.add_api_route(view_path, preflight, methods=["OPTIONS"])


_register(router, "/map-settings/{shop}", "/pins/{shop}", "/map/{shop}/{mode}")
_register(proxy_router, "/settings/{shop}", "/pins/{shop}", "/map/{shop}/{mode}")
