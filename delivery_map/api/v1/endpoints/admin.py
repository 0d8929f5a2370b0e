"""Shop-scoped admin dashboard endpoints."""

import logging
from typing import Any, assert_never

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from delivery_map.core.security import get_current_shop
from delivery_map.db.session import get_db
from delivery_map.schemas.admin import (
    ActionResult,
    AdminAction,
    CreatePinAction,
    DashboardResponse,
    DeletePinAction,
    SaveSettingsAction,
    SettingsSaveResponse,
    UpdatePinAction,
    admin_action_adapter,
)
from delivery_map.schemas.pin import PinResponse
from delivery_map.schemas.settings import MapSettingsPatch, MapSettingsResponse
from delivery_map.services.errors import NotFoundError, StorageError, ValidationError
from delivery_map.services.pin_service import create_pin, delete_pin, list_pins, update_pin
from delivery_map.services.settings_service import get_or_create_settings, save_settings

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


def _describe(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else str(first["msg"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        ActionResult(success=False, message=message).model_dump(by_alias=True, exclude_none=True),
        status_code=status_code,
    )


def _dispatch(db: Session, shop: str, action: AdminAction) -> ActionResult:
    match action:
        case SaveSettingsAction():
            save_settings(db, shop, action.data)
            return ActionResult(success=True, message="Settings saved")
        case CreatePinAction():
            pin = create_pin(db, shop, action.data)
            return ActionResult(success=True, message="Pin created", pin=PinResponse.model_validate(pin))
        case UpdatePinAction():
            pin = update_pin(db, shop, action.pin_id, action.data)
            return ActionResult(success=True, message="Pin updated", pin=PinResponse.model_validate(pin))
        case DeletePinAction():
            delete_pin(db, shop, action.pin_id)
            return ActionResult(success=True, message="Pin deleted")
        case _:
            assert_never(action)


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    shop: str = Depends(get_current_shop),
) -> DashboardResponse | JSONResponse:
    """Return settings (created on first visit) and pins for the signed-in shop."""
    try:
        resolved = get_or_create_settings(db, shop)
        pins = list_pins(db, shop)
    except StorageError:
        logger.exception("[ADMIN] Dashboard load failed for shop=%s", shop)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load dashboard")
    return DashboardResponse(shop=shop, settings=resolved, pins=[PinResponse.model_validate(pin) for pin in pins])


@router.post("")
def run_action(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    shop: str = Depends(get_current_shop),
) -> JSONResponse:
    """Apply one dashboard write action: save, createPin, updatePin or deletePin."""
    try:
        action: AdminAction = admin_action_adapter.validate_python(payload)
    except PydanticValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, _describe(exc))

    try:
        result: ActionResult = _dispatch(db, shop, action)
    except ValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, str(exc))
    except NotFoundError as exc:
        logger.info("[ADMIN] %s rejected for shop=%s: %s", action.action, shop, exc)
        return _failure(status.HTTP_404_NOT_FOUND, str(exc))
    except StorageError:
        logger.exception("[ADMIN] %s failed for shop=%s", action.action, shop)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save changes")

    logger.info("[ADMIN] %s succeeded for shop=%s", action.action, shop)
    return JSONResponse(result.model_dump(by_alias=True, exclude_none=True, mode="json"))


@router.get("/map-settings", response_model=MapSettingsResponse)
def get_map_settings(
    db: Session = Depends(get_db),
    shop: str = Depends(get_current_shop),
) -> MapSettingsResponse | JSONResponse:
    """Return settings for the signed-in shop, creating defaults on first visit."""
    try:
        return get_or_create_settings(db, shop)
    except StorageError:
        logger.exception("[ADMIN] Error fetching map settings for shop=%s", shop)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch settings")


@router.post("/map-settings", response_model=SettingsSaveResponse)
def post_map_settings(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    shop: str = Depends(get_current_shop),
) -> SettingsSaveResponse | JSONResponse:
    """Upsert settings for the signed-in shop."""
    try:
        patch = MapSettingsPatch.model_validate(payload)
    except PydanticValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, _describe(exc))

    try:
        saved = save_settings(db, shop, patch)
    except ValidationError as exc:
        return _failure(status.HTTP_400_BAD_REQUEST, str(exc))
    except StorageError:
        logger.exception("[ADMIN] Error saving map settings for shop=%s", shop)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save settings")
    return SettingsSaveResponse(settings=saved)


@router.get("/pins", response_model=list[PinResponse])
def get_pins(
    db: Session = Depends(get_db),
    shop: str = Depends(get_current_shop),
) -> list[PinResponse] | JSONResponse:
    """List the signed-in shop's pins, newest first."""
    try:
        pins = list_pins(db, shop)
    except StorageError:
        logger.exception("[ADMIN] Error fetching pins for shop=%s", shop)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch pins")
    return [PinResponse.model_validate(pin) for pin in pins]
