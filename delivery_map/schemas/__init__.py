"""Schema exports."""

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
from delivery_map.schemas.pin import PinCreate, PinResponse, PinUpdate
from delivery_map.schemas.settings import MapCenter, MapSettingsPatch, MapSettingsResponse, ModeView

__all__ = [
    "ActionResult",
    "AdminAction",
    "CreatePinAction",
    "DashboardResponse",
    "DeletePinAction",
    "SaveSettingsAction",
    "SettingsSaveResponse",
    "UpdatePinAction",
    "admin_action_adapter",
    "PinCreate",
    "PinResponse",
    "PinUpdate",
    "MapCenter",
    "MapSettingsPatch",
    "MapSettingsResponse",
    "ModeView",
]
