"""Admin dashboard action schemas."""

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from delivery_map.schemas.pin import PinCreate, PinResponse, PinUpdate
from delivery_map.schemas.settings import CamelModel, MapSettingsPatch, MapSettingsResponse


class SaveSettingsAction(CamelModel):
    action: Literal["save"]
    data: MapSettingsPatch


class CreatePinAction(CamelModel):
    action: Literal["createPin"]
    data: PinCreate


class UpdatePinAction(CamelModel):
    action: Literal["updatePin"]
    pin_id: str = Field(min_length=1)
    data: PinUpdate


class DeletePinAction(CamelModel):
    action: Literal["deletePin"]
    pin_id: str = Field(min_length=1)


AdminAction = Annotated[
    Union[SaveSettingsAction, CreatePinAction, UpdatePinAction, DeletePinAction],
    Field(discriminator="action"),
]
admin_action_adapter: TypeAdapter[AdminAction] = TypeAdapter(AdminAction)


class ActionResult(CamelModel):
    """Outcome of one dashboard write action."""

    success: bool
    message: str
    pin: PinResponse | None = None


class DashboardResponse(CamelModel):
    """Everything the dashboard needs on first load."""

    shop: str
    settings: MapSettingsResponse
    pins: list[PinResponse]


class SettingsSaveResponse(CamelModel):
    settings: MapSettingsResponse
    success: bool = True
