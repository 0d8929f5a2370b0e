"""Map settings API schemas."""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from delivery_map.services import geo
from delivery_map.services.errors import ValidationError

MapMode = Literal["interactive", "custom_tiles"]
DeliveryMode = Literal["sameDay", "scheduled"]
ButtonAlignment = Literal["left", "center", "right"]
ButtonShape = Literal["square", "rounded", "pill"]


class CamelModel(BaseModel):
    """Base schema exchanging camelCase keys with the dashboard and storefront."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MapSettingsPatch(CamelModel):
    """Partial settings update; only fields present in the payload are written."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    same_day_mode: Literal["interactive", "custom_tiles", "default"] | None = None
    same_day_image_url: str | None = None
    same_day_geo_json: str | None = None
    same_day_zoom_level: int | None = Field(default=None, ge=0)
    same_day_center: str | None = None
    same_day_tile_provider: str | None = None
    same_day_tile_api_key: str | None = None

    scheduled_mode: Literal["interactive", "custom_tiles", "default"] | None = None
    scheduled_image_url: str | None = None
    scheduled_geo_json: str | None = None
    scheduled_zoom_level: int | None = Field(default=None, ge=0)
    scheduled_center: str | None = None
    scheduled_tile_provider: str | None = None
    scheduled_tile_api_key: str | None = None

    toggle_text_same_day: str | None = None
    toggle_text_scheduled: str | None = None
    button_color: str | None = None
    button_active_color: str | None = None
    button_inactive_color: str | None = None
    button_alignment: ButtonAlignment | None = None
    button_shape: ButtonShape | None = None
    default_mode: DeliveryMode | None = None
    show_description: bool | None = None
    description_same_day: str | None = None
    description_scheduled: str | None = None

    @field_validator("same_day_center", "scheduled_center", mode="before")
    @classmethod
    def _validate_center(cls, value: Any) -> str | None:
        if value is None:
            return None
        try:
            parsed = geo.parse_center(value)
        except ValidationError as exc:
            raise ValueError(str(exc)) from exc
        if isinstance(value, str):
            return value
        return geo.dump_center(parsed)

    @field_validator("same_day_geo_json", "scheduled_geo_json", mode="before")
    @classmethod
    def _geo_json_as_text(cls, value: Any) -> Any:
        if isinstance(value, (dict, list)):
            return json.dumps(value, separators=(",", ":"))
        return value


class MapSettingsResponse(CamelModel):
    """Fully resolved settings as served to the dashboard and storefront."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    shop: str

    same_day_mode: MapMode
    same_day_image_url: str | None
    same_day_geo_json: str | None
    same_day_zoom_level: int
    same_day_center: str
    same_day_tile_provider: str | None
    same_day_tile_api_key: str | None

    scheduled_mode: MapMode
    scheduled_image_url: str | None
    scheduled_geo_json: str | None
    scheduled_zoom_level: int
    scheduled_center: str
    scheduled_tile_provider: str | None
    scheduled_tile_api_key: str | None

    toggle_text_same_day: str
    toggle_text_scheduled: str
    button_color: str
    button_active_color: str
    button_inactive_color: str
    button_alignment: str
    button_shape: str
    default_mode: str
    show_description: bool
    description_same_day: str | None
    description_scheduled: str | None


class MapCenter(BaseModel):
    """Parsed map center."""

    lat: float
    lng: float


class ModeView(CamelModel):
    """Settings projected onto one delivery mode."""

    delivery_mode: DeliveryMode
    map_mode: MapMode
    image_url: str | None
    geo_json: str | None
    zoom_level: int
    center: MapCenter
    tile_provider: str | None
    tile_api_key: str | None
    toggle_text: str
    show_description: bool
    description: str | None
