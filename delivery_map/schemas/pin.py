"""Delivery pin API schemas."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import ConfigDict, computed_field, field_validator
from pydantic.alias_generators import to_camel

from delivery_map.schemas.settings import CamelModel
from delivery_map.services.geo import radius_in_meters

PinDeliveryMode = Literal["sameDay", "scheduled", "both"]
RadiusUnit = Literal["km", "miles"]

_NUMERIC_FORM_FIELDS = ("radius_distance", "border_thickness", "fill_opacity")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PinCreate(CamelModel):
    """Payload for creating a pin; omitted fields take pin defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str
    latitude: Any
    longitude: Any
    delivery_mode: PinDeliveryMode = "both"
    color: str | None = None
    has_radius: bool = False
    radius_distance: float | None = None
    radius_unit: RadiusUnit | None = None
    fill_color: str | None = None
    border_color: str | None = None
    border_thickness: float | None = None
    fill_opacity: float | None = None

    @field_validator(*_NUMERIC_FORM_FIELDS, "color", "fill_color", "border_color", "radius_unit", mode="before")
    @classmethod
    def _empty_form_values(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PinUpdate(CamelModel):
    """Partial pin update; only fields present in the payload are written."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str | None = None
    latitude: Any = None
    longitude: Any = None
    delivery_mode: PinDeliveryMode | None = None
    color: str | None = None
    has_radius: bool | None = None
    radius_distance: float | None = None
    radius_unit: RadiusUnit | None = None
    fill_color: str | None = None
    border_color: str | None = None
    border_thickness: float | None = None
    fill_opacity: float | None = None

    @field_validator(*_NUMERIC_FORM_FIELDS, mode="before")
    @classmethod
    def _empty_form_values(cls, value: Any) -> Any:
        return _blank_to_none(value)


class PinResponse(CamelModel):
    """Serialized delivery pin."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    shop: str
    title: str
    latitude: float
    longitude: float
    delivery_mode: str
    color: str
    has_radius: bool
    radius_distance: float | None
    radius_unit: str
    fill_color: str
    border_color: str
    border_thickness: float
    fill_opacity: float
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # Stored timestamps are UTC; SQLite returns them without an offset.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def radius_meters(self) -> float | None:
        if not self.has_radius or self.radius_distance is None:
            return None
        return radius_in_meters(self.radius_distance, self.radius_unit)
