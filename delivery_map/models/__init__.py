"""Application models package."""

from delivery_map.models.delivery_pin import DeliveryPin
from delivery_map.models.map_settings import MapSettings

__all__ = ["DeliveryPin", "MapSettings"]
