"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from delivery_map.models.delivery_pin import (
    DEFAULT_BORDER_THICKNESS,
    DEFAULT_FILL_OPACITY,
    DEFAULT_RADIUS_UNIT,
    DEFAULT_ZONE_COLOR,
)
from delivery_map.models.map_settings import MAP_SETTINGS_DEFAULTS

logger = logging.getLogger(__name__)


def _text_default(column: str) -> str:
    return str(MAP_SETTINGS_DEFAULTS[column]).replace("'", "''")


# Columns added after the first release, with the DDL used to backfill them.
MAP_SETTINGS_ADDED_COLUMNS: dict[str, str] = {
    "same_day_center": f"VARCHAR(255) NOT NULL DEFAULT '{_text_default('same_day_center')}'",
    "same_day_tile_provider": "VARCHAR(1024)",
    "same_day_tile_api_key": "VARCHAR(255)",
    "scheduled_center": f"VARCHAR(255) NOT NULL DEFAULT '{_text_default('scheduled_center')}'",
    "scheduled_tile_provider": "VARCHAR(1024)",
    "scheduled_tile_api_key": "VARCHAR(255)",
    "button_alignment": f"VARCHAR(16) NOT NULL DEFAULT '{_text_default('button_alignment')}'",
    "button_shape": f"VARCHAR(16) NOT NULL DEFAULT '{_text_default('button_shape')}'",
    "default_mode": f"VARCHAR(16) NOT NULL DEFAULT '{_text_default('default_mode')}'",
    "show_description": "BOOLEAN NOT NULL DEFAULT 1",
    "description_same_day": "TEXT",
    "description_scheduled": "TEXT",
}

DELIVERY_PIN_ADDED_COLUMNS: dict[str, str] = {
    "has_radius": "BOOLEAN NOT NULL DEFAULT 0",
    "radius_distance": "FLOAT",
    "radius_unit": f"VARCHAR(8) NOT NULL DEFAULT '{DEFAULT_RADIUS_UNIT}'",
    "fill_color": f"VARCHAR(32) NOT NULL DEFAULT '{DEFAULT_ZONE_COLOR}'",
    "border_color": f"VARCHAR(32) NOT NULL DEFAULT '{DEFAULT_ZONE_COLOR}'",
    "border_thickness": f"FLOAT NOT NULL DEFAULT {DEFAULT_BORDER_THICKNESS}",
    "fill_opacity": f"FLOAT NOT NULL DEFAULT {DEFAULT_FILL_OPACITY}",
}


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _add_missing_columns(connection: Connection, table_name: str, columns: dict[str, str]) -> list[str]:
    existing: set[str] = _sqlite_column_names(connection, table_name)
    added: list[str] = []
    for column, ddl in columns.items():
        if column in existing:
            continue
        connection.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column} {ddl}"))
        added.append(column)
    return added


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight schema updates for legacy SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}

        for table_name, columns in (
            ("map_settings", MAP_SETTINGS_ADDED_COLUMNS),
            ("delivery_pins", DELIVERY_PIN_ADDED_COLUMNS),
        ):
            if table_name not in table_names:
                continue
            added = _add_missing_columns(connection, table_name, columns)
            if added:
                logger.info("[BOOTSTRAP] Added columns to %s: %s", table_name, ", ".join(added))

        if "delivery_pins" in table_names:
            connection.execute(
                text(
                    "CREATE INDEX IF NOT EXISTS ix_delivery_pins_shop_created_at "
                    "ON delivery_pins(shop, created_at)"
                )
            )
