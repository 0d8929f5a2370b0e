"""Settings resolver tests."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from delivery_map.db.base import Base
from delivery_map.models import MapSettings
from delivery_map.schemas.settings import MapSettingsPatch
from delivery_map.services.errors import ValidationError
from delivery_map.services.settings_service import (
    default_settings,
    get_or_create_settings,
    resolve_mode_view,
    resolve_settings,
    save_settings,
)

SHOP: str = "acme.myshopify.com"


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _session_factory(tmp_path: Path) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "settings.db")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def test_resolve_settings_returns_defaults_without_persisting(tmp_path: Path) -> None:
    """A shop with no row gets the full default record and nothing is written."""
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        resolved = resolve_settings(db, SHOP)
        stored_count = db.query(MapSettings).count()

    assert stored_count == 0
    assert resolved.shop == SHOP
    assert resolved.same_day_mode == "interactive"
    assert resolved.same_day_zoom_level == 11
    assert json.loads(resolved.same_day_center) == {"lat": 40.7128, "lng": -74.006}
    assert resolved.scheduled_mode == "interactive"
    assert resolved.scheduled_zoom_level == 4
    assert json.loads(resolved.scheduled_center) == {"lat": 39.8283, "lng": -98.5795}
    assert resolved.default_mode == "sameDay"
    assert resolved.show_description is True
    assert resolved.button_alignment == "center"
    assert resolved.button_shape == "rounded"
    assert resolved.toggle_text_same_day == "Same Day Delivery"


def test_resolve_settings_is_deterministic(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        first = resolve_settings(db, SHOP)
        second = resolve_settings(db, SHOP)

    assert first == second


def test_resolve_settings_requires_shop(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        with pytest.raises(ValidationError):
            resolve_settings(db, "   ")


def test_legacy_default_mode_is_served_as_interactive_without_rewrite(tmp_path: Path) -> None:
    """Stored "default" modes resolve to "interactive" on every read; the row keeps its value."""
    session_local = _session_factory(tmp_path)
    with session_local() as db:
        db.add(MapSettings(shop=SHOP, same_day_mode="default", scheduled_mode="default"))
        db.commit()

    with session_local() as db:
        first = resolve_settings(db, SHOP)
        second = resolve_settings(db, SHOP)

    assert first.same_day_mode == "interactive"
    assert first.scheduled_mode == "interactive"
    assert second.same_day_mode == "interactive"

    with session_local() as db:
        stored = db.query(MapSettings).filter(MapSettings.shop == SHOP).one()
        assert stored.same_day_mode == "default"
        assert stored.scheduled_mode == "default"


def test_get_or_create_settings_persists_default_row_once(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        created = get_or_create_settings(db, SHOP)
        again = get_or_create_settings(db, SHOP)
        stored_count = db.query(MapSettings).filter(MapSettings.shop == SHOP).count()

    assert stored_count == 1
    assert created == again
    assert created == default_settings(SHOP)


def test_save_then_resolve_round_trips_every_patched_field(tmp_path: Path) -> None:
    """Every field given to save is reflected verbatim by the resolver."""
    session_local = _session_factory(tmp_path)
    payload = {
        "sameDayMode": "custom_tiles",
        "sameDayTileProvider": "https://tiles.example.com/{z}/{x}/{y}.png?key={apiKey}",
        "sameDayTileApiKey": "secret-key",
        "sameDayZoomLevel": 9,
        "sameDayCenter": '{"lat":51.5074,"lng":-0.1278}',
        "sameDayImageUrl": "https://cdn.example.com/map.png",
        "scheduledZoomLevel": 0,
        "toggleTextSameDay": "Today",
        "toggleTextScheduled": "Later",
        "buttonColor": "#111111",
        "buttonActiveColor": "#222222",
        "buttonInactiveColor": "#333333",
        "buttonAlignment": "left",
        "buttonShape": "pill",
        "defaultMode": "scheduled",
        "showDescription": False,
        "descriptionSameDay": "London only.",
        "descriptionScheduled": "Everywhere else.",
    }

    with session_local() as db:
        save_settings(db, SHOP, MapSettingsPatch.model_validate(payload))

    with session_local() as db:
        resolved = resolve_settings(db, SHOP).model_dump(by_alias=True)

    for key, value in payload.items():
        assert resolved[key] == value, key


def test_save_creates_row_over_defaults_and_updates_only_present_fields(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        created = save_settings(db, SHOP, MapSettingsPatch.model_validate({"buttonShape": "square"}))
    assert created.button_shape == "square"
    assert created.same_day_zoom_level == 11

    with session_local() as db:
        updated = save_settings(db, SHOP, MapSettingsPatch.model_validate({"sameDayZoomLevel": 14}))
        stored_count = db.query(MapSettings).count()

    assert stored_count == 1
    assert updated.same_day_zoom_level == 14
    assert updated.button_shape == "square"


def test_save_rewrites_legacy_mode_to_interactive(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        save_settings(db, SHOP, MapSettingsPatch.model_validate({"scheduledMode": "default"}))
        stored = db.query(MapSettings).filter(MapSettings.shop == SHOP).one()
        assert stored.scheduled_mode == "interactive"


def test_save_accepts_center_object(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        saved = save_settings(db, SHOP, MapSettingsPatch.model_validate({"sameDayCenter": {"lat": 10, "lng": 20}}))

    assert json.loads(saved.same_day_center) == {"lat": 10.0, "lng": 20.0}


@pytest.mark.parametrize(
    "payload",
    [
        {"buttonAlignment": "justify"},
        {"buttonShape": "circle"},
        {"sameDayZoomLevel": -1},
        {"sameDayCenter": "somewhere"},
        {"scheduledCenter": '{"lat": 120, "lng": 0}'},
        {"sameDayMode": "static"},
        {"defaultMode": "both"},
    ],
)
def test_settings_patch_rejects_malformed_values(payload) -> None:
    with pytest.raises(PydanticValidationError):
        MapSettingsPatch.model_validate(payload)


def test_save_rejects_null_for_required_field(tmp_path: Path) -> None:
    session_local = _session_factory(tmp_path)

    with session_local() as db:
        with pytest.raises(ValidationError):
            save_settings(db, SHOP, MapSettingsPatch.model_validate({"sameDayZoomLevel": None}))
        assert db.query(MapSettings).count() == 0


def test_resolve_mode_view_projects_mode_fields() -> None:
    settings = default_settings(SHOP)

    same_day = resolve_mode_view(settings, "sameDay")
    scheduled = resolve_mode_view(settings, "scheduled")

    assert same_day.zoom_level == 11
    assert same_day.center.lat == 40.7128
    assert same_day.toggle_text == "Same Day Delivery"
    assert scheduled.zoom_level == 4
    assert scheduled.center.lng == -98.5795
    assert scheduled.description == "Scheduled delivery available nationwide."
    assert scheduled.map_mode == "interactive"


def test_resolve_mode_view_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError):
        resolve_mode_view(default_settings(SHOP), "both")
