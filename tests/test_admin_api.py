"""Admin dashboard API tests."""

from datetime import datetime, timedelta
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from delivery_map.core.security import create_access_token, create_shop_token
from delivery_map.db import session as db_session
from delivery_map.db.base import Base
from delivery_map.main import app
from delivery_map.models import DeliveryPin, MapSettings

SHOP: str = "acme.myshopify.com"
OTHER_SHOP: str = "rival.myshopify.com"


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _use_database(db_file: Path, monkeypatch, *, create_schema: bool = True) -> sessionmaker:
    engine = _build_test_engine(db_file)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    if create_schema:
        Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def _auth(shop: str = SHOP) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_shop_token(shop)}"}


def _create_pin(client: TestClient, shop: str = SHOP, **data) -> dict:
    body = {"title": "Warehouse", "latitude": 40.7, "longitude": -74.0, **data}
    response = client.post("/api/v1/admin", json={"action": "createPin", "data": body}, headers=_auth(shop))
    assert response.status_code == 200, response.text
    return response.json()["pin"]


def test_admin_requires_bearer_token(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "auth.db", monkeypatch)

    with TestClient(app) as client:
        missing = client.get("/api/v1/admin")
        garbage = client.get("/api/v1/admin", headers={"Authorization": "Bearer not-a-token"})
        no_shop = client.get(
            "/api/v1/admin",
            headers={"Authorization": f"Bearer {create_access_token('  ')}"},
        )
        expired = client.get(
            "/api/v1/admin",
            headers={"Authorization": f"Bearer {create_access_token(SHOP, timedelta(minutes=-5))}"},
        )

    assert missing.status_code == 401
    assert garbage.status_code == 401
    assert no_shop.status_code == 401
    assert expired.status_code == 401


def test_dashboard_creates_default_settings_once(tmp_path: Path, monkeypatch) -> None:
    session_local = _use_database(tmp_path / "dashboard.db", monkeypatch)

    with TestClient(app) as client:
        first = client.get("/api/v1/admin", headers=_auth())
        second = client.get("/api/v1/admin", headers=_auth())

    assert first.status_code == 200
    body = first.json()
    assert body["shop"] == SHOP
    assert body["pins"] == []
    assert body["settings"]["sameDayMode"] == "interactive"
    assert body["settings"]["toggleTextSameDay"] == "Same Day Delivery"
    assert second.json()["settings"] == body["settings"]

    with session_local() as db:
        assert db.query(MapSettings).filter(MapSettings.shop == SHOP).count() == 1


def test_save_action_updates_public_settings(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "save.db", monkeypatch)

    with TestClient(app) as client:
        saved = client.post(
            "/api/v1/admin",
            json={
                "action": "save",
                "data": {
                    "sameDayMode": "default",
                    "scheduledZoomLevel": 6,
                    "buttonAlignment": "right",
                    "toggleTextScheduled": "Later",
                    "sameDayTileApiKey": "pk.test",
                },
            },
            headers=_auth(),
        )
        public = client.get(f"/settings/{SHOP}")

    assert saved.status_code == 200
    assert saved.json() == {"success": True, "message": "Settings saved"}
    settings = public.json()["settings"]
    assert settings["sameDayMode"] == "interactive"
    assert settings["scheduledZoomLevel"] == 6
    assert settings["buttonAlignment"] == "right"
    assert settings["toggleTextScheduled"] == "Later"
    assert settings["sameDayTileApiKey"] == "pk.test"
    assert settings["toggleTextSameDay"] == "Same Day Delivery"


def test_save_action_rejects_invalid_values(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "save_invalid.db", monkeypatch)

    with TestClient(app) as client:
        alignment = client.post(
            "/api/v1/admin",
            json={"action": "save", "data": {"buttonAlignment": "justify"}},
            headers=_auth(),
        )
        center = client.post(
            "/api/v1/admin",
            json={"action": "save", "data": {"sameDayCenter": "not json"}},
            headers=_auth(),
        )

    assert alignment.status_code == 400
    assert alignment.json()["success"] is False
    assert center.status_code == 400


def test_pin_lifecycle_through_actions(tmp_path: Path, monkeypatch) -> None:
    session_local = _use_database(tmp_path / "lifecycle.db", monkeypatch)

    with TestClient(app) as client:
        pin = _create_pin(client, hasRadius=True, radiusDistance=3, radiusUnit="miles", fillOpacity=1.7)
        assert pin["shop"] == SHOP
        assert pin["deliveryMode"] == "both"
        assert pin["fillOpacity"] == 1.0
        assert round(pin["radiusMeters"], 2) == 4828.02

        moved = client.post(
            "/api/v1/admin",
            json={"action": "updatePin", "pinId": pin["id"], "data": {"latitude": 41.0, "longitude": -73.5}},
            headers=_auth(),
        )
        assert moved.status_code == 200
        assert moved.json()["message"] == "Pin updated"
        assert moved.json()["pin"]["latitude"] == 41.0
        assert moved.json()["pin"]["radiusDistance"] == 3.0
        assert moved.json()["pin"]["title"] == "Warehouse"

        listed = client.get("/api/v1/admin/pins", headers=_auth())
        assert [item["id"] for item in listed.json()] == [pin["id"]]

        deleted = client.post(
            "/api/v1/admin",
            json={"action": "deletePin", "pinId": pin["id"]},
            headers=_auth(),
        )
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Pin deleted"}

        deleted_again = client.post(
            "/api/v1/admin",
            json={"action": "deletePin", "pinId": pin["id"]},
            headers=_auth(),
        )
        assert deleted_again.status_code == 404

    with session_local() as db:
        assert db.query(DeliveryPin).count() == 0


def test_create_pin_rejects_bad_coordinates(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "bad_coords.db", monkeypatch)

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/admin",
            json={"action": "createPin", "data": {"title": "Nowhere", "latitude": 95, "longitude": 0}},
            headers=_auth(),
        )
        public = client.get(f"/pins/{SHOP}")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "latitude" in response.json()["message"]
    assert public.json() == {"pins": []}


def test_pins_of_another_shop_are_not_reachable(tmp_path: Path, monkeypatch) -> None:
    session_local = _use_database(tmp_path / "isolation.db", monkeypatch)

    with TestClient(app) as client:
        foreign = _create_pin(client, shop=OTHER_SHOP, title="Rival depot")

        update = client.post(
            "/api/v1/admin",
            json={"action": "updatePin", "pinId": foreign["id"], "data": {"title": "Hijacked"}},
            headers=_auth(),
        )
        delete = client.post(
            "/api/v1/admin",
            json={"action": "deletePin", "pinId": foreign["id"]},
            headers=_auth(),
        )
        dashboard = client.get("/api/v1/admin", headers=_auth())

    assert update.status_code == 404
    assert delete.status_code == 404
    assert dashboard.json()["pins"] == []

    with session_local() as db:
        stored = db.get(DeliveryPin, foreign["id"])
        assert stored is not None
        assert stored.title == "Rival depot"


def test_malformed_actions_are_rejected(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "malformed.db", monkeypatch)

    with TestClient(app) as client:
        unknown = client.post("/api/v1/admin", json={"action": "purge"}, headers=_auth())
        missing_id = client.post(
            "/api/v1/admin",
            json={"action": "updatePin", "data": {"title": "x"}},
            headers=_auth(),
        )
        empty_id = client.post(
            "/api/v1/admin",
            json={"action": "deletePin", "pinId": ""},
            headers=_auth(),
        )

    assert unknown.status_code == 400
    assert unknown.json()["success"] is False
    assert missing_id.status_code == 400
    assert empty_id.status_code == 400


def test_map_settings_endpoints(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "map_settings.db", monkeypatch)

    with TestClient(app) as client:
        initial = client.get("/api/v1/admin/map-settings", headers=_auth())
        saved = client.post(
            "/api/v1/admin/map-settings",
            json={"scheduledCenter": {"lat": 34.05, "lng": -118.25}, "showDescription": False},
            headers=_auth(),
        )
        invalid = client.post(
            "/api/v1/admin/map-settings",
            json={"buttonShape": "hexagon"},
            headers=_auth(),
        )
        unauthorized = client.get("/api/v1/admin/map-settings")

    assert initial.status_code == 200
    assert initial.json()["buttonShape"] == "rounded"
    assert saved.status_code == 200
    assert saved.json()["success"] is True
    assert saved.json()["settings"]["scheduledCenter"] == '{"lat":34.05,"lng":-118.25}'
    assert saved.json()["settings"]["showDescription"] is False
    assert invalid.status_code == 400
    assert unauthorized.status_code == 401


def test_non_object_bodies_are_rejected_as_bad_requests(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "shapes.db", monkeypatch)

    with TestClient(app) as client:
        action_list = client.post("/api/v1/admin", json=["save"], headers=_auth())
        action_string = client.post("/api/v1/admin", json="save", headers=_auth())
        settings_list = client.post("/api/v1/admin/map-settings", json=[1, 2], headers=_auth())

    for response in (action_list, action_string, settings_list):
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"]
        assert "detail" not in response.json()


def test_map_settings_validation_errors_use_action_shape(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "settings_shape.db", monkeypatch)

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/admin/map-settings",
            json={"buttonShape": "hexagon"},
            headers=_auth(),
        )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("buttonShape")


def test_storage_outage_on_admin_surface_returns_generic_errors(tmp_path: Path, monkeypatch) -> None:
    """Writes and reads fail with 500 and a message that carries no driver detail."""
    _use_database(tmp_path / "missing-dir" / "down.db", monkeypatch, create_schema=False)

    with TestClient(app) as client:
        save = client.post(
            "/api/v1/admin",
            json={"action": "save", "data": {"buttonShape": "pill"}},
            headers=_auth(),
        )
        create = client.post(
            "/api/v1/admin",
            json={"action": "createPin", "data": {"title": "Depot", "latitude": 1, "longitude": 2}},
            headers=_auth(),
        )
        direct_save = client.post(
            "/api/v1/admin/map-settings",
            json={"buttonShape": "pill"},
            headers=_auth(),
        )
        dashboard = client.get("/api/v1/admin", headers=_auth())
        pins = client.get("/api/v1/admin/pins", headers=_auth())

    assert save.status_code == 500
    assert save.json() == {"success": False, "message": "Failed to save changes"}
    assert create.status_code == 500
    assert create.json() == {"success": False, "message": "Failed to save changes"}
    assert direct_save.status_code == 500
    assert direct_save.json() == {"success": False, "message": "Failed to save settings"}
    assert dashboard.status_code == 500
    assert dashboard.json() == {"success": False, "message": "Failed to load dashboard"}
    assert pins.status_code == 500
    assert pins.json() == {"success": False, "message": "Failed to fetch pins"}


def test_pin_timestamps_are_serialized_as_utc(tmp_path: Path, monkeypatch) -> None:
    _use_database(tmp_path / "timestamps.db", monkeypatch)

    with TestClient(app) as client:
        pin = _create_pin(client)
        listed = client.get("/api/v1/admin/pins", headers=_auth()).json()

    for value in (pin["createdAt"], pin["updatedAt"], listed[0]["createdAt"]):
        parsed = datetime.fromisoformat(value)
        assert parsed.utcoffset() == timedelta(0)
