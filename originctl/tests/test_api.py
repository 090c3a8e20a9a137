import os

import pytest
from fastapi.testclient import TestClient

from originctl.api.main import app
from originctl.config import Config
from originctl.modules import provision as provision_module
from originctl.modules.markers import MarkerStore
from originctl.modules.models import Stage

HEADERS = {"X-API-Key": os.getenv("ORIGINCTL_API_KEY", "originctl-secret")}


@pytest.fixture
def markers(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "CONFIG_FILE", "")
    monkeypatch.setattr(Config, "MARKER_DIR", str(tmp_path / "markers"))
    monkeypatch.setattr(Config, "EXPORTS_FILE", str(tmp_path / "exports"))
    monkeypatch.setattr(Config, "MASTER_CONFIG_DIR", str(tmp_path / "master"))
    return MarkerStore(tmp_path / "markers")


@pytest.fixture
def client():
    return TestClient(app)


def test_requires_api_key(client, markers):
    assert client.get("/status").status_code == 403
    assert client.get("/status", headers={"X-API-Key": "wrong"}).status_code == 403


def test_status(client, markers):
    markers.mark_complete(Stage.BINARIES)

    response = client.get("/status", headers=HEADERS)

    assert response.status_code == 200
    stages = response.json()["stages"]
    assert [s["stage"] for s in stages] == [s.value for s in Stage.ordered()]
    assert stages[0]["complete"] is True
    assert stages[1] == {"stage": "registry", "complete": False, "completed_at": None}


def test_reset(client, markers):
    markers.mark_complete(Stage.ROUTER)
    markers.mark_complete(Stage.USERS)

    response = client.post("/reset", json={"stages": ["router"]}, headers=HEADERS)

    assert response.json() == {"status": "success", "cleared": ["router"]}
    assert markers.is_complete(Stage.USERS)
    assert not markers.is_complete(Stage.ROUTER)


def test_provision_dry_run(client, markers, monkeypatch):
    monkeypatch.setattr(provision_module, "wait_for_api", lambda config, runner: 0)

    response = client.post("/provision", json={"stages": ["router", "registry"], "dry_run": True}, headers=HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["phase"] == "completed"
    assert [r["stage"] for r in body["results"]] == ["registry", "router"]
    assert markers.completed() == {}


def test_provision_rejects_unknown_stage(client, markers):
    response = client.post("/provision", json={"stages": ["database"]}, headers=HEADERS)
    assert response.status_code == 422


def test_reset_requires_stages_or_all(client, markers):
    markers.mark_complete(Stage.ROUTER)

    response = client.post("/reset", json={}, headers=HEADERS)

    assert response.status_code == 400
    assert markers.is_complete(Stage.ROUTER)


def test_reset_all(client, markers):
    markers.mark_complete(Stage.ROUTER)
    markers.mark_complete(Stage.USERS)

    response = client.post("/reset", json={"all": True}, headers=HEADERS)

    assert response.json() == {"status": "success", "cleared": ["router", "users"]}
    assert markers.completed() == {}


@pytest.mark.parametrize("method,path", [
    ("get", "/status"),
    ("post", "/reset"),
    ("get", "/verify"),
    ("post", "/provision"),
])
def test_invalid_config_is_a_bad_request(client, markers, monkeypatch, tmp_path, method, path):
    monkeypatch.setattr(Config, "CONFIG_FILE", str(tmp_path / "missing.yaml"))

    if method == "get":
        response = client.get(path, headers=HEADERS)
    else:
        response = client.post(path, json={"all": True}, headers=HEADERS)

    assert response.status_code == 400
    assert "Config file not found" in response.json()["detail"]
