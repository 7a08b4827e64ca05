"""
API endpoint tests for the host adapter.

These tests use FastAPI TestClient with the service bundle wired to a
fake command runner, so no docker or kind process is spawned.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from conftest import CannedResponse
from fixtures.image_scenarios import CRICTL_RMI, KIND_LOAD
from kindimages import main
from kindimages.errors import TimedOut
from kindimages.modules.api import DELETE_ACTION, LOAD_ACTION


@pytest.fixture
def client(services):
    with patch("kindimages.main.ServiceFactory.build", return_value=services):
        with TestClient(main.app) as test_client:
            yield test_client


@pytest.mark.command_mock
class TestPluginMetadata:
    def test_plugin_capabilities(self, client):
        response = client.get("/plugin")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "kind-images"
        assert sorted(data["action_names"]) == sorted([LOAD_ACTION, DELETE_ACTION])
        assert data["is_module"] is True

    def test_navigation(self, client):
        response = client.get("/navigation")

        assert response.json() == {"title": "Local Images", "path": "/images", "icon_name": "storage"}

    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"status": "ok"}

    def test_health_reports_tools(self, client):
        with patch("kindimages.main.shutil.which", return_value="/usr/bin/tool"):
            data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["loading"] is False
        assert data["tools"] == {"docker": True, "kind": True}

    def test_health_degraded_without_kind(self, client):
        with patch("kindimages.main.shutil.which", side_effect=lambda name: None if name == "kind" else "/usr/bin/docker"):
            data = client.get("/health").json()

        assert data["status"] == "degraded"


@pytest.mark.command_mock
class TestImagesPage:
    def test_render(self, client, fake_runner):
        fake_runner.register_scenario("healthy")

        response = client.get("/images")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Local Images"
        docker_table, kind_table = (s["components"][0] for s in data["sections"])
        assert docker_table["title"] == "Docker Images"
        assert len(docker_table["rows"]) == 3
        # nginx has two tags, pause one, the untagged image none
        assert [r["cells"]["Image"]["value"] for r in kind_table["rows"]] == [
            "docker.io/library/nginx:latest",
            "docker.io/library/nginx:1.25",
            "registry.k8s.io/pause:3.9",
        ]

    def test_render_while_loading(self, client, fake_runner, services):
        fake_runner.register_scenario("healthy")
        services.actions.set_loading(True)

        data = client.get("/images").json()

        assert data["sections"][0]["components"][0]["value"] == "Started loading image in to kind..."
        assert data["sections"][-1]["components"][0]["loading"] is True

    def test_render_survives_cluster_down(self, client, fake_runner):
        fake_runner.register_scenario("cluster_down")

        response = client.get("/images")

        assert response.status_code == 200
        sections = response.json()["sections"]
        assert sections[0]["components"][0]["value"].startswith("Failed to list kind images")
        assert sections[-1]["components"][0]["rows"] == []

    def test_every_render_queries_again(self, client, fake_runner):
        fake_runner.register_scenario("empty")

        client.get("/images")
        client.get("/images")

        assert fake_runner.call_count == 4


@pytest.mark.command_mock
class TestActions:
    def test_load(self, client, fake_runner, services):
        fake_runner.register_scenario("healthy")

        response = client.post(
            "/actions", json={"action_name": LOAD_ACTION, "payload": {"imageID": "nginx:latest"}}
        )

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "action": LOAD_ACTION, "image_id": "nginx:latest"}
        assert fake_runner.was_called_with("kind load docker-image nginx:latest --name kind")
        assert services.actions.is_loading() is False

    def test_delete(self, client, fake_runner):
        fake_runner.register_scenario("healthy")

        response = client.post(
            "/actions", json={"action_name": DELETE_ACTION, "payload": {"imageID": "sha256:aaa"}}
        )

        assert response.status_code == 200
        assert fake_runner.was_called_with("crictl rmi sha256:aaa")

    def test_already_loading(self, client, fake_runner, services):
        services.actions.set_loading(True)

        response = client.post(
            "/actions", json={"action_name": LOAD_ACTION, "payload": {"imageID": "nginx:latest"}}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "AlreadyLoading"
        assert fake_runner.call_count == 0

    def test_unknown_action(self, client, fake_runner):
        response = client.post(
            "/actions", json={"action_name": "unknown-action", "payload": {"imageID": "x"}}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "UnhandledAction"
        assert fake_runner.call_count == 0

    def test_empty_action_name_is_unhandled(self, client, fake_runner):
        response = client.post("/actions", json={"action_name": "", "payload": {"imageID": "x"}})

        assert response.status_code == 400
        assert response.json()["error"] == "UnhandledAction"
        assert fake_runner.call_count == 0

    @pytest.mark.parametrize("payload", [{}, {"imageID": 3}, {"imageID": ""}, "sha256:aaa", ["sha256:aaa"], None])
    def test_payload_error(self, client, fake_runner, payload):
        response = client.post("/actions", json={"action_name": DELETE_ACTION, "payload": payload})

        assert response.status_code == 422
        assert response.json()["error"] == "PayloadError"
        assert fake_runner.call_count == 0

    def test_malformed_body_uses_error_shape(self, client, fake_runner):
        response = client.post("/actions", json={"payload": {"imageID": "x"}})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "RequestValidationError"
        assert "action_name" in body["detail"]
        assert fake_runner.call_count == 0

    def test_load_failure(self, client, fake_runner, services):
        fake_runner.register_scenario("cluster_down")

        response = client.post(
            "/actions", json={"action_name": LOAD_ACTION, "payload": {"imageID": "nginx:latest"}}
        )

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "LoadFailed"
        assert "no nodes found" in body["detail"]
        assert services.actions.is_loading() is False

    def test_delete_timeout(self, client, fake_runner):
        fake_runner.register(CRICTL_RMI, CannedResponse(raises=TimedOut(["crictl", "rmi"], 5)))

        response = client.post(
            "/actions", json={"action_name": DELETE_ACTION, "payload": {"imageID": "sha256:aaa"}}
        )

        assert response.status_code == 504
        assert response.json()["error"] == "DeleteFailed"

    def test_load_after_failed_load(self, client, fake_runner):
        fake_runner.register(KIND_LOAD, CannedResponse(stderr="boom", returncode=1))
        client.post("/actions", json={"action_name": LOAD_ACTION, "payload": {"imageID": "a:1"}})

        fake_runner.register(KIND_LOAD, CannedResponse())
        response = client.post(
            "/actions", json={"action_name": LOAD_ACTION, "payload": {"imageID": "a:1"}}
        )

        assert response.status_code == 200


def test_not_initialized_returns_503():
    with patch.object(main, "services", None):
        client = TestClient(main.app)
        response = client.get("/images")

    assert response.status_code == 503
