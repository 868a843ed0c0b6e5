"""Tests for the FastAPI application."""

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from deploy_dashboard.config.alerts import CollectingAlertSink
from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.settings import Settings
from deploy_dashboard.exceptions import ConfigurationException
from deploy_dashboard.main import create_app

GIT_OUTPUT = "abc123def456\x1fInitial commit\x1fJane Doe\x1f2026-10-01T12:00:00+00:00\n"


class TestDashboard:
    """Test the HTML dashboard page."""

    def test_dashboard_sections(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Deployment Dashboard" in response.text
        assert "Dependencies" in response.text
        assert "Last Commit" in response.text
        assert "Deployment Status" in response.text

    @patch("deploy_dashboard.services.commit_service.subprocess.run")
    def test_dashboard_shows_metadata(self, mock_run, client):
        mock_run.return_value = MagicMock(stdout=GIT_OUTPUT, stderr="", returncode=0)

        response = client.get("/")

        assert "fastapi" in response.text
        assert "Initial commit" in response.text
        assert "unknown" in response.text

    @patch("deploy_dashboard.services.commit_service.subprocess.run")
    def test_dashboard_survives_failing_source(self, mock_run, client):
        mock_run.side_effect = FileNotFoundError("git")

        response = client.get("/")

        assert response.status_code == 200
        assert "Unavailable" in response.text

    def test_dashboard_does_not_raise_alerts(self, client, environ, alert_sink):
        environ["PORT"] = "8080"

        response = client.get("/")

        assert response.status_code == 200
        assert '<span class="unhealthy">unhealthy</span>' in response.text
        assert alert_sink.alerts == []


class TestHealthEndpoint:
    """Test the configuration health endpoint."""

    def test_healthy(self, client, alert_sink):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["config"] == {"PORT": 3000, "NODE_ENV": "development", "HOST": "localhost"}
        assert body["validation"] == {"isValid": True, "errors": []}
        assert body["drift"] == {"driftDetected": False, "changes": []}
        assert alert_sink.alerts == []

    def test_drift_returns_503(self, client, environ, alert_sink):
        environ["PORT"] = "8080"

        response = client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["validation"]["isValid"] is True
        assert body["drift"]["changes"] == [
            {"variable": "PORT", "initialValue": 3000, "currentValue": "8080"}
        ]
        assert [a.type for a in alert_sink.alerts] == ["drift"]

    def test_invalid_configuration_returns_503(self, settings):
        sink = CollectingAlertSink()
        manager = ConfigurationManager(environ={"NODE_ENV": "staging"}, alert_sink=sink)
        app = create_app(settings=settings, manager=manager, configure_logging=False)

        with TestClient(app) as client:
            # Startup check already alerted once.
            assert [a.type for a in sink.alerts] == ["validation"]
            response = client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["validation"]["isValid"] is False
        assert body["validation"]["errors"][0]["variable"] == "NODE_ENV"
        assert body["config"]["NODE_ENV"] == "staging"
        assert [a.type for a in sink.alerts] == ["validation", "validation"]


class TestMetadataEndpoints:
    """Test the JSON metadata API."""

    def test_dependencies(self, client):
        response = client.get("/api/dependencies")

        assert response.status_code == 200
        body = response.json()
        assert isinstance(body["dependencies"], dict)
        assert isinstance(body["devDependencies"], dict)
        assert "fastapi" in body["dependencies"]
        assert "pytest" in body["devDependencies"]

    def test_dependencies_without_manifest(self, client, project_root):
        (project_root / "pyproject.toml").unlink()

        response = client.get("/api/dependencies")

        assert response.status_code == 503
        body = response.json()
        assert body["error_code"] == "DD2001"
        assert body["path"] == "/api/dependencies"

    @patch("deploy_dashboard.services.commit_service.subprocess.run")
    def test_last_commit(self, mock_run, client):
        mock_run.return_value = MagicMock(stdout=GIT_OUTPUT, stderr="", returncode=0)

        response = client.get("/api/last-commit")

        assert response.status_code == 200
        body = response.json()
        assert body["hash"] == "abc123def456"
        assert body["message"] == "Initial commit"
        assert isinstance(body["timestamp"], str)

    @patch("deploy_dashboard.services.commit_service.subprocess.run")
    def test_last_commit_unavailable(self, mock_run, client):
        mock_run.side_effect = subprocess.CalledProcessError(128, "git", stderr="fatal: not a git repository")

        response = client.get("/api/last-commit", headers={"x-correlation-id": "corr-123"})

        assert response.status_code == 503
        body = response.json()
        assert body["error_code"] == "DD2002"
        assert body["correlation_id"] == "corr-123"

    def test_deployment_status_default(self, client):
        response = client.get("/api/deployment-status")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unknown"
        assert body["environment"] == "development"
        assert isinstance(body["timestamp"], str)

    def test_deployment_status_from_file(self, client, project_root):
        (project_root / "deployment-status.json").write_text(json.dumps({
            "status": "deployed",
            "timestamp": "2026-10-01T12:00:00Z",
            "environment": "production",
            "version": "2.0.1",
        }))

        response = client.get("/api/deployment-status")

        assert response.status_code == 200
        assert response.json() == {
            "status": "deployed",
            "timestamp": "2026-10-01T12:00:00Z",
            "environment": "production",
            "version": "2.0.1",
        }


class TestApplication:
    def test_unknown_route_returns_404(self, client):
        response = client.get("/nonexistent")

        assert response.status_code == 404
        assert response.json()["error_code"] == "HTTP404"

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={"x-correlation-id": "abc-123"})

        assert response.headers["x-correlation-id"] == "abc-123"

    def test_correlation_id_is_generated(self, client):
        response = client.get("/health")

        assert response.headers["x-correlation-id"]

    def test_manager_is_per_application(self, settings):
        first = create_app(settings=settings, manager=ConfigurationManager(environ={"PORT": "1111"}))
        second = create_app(settings=settings, manager=ConfigurationManager(environ={"PORT": "2222"}))

        assert first.state.config_manager.get_config()["PORT"] == "1111"
        assert second.state.config_manager.get_config()["PORT"] == "2222"

    def test_refuses_to_start_on_invalid_configuration(self, project_root):
        settings = Settings(_env_file=None, PROJECT_ROOT=project_root, FAIL_ON_INVALID_CONFIG=True)
        manager = ConfigurationManager(environ={"PORT": "invalid"}, alert_sink=CollectingAlertSink())
        app = create_app(settings=settings, manager=manager, configure_logging=False)

        with pytest.raises(ConfigurationException):
            with TestClient(app):
                pass

    def test_starts_on_invalid_configuration_by_default(self, settings):
        manager = ConfigurationManager(environ={"PORT": "invalid"}, alert_sink=CollectingAlertSink())
        app = create_app(settings=settings, manager=manager, configure_logging=False)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 503
