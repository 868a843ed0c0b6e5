from pathlib import Path
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from deploy_dashboard.config.alerts import CollectingAlertSink
from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.settings import Settings
from deploy_dashboard.main import create_app

SAMPLE_PYPROJECT = """
[project]
name = "sample-service"
version = "1.0.0"
dependencies = [
    "fastapi>=0.110",
    "uvicorn[standard]>=0.27",
    "jinja2",
]

[project.optional-dependencies]
test = ["pytest>=7.4", "httpx"]
lint = ["ruff==0.4.1; python_version >= '3.11'"]
"""


@pytest.fixture
def environ() -> Dict[str, str]:
    """Synthetic environment source; tests mutate it to simulate drift."""
    return {}


@pytest.fixture
def alert_sink() -> CollectingAlertSink:
    return CollectingAlertSink()


@pytest.fixture
def manager(environ, alert_sink) -> ConfigurationManager:
    return ConfigurationManager(environ=environ, alert_sink=alert_sink)


@pytest.fixture
def project_root(tmp_path) -> Path:
    (tmp_path / "pyproject.toml").write_text(SAMPLE_PYPROJECT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root) -> Settings:
    return Settings(_env_file=None, PROJECT_ROOT=project_root)


@pytest.fixture
def app(settings, manager):
    return create_app(settings=settings, manager=manager, configure_logging=False)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
