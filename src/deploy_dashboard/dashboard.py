"""HTML rendering for the deployment dashboard page."""

from typing import Any, Callable, Dict

from jinja2 import Environment, PackageLoader, select_autoescape

from deploy_dashboard.config.models import HealthResult
from deploy_dashboard.exceptions import MetadataSourceException
from deploy_dashboard.logging_config import get_logger
from deploy_dashboard.services import CommitService, DependencyService, DeploymentStatusService

logger = get_logger(__name__)

_environment = Environment(
    loader=PackageLoader("deploy_dashboard", "templates"),
    autoescape=select_autoescape(["html"]),
)


def _load_section(name: str, loader: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    """Run a metadata source, turning its failure into an 'unavailable' section."""
    try:
        return {"data": loader(), "error": None}
    except MetadataSourceException as e:
        logger.warning(f"Dashboard section '{name}' unavailable: {e.message}", extra={"error_data": e.to_dict()})
        return {"data": None, "error": e.message}


def render_dashboard(
    app_name: str,
    health: HealthResult,
    dependency_service: DependencyService,
    commit_service: CommitService,
    deployment_service: DeploymentStatusService,
) -> str:
    template = _environment.get_template("dashboard.html")
    return template.render(
        app_name=app_name,
        health=health,
        dependencies=_load_section("dependencies", dependency_service.get_dependencies),
        commit=_load_section("last_commit", commit_service.get_last_commit),
        deployment=_load_section("deployment_status", deployment_service.get_status),
    )
