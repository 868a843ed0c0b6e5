from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from deploy_dashboard.api.dependencies import (
    get_app_settings,
    get_commit_service,
    get_config_manager,
    get_dependency_service,
    get_deployment_service,
)
from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.models import HealthResult
from deploy_dashboard.config.settings import Settings
from deploy_dashboard.dashboard import render_dashboard
from deploy_dashboard.schemas import (
    CommitResponse,
    DependenciesResponse,
    DeploymentStatusResponse,
    HealthResponse,
)
from deploy_dashboard.services import CommitService, DependencyService, DeploymentStatusService

router = APIRouter()


@router.get("/", response_class=HTMLResponse, tags=["Dashboard"])
def dashboard(
    settings: Settings = Depends(get_app_settings),
    manager: ConfigurationManager = Depends(get_config_manager),
    dependency_service: DependencyService = Depends(get_dependency_service),
    commit_service: CommitService = Depends(get_commit_service),
    deployment_service: DeploymentStatusService = Depends(get_deployment_service),
) -> HTMLResponse:
    """Deployment dashboard page."""
    # Rendering the page only displays health; /health is what raises alerts.
    validation = manager.validate()
    drift = manager.detect_drift()
    health = HealthResult(
        validation=validation,
        drift=drift,
        healthy=validation.is_valid and not drift.drift_detected,
    )
    html = render_dashboard(
        settings.APP_NAME,
        health,
        dependency_service,
        commit_service,
        deployment_service,
    )
    return HTMLResponse(content=html)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(manager: ConfigurationManager = Depends(get_config_manager)) -> JSONResponse:
    """
    Configuration health check.

    Runs validation and drift detection. Returns 200 when the configuration
    is valid and unchanged since startup, 503 otherwise.
    """
    check = manager.run_config_check()
    payload = HealthResponse(
        status="healthy" if check.healthy else "unhealthy",
        config=manager.get_config(),
        validation=check.validation,
        drift=check.drift,
    )
    return JSONResponse(
        status_code=200 if check.healthy else 503,
        content=payload.model_dump(mode="json", by_alias=True),
    )


@router.get("/api/dependencies", response_model=DependenciesResponse, tags=["Metadata"])
def dependencies(service: DependencyService = Depends(get_dependency_service)):
    return service.get_dependencies()


@router.get("/api/last-commit", response_model=CommitResponse, tags=["Metadata"])
def last_commit(service: CommitService = Depends(get_commit_service)):
    return service.get_last_commit()


@router.get("/api/deployment-status", response_model=DeploymentStatusResponse, tags=["Metadata"])
def deployment_status(service: DeploymentStatusService = Depends(get_deployment_service)):
    return service.get_status()
