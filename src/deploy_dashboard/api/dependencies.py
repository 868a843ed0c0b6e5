"""Request dependencies resolving the per-app manager, settings and services."""

from fastapi import Depends, Request

from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.settings import Settings
from deploy_dashboard.services import CommitService, DependencyService, DeploymentStatusService


def get_config_manager(request: Request) -> ConfigurationManager:
    return request.app.state.config_manager


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dependency_service(settings: Settings = Depends(get_app_settings)) -> DependencyService:
    return DependencyService(settings.PROJECT_ROOT)


def get_commit_service(settings: Settings = Depends(get_app_settings)) -> CommitService:
    return CommitService(settings.PROJECT_ROOT, timeout=settings.GIT_TIMEOUT_SECONDS)


def get_deployment_service(
    settings: Settings = Depends(get_app_settings),
    manager: ConfigurationManager = Depends(get_config_manager),
) -> DeploymentStatusService:
    return DeploymentStatusService(
        settings.deployment_status_path,
        environment=str(manager.get_config().get("NODE_ENV")),
    )
