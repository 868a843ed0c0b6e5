"""
Startup configuration checks for the Deploy Dashboard service.

Runs the configuration manager's health check once when the service starts,
logs what it finds and, when asked to, refuses to start on invalid
configuration.
"""

from typing import Any, Dict

from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.models import HealthResult
from deploy_dashboard.config.settings import Settings
from deploy_dashboard.exceptions import ConfigurationException
from deploy_dashboard.logging_config import get_logger

logger = get_logger(__name__)


def validate_configuration_at_startup(
    manager: ConfigurationManager,
    fail_on_invalid: bool = False,
) -> HealthResult:
    """
    Validate configuration at application startup.

    Invalid configuration and drift are logged. Invalid configuration is
    only fatal when ``fail_on_invalid`` is set.

    Raises:
        ConfigurationException: If ``fail_on_invalid`` and validation failed
    """
    check = manager.run_config_check()

    if not check.validation.is_valid:
        for issue in check.validation.errors:
            logger.error(
                f"Configuration validation failed for {issue.variable}: {issue.error}",
                extra={"variable": issue.variable, "value": str(issue.value)},
            )

    if check.drift.drift_detected:
        for change in check.drift.changes:
            logger.warning(
                f"Configuration drift detected for {change.variable}",
                extra={
                    "variable": change.variable,
                    "initial_value": str(change.initial_value),
                    "current_value": str(change.current_value),
                },
            )

    if not check.validation.is_valid and fail_on_invalid:
        raise ConfigurationException(
            message="Critical configuration errors detected",
            details={
                "errors": [issue.to_dict() for issue in check.validation.errors],
                "environment": str(manager.get_config().get("NODE_ENV")),
            },
        )

    logger.info(
        f"Configuration validation: {'PASSED' if check.validation.is_valid else 'FAILED'}",
        extra={"healthy": check.healthy},
    )
    return check


def get_configuration_summary(
    manager: ConfigurationManager,
    settings: Settings,
) -> Dict[str, Any]:
    """
    Get a summary of current configuration for debugging.

    Returns:
        Dictionary with the managed settings and the ambient settings that
        affect the dashboard's metadata sources.
    """
    return {
        "managed": manager.get_config(),
        "app": {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "fail_on_invalid_config": settings.FAIL_ON_INVALID_CONFIG,
        },
        "sources": {
            "project_root": str(settings.PROJECT_ROOT),
            "deployment_status_file": str(settings.deployment_status_path),
        },
        "logging": {
            "level": settings.logging.level,
            "file": settings.logging.file,
            "console": settings.logging.console,
        },
    }
