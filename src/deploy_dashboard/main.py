from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI

from deploy_dashboard.api.routes import router
from deploy_dashboard.config.alerts import AlertSink
from deploy_dashboard.config.manager import ConfigurationManager
from deploy_dashboard.config.settings import Settings, get_settings
from deploy_dashboard.config.validation import (
    get_configuration_summary,
    validate_configuration_at_startup,
)
from deploy_dashboard.handlers import register_exception_handlers
from deploy_dashboard.logging_config import get_logger, setup_logging
from deploy_dashboard.middleware import CorrelationIdMiddleware, RequestLoggingMiddleware

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    manager: Optional[ConfigurationManager] = None,
    alert_sink: Optional[AlertSink] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the dashboard application.

    The configuration manager is created here, once per application, and
    shared with request handlers through ``app.state``.
    """
    settings = settings or get_settings()
    manager = manager or ConfigurationManager(alert_sink=alert_sink)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.start_time = datetime.now(timezone.utc)

        if configure_logging:
            setup_logging(
                environment=str(manager.get_config().get("NODE_ENV")),
                log_level=settings.logging.level,
                log_file=settings.logging.file,
                enable_json_logs=settings.logging.json_format,
                enable_console_logs=settings.logging.console,
            )
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

        try:
            validate_configuration_at_startup(
                manager, fail_on_invalid=settings.FAIL_ON_INVALID_CONFIG
            )
        except Exception as e:
            logger.critical(f"Configuration validation failed: {e}")
            raise

        summary = get_configuration_summary(manager, settings)
        logger.info("Configuration loaded", extra={"configuration": summary})

        yield

        logger.info(
            f"Shutting down {settings.APP_NAME}",
            extra={
                "uptime": (datetime.now(timezone.utc) - app.state.start_time).total_seconds(),
                "event": "application_shutdown",
            },
        )

    app = FastAPI(
        title=settings.APP_NAME,
        description="Deployment dashboard and configuration health API",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.config_manager = manager

    # Added last runs first: correlation IDs must exist before request logging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)
    app.include_router(router)

    return app
