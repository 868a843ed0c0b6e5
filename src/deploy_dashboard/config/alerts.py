"""Alert sinks: where configuration alerts are delivered."""

import json
import logging
from typing import List, Optional, Protocol

from deploy_dashboard.config.models import Alert, AlertSeverity
from deploy_dashboard.logging_config import get_logger

ALERT_LOGGER_NAME = "deploy_dashboard.alerts"


class AlertSink(Protocol):
    """Anything that accepts Alert records."""

    def emit(self, alert: Alert) -> None:
        ...


class LoggingAlertSink:
    """
    Default sink: writes each alert as a single structured log line.

    Drift alerts are logged at WARNING, validation alerts at ERROR. The alert
    fields are attached as ``extra`` so the JSON formatter emits them as
    structured data as well.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(ALERT_LOGGER_NAME)

    def emit(self, alert: Alert) -> None:
        payload = alert.to_dict()
        level = logging.WARNING if alert.severity == AlertSeverity.WARNING else logging.ERROR
        self.logger.log(
            level,
            "[CONFIG ALERT] %s",
            json.dumps(payload),
            extra={"alert": payload},
        )


class CollectingAlertSink:
    """Keeps emitted alerts in memory, in emission order."""

    def __init__(self):
        self.alerts: List[Alert] = []

    def emit(self, alert: Alert) -> None:
        self.alerts.append(alert)
