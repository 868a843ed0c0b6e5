"""Reads the deployment status written by the release pipeline."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from deploy_dashboard.exceptions import DeploymentStatusException
from deploy_dashboard.logging_config import get_logger

logger = get_logger(__name__)


class DeploymentStatusService:
    """
    Reports the current deployment status.

    The status file is a JSON object written by the deploy job, e.g.
    ``{"status": "deployed", "timestamp": "...", "environment": "production"}``.
    Before the first deployment there is no file and the status is
    ``"unknown"``.
    """

    def __init__(self, status_file: Path, environment: str = "development"):
        self.status_file = Path(status_file)
        self.environment = environment

    def get_status(self) -> Dict[str, Any]:
        if not self.status_file.exists():
            logger.debug(f"Deployment status file not found: {self.status_file}")
            return {
                "status": "unknown",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "environment": self.environment,
            }

        try:
            data = json.loads(self.status_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DeploymentStatusException(str(self.status_file), str(e))

        if not isinstance(data, dict):
            raise DeploymentStatusException(str(self.status_file), "expected a JSON object")

        status = dict(data)
        status["status"] = str(status.get("status", "unknown"))
        status["timestamp"] = str(status.get("timestamp") or datetime.now(timezone.utc).isoformat())
        status["environment"] = str(status.get("environment") or self.environment)
        return status
