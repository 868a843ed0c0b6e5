"""
Result records produced by the configuration manager.

Attributes are snake_case in Python; serialized payloads use the camelCase
names consumed by the health endpoint and the alert log.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field


class AlertType(str, Enum):
    VALIDATION = "validation"
    DRIFT = "drift"


class AlertSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


def severity_for(alert_type: str) -> AlertSeverity:
    """Drift alerts are warnings; every other alert type is an error."""
    if alert_type == AlertType.DRIFT.value:
        return AlertSeverity.WARNING
    return AlertSeverity.ERROR


class ConfigRecord(BaseModel):
    """Base model for configuration check records."""

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True)


class ValidationIssue(ConfigRecord):
    """A setting that failed its rule."""

    variable: str = Field(..., description="Name of the offending setting")
    value: Any = Field(None, description="Value that failed validation")
    error: str = Field(..., description="Human-readable reason")


class ValidationResult(ConfigRecord):
    is_valid: bool = Field(..., alias="isValid")
    errors: List[ValidationIssue] = Field(default_factory=list)


class DriftChange(ConfigRecord):
    """A setting whose live value differs from its startup snapshot."""

    variable: str
    initial_value: Any = Field(None, alias="initialValue")
    current_value: Any = Field(None, alias="currentValue")


class DriftResult(ConfigRecord):
    drift_detected: bool = Field(..., alias="driftDetected")
    changes: List[DriftChange] = Field(default_factory=list)


class Alert(ConfigRecord):
    """Structured record emitted when a configuration check fails."""

    timestamp: datetime
    type: str
    severity: AlertSeverity
    data: Union[ValidationResult, DriftResult, Dict[str, Any]]


class HealthResult(ConfigRecord):
    """Combined outcome of validation and drift detection."""

    validation: ValidationResult
    drift: DriftResult
    healthy: bool
