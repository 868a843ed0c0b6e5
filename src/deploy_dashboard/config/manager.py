"""
Configuration manager: startup snapshot, validation and drift detection.

The manager reads its managed settings from the environment once, keeps that
as both the working configuration and an immutable snapshot, and on demand
validates the working values and compares live environment values against
the snapshot. Problems are returned as data and reported to an alert sink;
nothing here raises on bad configuration.
"""

import os
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from deploy_dashboard.config.alerts import AlertSink, LoggingAlertSink
from deploy_dashboard.config.models import (
    Alert,
    AlertType,
    DriftChange,
    DriftResult,
    HealthResult,
    ValidationIssue,
    ValidationResult,
    severity_for,
)
from deploy_dashboard.config.rules import DEFAULT_RULES, SettingRule
from deploy_dashboard.logging_config import get_logger

logger = get_logger(__name__)


class ConfigurationManager:
    """
    Snapshots managed settings at construction and checks them on demand.

    Args:
        environ: Environment source to read settings from. Defaults to
            ``os.environ``, which is live, so later changes show up as drift.
        alert_sink: Receives alerts raised by ``run_config_check``.
        rules: Settings to manage, in reporting order.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        alert_sink: Optional[AlertSink] = None,
        rules: Sequence[SettingRule] = DEFAULT_RULES,
    ):
        self.environ = os.environ if environ is None else environ
        self.alert_sink = LoggingAlertSink() if alert_sink is None else alert_sink
        self.rules = tuple(rules)

        # Empty values count as unset.
        self.config: Dict[str, Any] = {
            rule.name: self.environ.get(rule.name) or rule.default
            for rule in self.rules
        }
        self.initial_config: Mapping[str, Any] = MappingProxyType(dict(self.config))
        self.drift_detected = False

        logger.debug(
            "Configuration snapshot taken",
            extra={"settings": list(self.initial_config)},
        )

    def validate(self) -> ValidationResult:
        """Check every managed setting against its rule, reporting all failures."""
        errors = []
        for rule in self.rules:
            value = self.config.get(rule.name)
            message = rule.check(value)
            if message is not None:
                errors.append(
                    ValidationIssue(variable=rule.name, value=value, error=message)
                )

        return ValidationResult(is_valid=not errors, errors=errors)

    def detect_drift(self) -> DriftResult:
        """
        Compare live environment values with the startup snapshot.

        A setting missing from the environment falls back to the working
        value, so unsetting a variable is not reported as drift. Values are
        compared as strings, so ``3000`` and ``"3000"`` are equal.
        """
        changes = []
        for name, initial_value in self.initial_config.items():
            current_value = self.environ.get(name) or self.config.get(name)
            if str(current_value) != str(initial_value):
                changes.append(
                    DriftChange(
                        variable=name,
                        initial_value=initial_value,
                        current_value=current_value,
                    )
                )

        self.drift_detected = bool(changes)
        return DriftResult(drift_detected=self.drift_detected, changes=changes)

    def trigger_alert(
        self,
        alert_type: Union[AlertType, str],
        data: Union[ValidationResult, DriftResult, Mapping[str, Any]],
    ) -> Alert:
        """Build an alert, hand it to the sink and return it."""
        if isinstance(alert_type, AlertType):
            alert_type = alert_type.value

        alert = Alert(
            timestamp=datetime.now(timezone.utc),
            type=alert_type,
            severity=severity_for(alert_type),
            data=data,
        )

        try:
            self.alert_sink.emit(alert)
        except Exception as e:
            # Delivery problems are not configuration problems.
            logger.warning(
                f"Alert sink failed to emit {alert_type} alert: {e}",
                extra={"alert_type": alert_type, "sink": type(self.alert_sink).__name__},
            )

        return alert

    def get_config(self) -> Dict[str, Any]:
        """Return a copy of the working configuration."""
        return dict(self.config)

    def run_config_check(self) -> HealthResult:
        """Run validation and drift detection, alerting on each failure."""
        validation = self.validate()
        drift = self.detect_drift()

        if not validation.is_valid:
            self.trigger_alert(AlertType.VALIDATION, validation)

        if drift.drift_detected:
            self.trigger_alert(AlertType.DRIFT, drift)

        return HealthResult(
            validation=validation,
            drift=drift,
            healthy=validation.is_valid and not drift.drift_detected,
        )
