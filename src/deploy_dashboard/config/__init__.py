"""
Configuration management for the Deploy Dashboard service.

This package provides:
- The ConfigurationManager (startup snapshot, validation, drift detection)
- Alert sinks for configuration alerts
- Ambient service settings
- Startup configuration checks
"""

from .alerts import AlertSink, CollectingAlertSink, LoggingAlertSink
from .manager import ConfigurationManager
from .models import (
    Alert,
    AlertSeverity,
    AlertType,
    DriftChange,
    DriftResult,
    HealthResult,
    ValidationIssue,
    ValidationResult,
)
from .rules import DEFAULT_RULES, SettingRule
from .settings import LoggingSettings, Settings, get_settings

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertSink",
    "AlertType",
    "CollectingAlertSink",
    "ConfigurationManager",
    "DEFAULT_RULES",
    "DriftChange",
    "DriftResult",
    "HealthResult",
    "LoggingAlertSink",
    "LoggingSettings",
    "SettingRule",
    "Settings",
    "ValidationIssue",
    "ValidationResult",
    "get_settings",
]
