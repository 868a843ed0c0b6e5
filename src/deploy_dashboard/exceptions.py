"""
Custom exception hierarchy for the Deploy Dashboard service.

This module defines the exceptions raised by the metadata sources and the
startup configuration check. Configuration problems found by the
ConfigurationManager are reported as data, never raised.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Enumeration of error codes for consistent error identification."""

    # General errors (1000-1999)
    INTERNAL_SERVER_ERROR = "DD1000"
    CONFIGURATION_ERROR = "DD1002"

    # Metadata source errors (2000-2999)
    METADATA_SOURCE_ERROR = "DD2000"
    DEPENDENCY_MANIFEST_ERROR = "DD2001"
    COMMIT_LOOKUP_FAILED = "DD2002"
    DEPLOYMENT_STATUS_ERROR = "DD2003"


class DashboardException(Exception):
    """
    Base exception class for all Deploy Dashboard exceptions.

    Carries an error code, a correlation ID and contextual details so the
    HTTP layer can turn it into a structured error response.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp,
            "exception_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"


class ConfigurationException(DashboardException):
    """Exception raised when the service refuses to start on bad configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CONFIGURATION_ERROR,
            **kwargs
        )


# Metadata source exceptions
class MetadataSourceException(DashboardException):
    """Base class for failures reading dashboard metadata."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.METADATA_SOURCE_ERROR,
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if source:
            details["source"] = source

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            **kwargs
        )


class DependencyManifestException(MetadataSourceException):
    """Exception raised when the dependency manifest cannot be read."""

    def __init__(self, path: str, reason: str, **kwargs):
        super().__init__(
            message=f"Unable to read dependency manifest: {reason}",
            source=path,
            error_code=ErrorCode.DEPENDENCY_MANIFEST_ERROR,
            **kwargs
        )


class CommitLookupException(MetadataSourceException):
    """Exception raised when the last commit cannot be determined."""

    def __init__(self, reason: str, repository: Optional[str] = None, **kwargs):
        super().__init__(
            message=f"Unable to fetch commit information: {reason}",
            source=repository,
            error_code=ErrorCode.COMMIT_LOOKUP_FAILED,
            **kwargs
        )


class DeploymentStatusException(MetadataSourceException):
    """Exception raised when the deployment status file is unreadable."""

    def __init__(self, path: str, reason: str, **kwargs):
        super().__init__(
            message=f"Unable to read deployment status: {reason}",
            source=path,
            error_code=ErrorCode.DEPLOYMENT_STATUS_ERROR,
            **kwargs
        )
