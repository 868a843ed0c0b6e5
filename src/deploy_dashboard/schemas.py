"""
Response schemas for the dashboard API.

Error responses share one structured shape; the health payload reuses the
configuration manager's result records.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from deploy_dashboard.config.models import DriftResult, ValidationResult


class ErrorResponse(BaseModel):
    """Standard error response model for all API errors."""

    error_code: str = Field(..., description="Unique error code for identification")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error context and metadata"
    )
    correlation_id: str = Field(..., description="Correlation ID for request tracking")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
    path: Optional[str] = Field(None, description="API path where error occurred")
    method: Optional[str] = Field(None, description="HTTP method used")


class HealthResponse(BaseModel):
    """Configuration health payload served by /health."""

    status: str = Field(..., description="healthy or unhealthy")
    config: Dict[str, Any] = Field(..., description="Resolved managed configuration")
    validation: ValidationResult
    drift: DriftResult


class DependenciesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    dependencies: Dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Dict[str, str] = Field(default_factory=dict, alias="devDependencies")


class CommitResponse(BaseModel):
    hash: str
    message: str
    author: Optional[str] = None
    timestamp: str


class DeploymentStatusResponse(BaseModel):
    """Deployment status; any additional fields in the status file pass through."""

    model_config = ConfigDict(extra="allow")

    status: str
    timestamp: str
    environment: str
