from .commit_service import CommitService
from .dependency_service import DependencyService
from .deployment_service import DeploymentStatusService

__all__ = [
    "CommitService",
    "DependencyService",
    "DeploymentStatusService",
]
