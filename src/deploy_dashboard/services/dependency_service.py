"""Reads the project's declared dependencies from pyproject.toml."""

import re
import tomllib
from pathlib import Path
from typing import Dict, List

from deploy_dashboard.exceptions import DependencyManifestException
from deploy_dashboard.logging_config import get_logger

logger = get_logger(__name__)

# name, optional extras, then whatever version specifier follows
_REQUIREMENT_PATTERN = re.compile(
    r"^\s*(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*(?P<spec>.*)$"
)


def parse_requirement(requirement: str) -> tuple[str, str]:
    """Split a PEP 508 requirement into (name, version specifier)."""
    requirement = requirement.split(";", 1)[0]
    match = _REQUIREMENT_PATTERN.match(requirement)
    if not match:
        return requirement.strip(), "*"
    spec = match.group("spec").strip()
    return match.group("name"), spec or "*"


def _to_mapping(requirements: List[str]) -> Dict[str, str]:
    return dict(parse_requirement(req) for req in requirements if req.strip())


class DependencyService:
    """
    Lists runtime and development dependencies.

    ``dependencies`` come from ``[project].dependencies``;
    ``devDependencies`` merge every ``[project.optional-dependencies]`` group.
    """

    def __init__(self, project_root: Path, manifest_name: str = "pyproject.toml"):
        self.manifest_path = Path(project_root) / manifest_name

    def get_dependencies(self) -> Dict[str, Dict[str, str]]:
        try:
            with open(self.manifest_path, "rb") as f:
                manifest = tomllib.load(f)
        except FileNotFoundError:
            raise DependencyManifestException(str(self.manifest_path), "file not found")
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise DependencyManifestException(str(self.manifest_path), str(e))

        project = manifest.get("project", {})
        dev_dependencies: Dict[str, str] = {}
        for group in project.get("optional-dependencies", {}).values():
            dev_dependencies.update(_to_mapping(group))

        result = {
            "dependencies": _to_mapping(project.get("dependencies", [])),
            "devDependencies": dev_dependencies,
        }
        logger.debug(
            "Loaded dependency manifest",
            extra={
                "manifest": str(self.manifest_path),
                "dependency_count": len(result["dependencies"]),
                "dev_dependency_count": len(dev_dependencies),
            },
        )
        return result
