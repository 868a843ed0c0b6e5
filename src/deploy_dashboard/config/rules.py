"""
Typed rules for the environment-derived settings the service manages.

Each rule names an environment variable, the default used when the variable
is missing, and a check returning an error message for a bad value (or
``None`` when the value is acceptable).
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

PORT_MIN = 1
PORT_MAX = 65535
ALLOWED_ENVIRONMENTS: Tuple[str, ...] = ("development", "production", "test")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class SettingRule:
    """A managed setting: environment variable name, default and validity check."""
    name: str
    default: Any
    check: Callable[[Any], Optional[str]]


def parse_port(value: Any) -> Optional[int]:
    """Parse a base-10 integer port, returning ``None`` when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text, 10)


def check_port(value: Any) -> Optional[str]:
    port = parse_port(value)
    if port is None or not PORT_MIN <= port <= PORT_MAX:
        return f"PORT must be a valid number between {PORT_MIN} and {PORT_MAX}"
    return None


def check_node_env(value: Any) -> Optional[str]:
    if value not in ALLOWED_ENVIRONMENTS:
        return f"NODE_ENV must be one of: {', '.join(ALLOWED_ENVIRONMENTS)}"
    return None


def check_host(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return "HOST must be a non-empty string"
    return None


PORT_RULE = SettingRule(name="PORT", default=3000, check=check_port)
NODE_ENV_RULE = SettingRule(name="NODE_ENV", default="development", check=check_node_env)
HOST_RULE = SettingRule(name="HOST", default="localhost", check=check_host)

DEFAULT_RULES: Sequence[SettingRule] = (PORT_RULE, NODE_ENV_RULE, HOST_RULE)
