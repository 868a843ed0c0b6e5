"""
Helpers for request-scoped logging context.

The correlation ID is stored in a context variable so log records written
while a request is being served can be tied back to that request.
"""

from contextvars import ContextVar, Token
from typing import Optional

# Context variable for request tracking
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')


def set_correlation_id(correlation_id: str) -> Token:
    """Set correlation ID in context."""
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    """Get correlation ID from context."""
    return correlation_id_var.get() or None
