"""CLI command handlers."""

from .migrate import handle_migrate, handle_revert, handle_rollback, handle_status

__all__ = [
    "handle_migrate",
    "handle_revert",
    "handle_rollback",
    "handle_status",
]
