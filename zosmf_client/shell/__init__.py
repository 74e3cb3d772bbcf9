"""Remote shell package for SSH command execution."""

from .service import ShellService

__all__ = ["ShellService"]
