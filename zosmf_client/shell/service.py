"""Remote shell command execution with streamed output."""

from __future__ import annotations

import shlex
from typing import Any, Callable

import structlog

from zosmf_client.adapters import SshShellPort
from zosmf_client.domain import MissingParameterError


class ShellService:
    """Run commands on the remote host, optionally within a working directory."""

    def __init__(self, ssh_adapter: SshShellPort, logger: Any | None = None):
        if ssh_adapter is None:
            raise ValueError("ssh_adapter must not be None")
        self._ssh = ssh_adapter
        self._log = logger or structlog.get_logger(__name__)

    def shell_execute(self, command: str | None, on_data: Callable[[str], None]) -> int:
        """Execute one command and stream its output to `on_data`.

        Args:
            command: Shell command line.
            on_data: Callback receiving output chunks in arrival order.

        Returns:
            int: Remote exit status.

        Raises:
            MissingParameterError: Raised when the command is blank.
            SshShellError: Propagated from the SSH adapter.
        """

        normalized_command = (command or "").strip()
        if not normalized_command:
            raise MissingParameterError("A command must be provided.")
        self._log.debug("Executing remote command", command_length=len(normalized_command))
        return self._ssh.adapter_execute(normalized_command, on_data)

    def shell_execute_in_directory(
        self,
        command: str | None,
        cwd: str | None,
        on_data: Callable[[str], None],
    ) -> int:
        """Execute one command after changing to a remote working directory.

        Args:
            command: Shell command line.
            cwd: Remote working directory.
            on_data: Callback receiving output chunks in arrival order.

        Returns:
            int: Remote exit status.

        Raises:
            MissingParameterError: Raised when the command or directory is blank.
            SshShellError: Propagated from the SSH adapter.
        """

        normalized_cwd = (cwd or "").strip()
        if not normalized_cwd:
            raise MissingParameterError("A working directory must be provided.")
        normalized_command = (command or "").strip()
        if not normalized_command:
            raise MissingParameterError("A command must be provided.")
        return self.shell_execute(f"cd {shlex.quote(normalized_cwd)} && {normalized_command}", on_data)
