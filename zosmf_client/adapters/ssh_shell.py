"""SSH command execution adapter over paramiko."""

from __future__ import annotations

import codecs
from typing import Any, Callable

import paramiko
import structlog

from .interfaces import SshShellPort
from .zosmf_errors import SshShellError


class SshShellAdapter(SshShellPort):
    """Open one SSH session per call and stream command output to a callback.

    Standard error is merged into the output stream so the callback observes
    everything the remote command prints, in arrival order.
    """

    def __init__(
        self,
        host: str,
        user: str,
        port: int = 22,
        password: str | None = None,
        private_key_path: str | None = None,
        key_passphrase: str | None = None,
        handshake_timeout_seconds: float = 30.0,
        read_chunk_size: int = 32768,
        client_factory: Callable[[], Any] = paramiko.SSHClient,
        logger: Any | None = None,
    ):
        """Initialize SSH shell adapter.

        Args:
            host: SSH host name.
            user: SSH user id.
            port: SSH port.
            password: Password for password authentication.
            private_key_path: Path to a private key file for key authentication.
            key_passphrase: Passphrase protecting the private key.
            handshake_timeout_seconds: Connect, banner and auth timeout.
            read_chunk_size: Maximum bytes read from the channel at once.
            client_factory: Factory returning a paramiko-compatible SSH client.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_host = host.strip()
        normalized_user = user.strip()
        if not normalized_host:
            raise ValueError("host must not be blank")
        if not normalized_user:
            raise ValueError("user must not be blank")
        if port < 1 or port > 65535:
            raise ValueError("port must be in 1..65535")
        if not password and not private_key_path:
            raise ValueError("either password or private_key_path must be provided")
        if handshake_timeout_seconds <= 0:
            raise ValueError("handshake_timeout_seconds must be > 0")
        if read_chunk_size < 1:
            raise ValueError("read_chunk_size must be >= 1")

        self._host = normalized_host
        self._user = normalized_user
        self._port = port
        self._password = password
        self._private_key_path = private_key_path
        self._key_passphrase = key_passphrase
        self._handshake_timeout_seconds = handshake_timeout_seconds
        self._read_chunk_size = read_chunk_size
        self._client_factory = client_factory
        self._log = logger or structlog.get_logger(__name__)

    def adapter_execute(self, command: str, on_data: Callable[[str], None]) -> int:
        """Run one command remotely, streaming decoded output chunks to `on_data`.

        Args:
            command: Shell command line.
            on_data: Callback receiving output chunks in arrival order.

        Returns:
            int: Remote exit status.

        Raises:
            SshShellError: Raised for connect, authentication or channel failures.
        """

        client = self._client_factory()
        client.load_system_host_keys()
        client.set_missing_host_key_policy(paramiko.WarningPolicy())
        try:
            self._adapter_connect(client)
            self._log.debug("SSH session opened", host=self._host, port=self._port)
            transport = client.get_transport()
            if transport is None:
                raise SshShellError(f"SSH transport to {self._host} is not available")
            channel = transport.open_session()
            channel.set_combine_stderr(True)
            channel.exec_command(command)
            self._adapter_stream_channel(channel=channel, on_data=on_data)
            exit_status = int(channel.recv_exit_status())
            self._log.debug("SSH command finished", host=self._host, exit_status=exit_status)
            return exit_status
        except SshShellError:
            raise
        except (paramiko.SSHException, OSError) as error:
            raise SshShellError(f"SSH channel failure on {self._host}: {error}") from error
        finally:
            client.close()

    def _adapter_connect(self, client: Any) -> None:
        try:
            client.connect(
                hostname=self._host,
                port=self._port,
                username=self._user,
                password=self._password,
                key_filename=self._private_key_path,
                passphrase=self._key_passphrase,
                timeout=self._handshake_timeout_seconds,
                banner_timeout=self._handshake_timeout_seconds,
                auth_timeout=self._handshake_timeout_seconds,
                look_for_keys=False,
                allow_agent=False,
            )
        except paramiko.AuthenticationException as error:
            raise SshShellError(f"SSH authentication failed for {self._user}@{self._host}") from error
        except (paramiko.SSHException, OSError) as error:
            raise SshShellError(f"SSH connection to {self._host}:{self._port} failed: {error}") from error

    def _adapter_stream_channel(self, channel: Any, on_data: Callable[[str], None]) -> None:
        """Forward channel output to the callback until the remote side closes it.

        Args:
            channel: Open paramiko channel with a running command.
            on_data: Output callback.

        Returns:
            None: Delivers output as side effect.

        Raises:
            paramiko.SSHException: Propagated from channel reads.
        """

        # multibyte characters may be split across reads
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            chunk = channel.recv(self._read_chunk_size)
            if not chunk:
                break
            text = decoder.decode(chunk)
            if text:
                on_data(text)
        tail = decoder.decode(b"", final=True)
        if tail:
            on_data(tail)
