"""Regression tests for SSH shell adapter streaming and failure mapping."""

from __future__ import annotations

import paramiko

import pytest

from zosmf_client.adapters import SshShellAdapter, SshShellError


class _StubChannel:
    def __init__(self, chunks: list[bytes], exit_status: int = 0, exec_error: Exception | None = None):
        self._chunks = list(chunks)
        self._exit_status = exit_status
        self._exec_error = exec_error
        self.combine_stderr: bool | None = None
        self.command: str | None = None

    def set_combine_stderr(self, combine: bool) -> None:
        self.combine_stderr = combine

    def exec_command(self, command: str) -> None:
        if self._exec_error is not None:
            raise self._exec_error
        self.command = command

    def recv(self, size: int) -> bytes:
        _ = size
        if not self._chunks:
            return b""
        return self._chunks.pop(0)

    def recv_exit_status(self) -> int:
        return self._exit_status


class _StubTransport:
    def __init__(self, channel: _StubChannel):
        self._channel = channel

    def open_session(self) -> _StubChannel:
        return self._channel


class _StubClient:
    def __init__(self, channel: _StubChannel, connect_error: Exception | None = None):
        self._channel = channel
        self._connect_error = connect_error
        self.connect_kwargs: dict[str, object] = {}
        self.host_key_policy: object | None = None
        self.closed = False

    def load_system_host_keys(self) -> None:
        return None

    def set_missing_host_key_policy(self, policy: object) -> None:
        self.host_key_policy = policy

    def connect(self, **kwargs: object) -> None:
        self.connect_kwargs = kwargs
        if self._connect_error is not None:
            raise self._connect_error

    def get_transport(self) -> _StubTransport:
        return _StubTransport(self._channel)

    def close(self) -> None:
        self.closed = True


def _build_adapter(client: _StubClient, **overrides) -> SshShellAdapter:
    adapter_arguments = {
        "host": "zos.example.test",
        "user": "ibmuser",
        "password": "secret",
        "client_factory": lambda: client,
    }
    adapter_arguments.update(overrides)
    return SshShellAdapter(**adapter_arguments)


def test_adapters_ssh_streams_chunks_in_order_and_returns_exit_status() -> None:
    """Deliver output chunks in arrival order and return the remote exit status.

    Returns:
        None: Assertions validate streaming order and exit status.

    Raises:
        AssertionError: Raised when chunks are reordered or lost.
    """

    channel = _StubChannel([b"line one\n", b"line two\n", b"ERROR: oops\n"], exit_status=3)
    client = _StubClient(channel)
    received_chunks: list[str] = []

    exit_status = _build_adapter(client).adapter_execute("ls -l /u/ibmuser", received_chunks.append)

    assert exit_status == 3
    assert received_chunks == ["line one\n", "line two\n", "ERROR: oops\n"]
    assert "".join(received_chunks) == "line one\nline two\nERROR: oops\n"
    assert channel.command == "ls -l /u/ibmuser"
    assert channel.combine_stderr is True
    assert isinstance(client.host_key_policy, paramiko.WarningPolicy)
    assert client.connect_kwargs["hostname"] == "zos.example.test"
    assert client.connect_kwargs["port"] == 22
    assert client.connect_kwargs["username"] == "ibmuser"
    assert client.closed is True


def test_adapters_ssh_keeps_multibyte_characters_split_across_reads() -> None:
    """Decode UTF-8 sequences split between two channel reads without replacement characters."""

    channel = _StubChannel([b"caf\xc3", b"\xa9 ok\n"])
    received_chunks: list[str] = []

    _build_adapter(_StubClient(channel)).adapter_execute("echo café ok", received_chunks.append)

    assert "".join(received_chunks) == "café ok\n"
    assert "�" not in "".join(received_chunks)


def test_adapters_ssh_authentication_failure_raises_shell_error() -> None:
    """Map authentication failures to typed shell errors and close the client.

    Returns:
        None: Assertions validate error mapping and cleanup.

    Raises:
        AssertionError: Raised when the failure is not mapped.
    """

    client = _StubClient(_StubChannel([]), connect_error=paramiko.AuthenticationException("denied"))
    received_chunks: list[str] = []

    with pytest.raises(SshShellError, match="authentication failed for ibmuser@zos.example.test"):
        _build_adapter(client).adapter_execute("pwd", received_chunks.append)

    assert received_chunks == []
    assert client.closed is True


def test_adapters_ssh_socket_failure_raises_shell_error() -> None:
    """Map socket-level connect failures to typed shell errors."""

    client = _StubClient(_StubChannel([]), connect_error=OSError("connection refused"))

    with pytest.raises(SshShellError, match="connection refused"):
        _build_adapter(client, port=2222).adapter_execute("pwd", lambda chunk: None)

    assert client.connect_kwargs["port"] == 2222


def test_adapters_ssh_channel_failure_raises_shell_error() -> None:
    """Map channel failures after connect to typed shell errors and close the client."""

    channel = _StubChannel([], exec_error=paramiko.SSHException("channel closed"))
    client = _StubClient(channel)

    with pytest.raises(SshShellError, match="channel closed"):
        _build_adapter(client).adapter_execute("pwd", lambda chunk: None)

    assert client.closed is True


def test_adapters_ssh_requires_password_or_private_key() -> None:
    """Reject construction without any authentication material."""

    with pytest.raises(ValueError, match="either password or private_key_path"):
        _build_adapter(_StubClient(_StubChannel([])), password=None)
