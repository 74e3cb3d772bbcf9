"""Typed interfaces for adapter-layer responsibilities."""

from typing import Any, Callable, Mapping, Protocol


class ZosmfRestPort(Protocol):
    """Port definition for z/OSMF REST calls used by job and workflow services."""

    def adapter_get_json(self, resource: str, headers: Mapping[str, str] | None = None) -> Any:
        """Issue GET and decode the JSON response body.

        Args:
            resource: Resource path relative to the z/OSMF base URL.
            headers: Optional extra request headers.

        Returns:
            Any: Decoded JSON document.

        Raises:
            ZosmfAdapterError: Raised for transport, HTTP or decoding failures.
        """

    def adapter_get_text(self, resource: str, headers: Mapping[str, str] | None = None) -> str:
        """Issue GET and return the response body as text.

        Args:
            resource: Resource path relative to the z/OSMF base URL.
            headers: Optional extra request headers.

        Returns:
            str: Response text.

        Raises:
            ZosmfAdapterError: Raised for transport or HTTP failures.
        """

    def adapter_put_json(
        self,
        resource: str,
        payload: Mapping[str, Any] | str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Issue PUT with a JSON object or raw text body and decode the JSON response.

        Args:
            resource: Resource path relative to the z/OSMF base URL.
            payload: JSON object body, or raw text body when a string is given.
            headers: Optional extra request headers.

        Returns:
            Any: Decoded JSON document, None for an empty response body.

        Raises:
            ZosmfAdapterError: Raised for transport, HTTP or decoding failures.
        """


class SshShellPort(Protocol):
    """Port definition for remote command execution with streamed output."""

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
