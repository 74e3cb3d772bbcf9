"""z/OSMF REST adapter implementation over a pooled httpx client."""

from __future__ import annotations

from typing import Any, Final, Mapping

import httpx
import structlog

from .interfaces import ZosmfRestPort
from .zosmf_constants import HEADER_APPLICATION_JSON, HEADER_CSRF
from .zosmf_errors import (
    ZosmfConnectionError,
    ZosmfHttpError,
    ZosmfResponseError,
    ZosmfTransportTimeoutError,
)


class ZosmfRestAdapter(ZosmfRestPort):
    """Session holder and transport for z/OSMF REST calls.

    The adapter is read-only after construction. One pooled `httpx.Client` is
    shared by every call, so a single adapter can serve independent operations
    from several threads.
    """

    _USER_AGENT: Final[str] = "zosmf-batch-client/1.0 (Python/httpx)"

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        port: int = 443,
        protocol: str = "https",
        base_path: str = "",
        reject_unauthorized: bool = True,
        request_timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        logger: Any | None = None,
    ):
        """Initialize z/OSMF REST adapter.

        Args:
            host: z/OSMF host name.
            user: z/OSMF user id.
            password: z/OSMF password.
            port: z/OSMF port.
            protocol: URL scheme, `https` or `http`.
            base_path: Optional path prefix inserted before every resource.
            reject_unauthorized: Whether TLS certificates are verified.
            request_timeout_seconds: Per-request HTTP timeout in seconds.
            transport: Optional httpx transport, used to substitute the network in tests.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_host = host.strip()
        normalized_user = user.strip()
        normalized_protocol = protocol.strip().lower()
        normalized_base_path = base_path.strip().rstrip("/")

        if not normalized_host:
            raise ValueError("host must not be blank")
        if not normalized_user:
            raise ValueError("user must not be blank")
        if not password:
            raise ValueError("password must not be blank")
        if port < 1 or port > 65535:
            raise ValueError("port must be in 1..65535")
        if normalized_protocol not in ("http", "https"):
            raise ValueError("protocol must be `http` or `https`")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = f"{normalized_protocol}://{normalized_host}:{port}{normalized_base_path}"
        self._log = logger or structlog.get_logger(__name__)
        self._client = httpx.Client(
            base_url=self._base_url,
            auth=(normalized_user, password),
            verify=reject_unauthorized,
            timeout=request_timeout_seconds,
            headers={**HEADER_CSRF, "User-Agent": self._USER_AGENT},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def adapter_get_json(self, resource: str, headers: Mapping[str, str] | None = None) -> Any:
        """Issue GET and decode the JSON response body.

        Args:
            resource: Resource path relative to the z/OSMF base URL.
            headers: Optional extra request headers.

        Returns:
            Any: Decoded JSON document.

        Raises:
            ZosmfConnectionError: Raised for network failures.
            ZosmfTransportTimeoutError: Raised when the request timed out.
            ZosmfHttpError: Raised for non-success HTTP status.
            ZosmfResponseError: Raised when the body is not JSON.
        """

        response = self._adapter_request("GET", resource, headers=headers)
        return self._adapter_decode_json(response=response, resource=resource)

    def adapter_get_text(self, resource: str, headers: Mapping[str, str] | None = None) -> str:
        """Issue GET and return the response body as text.

        Args:
            resource: Resource path relative to the z/OSMF base URL.
            headers: Optional extra request headers.

        Returns:
            str: Response text.

        Raises:
            ZosmfConnectionError: Raised for network failures.
            ZosmfTransportTimeoutError: Raised when the request timed out.
            ZosmfHttpError: Raised for non-success HTTP status.
        """

        response = self._adapter_request("GET", resource, headers=headers)
        return response.text

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
            headers: Optional extra request headers; the content type defaults to JSON.

        Returns:
            Any: Decoded JSON document, None for an empty response body.

        Raises:
            ZosmfConnectionError: Raised for network failures.
            ZosmfTransportTimeoutError: Raised when the request timed out.
            ZosmfHttpError: Raised for non-success HTTP status.
            ZosmfResponseError: Raised when a non-empty body is not JSON.
        """

        request_headers = {**HEADER_APPLICATION_JSON, **dict(headers or {})}
        if isinstance(payload, str):
            response = self._adapter_request(
                "PUT", resource, headers=request_headers, content=payload.encode("utf-8")
            )
        else:
            response = self._adapter_request("PUT", resource, headers=request_headers, json_body=dict(payload))
        if not response.content:
            return None
        return self._adapter_decode_json(response=response, resource=resource)

    def adapter_close(self) -> None:
        """Close the pooled HTTP client."""

        self._client.close()

    def __enter__(self) -> "ZosmfRestAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.adapter_close()

    def _adapter_request(
        self,
        method: str,
        resource: str,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Execute one HTTP request and map transport failures to typed errors.

        Args:
            method: HTTP method.
            resource: Resource path relative to the base URL.
            headers: Optional request headers.
            content: Optional raw body.
            json_body: Optional JSON body.

        Returns:
            httpx.Response: Successful response.

        Raises:
            ZosmfConnectionError: Raised for network failures.
            ZosmfTransportTimeoutError: Raised when the request timed out.
            ZosmfHttpError: Raised for non-success HTTP status.
        """

        self._log.debug("z/OSMF request", method=method, resource=resource)
        try:
            response = self._client.request(
                method,
                resource,
                headers=dict(headers or {}),
                content=content,
                json=json_body,
            )
        except httpx.TimeoutException as error:
            raise ZosmfTransportTimeoutError(f"z/OSMF request timed out: {method} {resource}") from error
        except httpx.TransportError as error:
            raise ZosmfConnectionError(f"z/OSMF request failed: {method} {resource}: {error}") from error

        if response.status_code >= 400:
            message = self._adapter_extract_error_message(response)
            self._log.debug(
                "z/OSMF request rejected",
                method=method,
                resource=resource,
                status_code=response.status_code,
            )
            raise ZosmfHttpError(
                f"z/OSMF returned HTTP {response.status_code} for {method} {resource}: {message}",
                status_code=response.status_code,
            )
        return response

    def _adapter_decode_json(self, response: httpx.Response, resource: str) -> Any:
        try:
            return response.json()
        except ValueError as error:
            raise ZosmfResponseError(
                f"z/OSMF response for {resource} is not valid JSON",
                status_code=response.status_code,
            ) from error

    def _adapter_extract_error_message(self, response: httpx.Response) -> str:
        """Extract a human-readable message from a z/OSMF error response.

        Args:
            response: Failed HTTP response.

        Returns:
            str: `message` field of a JSON error body, else the raw body or reason phrase.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        try:
            error_payload = response.json()
        except ValueError:
            error_payload = None
        if isinstance(error_payload, dict):
            message = error_payload.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        body_text = response.text.strip()
        return body_text or response.reason_phrase or "unexpected upstream response"
