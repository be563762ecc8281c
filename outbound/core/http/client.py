"""
HTTP client for making outbound HTTP requests.

This module provides the request execution core and a synchronous per-verb
client on top of it, built on a shared pooled Transport (httpx).
"""

from typing import Any, Dict, Mapping, Optional, Union

import httpx

from outbound.core.http.codec import JSONCodec
from outbound.core.http.exceptions import (
    HTTPClientError,
    HTTPConnectionError,
    HTTPStatusError,
    HTTPTimeoutError,
)
from outbound.core.http.models import HTTPMethod, RequestSpec
from outbound.core.http.multipart import MultipartBody
from outbound.core.http.transport import Transport
from outbound.core.logging import get_logger

logger = get_logger(__name__)

APPLICATION_JSON = "application/json"
ANY_MEDIA_TYPE = "*/*"

Body = Union[str, bytes, bytearray, memoryview, MultipartBody, Mapping[str, Any], list, None]


class RequestExecutor:
    """
    Single execution core shared by every HTTP verb.

    Applies default headers, sends the request over the transport, reads the
    full body and classifies the result by status code. The response is
    released on every exit path.
    """

    def execute(
        self,
        transport: Transport,
        request: RequestSpec,
        as_bytes: bool = False
    ) -> Union[str, bytes]:
        """
        Execute a request and return its body.

        Args:
            transport: Shared pooled transport
            request: Method, URI, optional body and caller headers
            as_bytes: Return raw bytes instead of decoded text (downloads)

        Returns:
            Response body as str, or bytes when as_bytes is set

        Raises:
            HTTPStatusError: If the response status is outside 200-299
            HTTPTimeoutError: If the pool or the server doesn't answer in time
            HTTPConnectionError: If the connection or stream fails
            HTTPClientError: For any other unexpected failure
        """
        method = request.method.value
        url = request.uri
        headers = self._prepare_headers(request, as_bytes)
        content = request.body.encode("utf-8") if isinstance(request.body, str) else request.body

        response = self._send(transport, method, url, headers, content)
        try:
            status_code, body = self._read_body(response, method, url, as_bytes)
        finally:
            response.close()

        logger.debug(f"{method} {url} -> HTTP {status_code}")

        if 200 <= status_code < 300:
            return body

        body_text = self._decode_error_body(body, response.charset_encoding) if as_bytes else body
        raise HTTPStatusError(
            message=f"HTTP {status_code} error for {method} {url}",
            url=url,
            status_code=status_code,
            body_text=body_text
        )

    @staticmethod
    def _prepare_headers(request: RequestSpec, as_bytes: bool) -> httpx.Headers:
        # httpx.Headers lookups are case-insensitive
        headers = httpx.Headers(request.headers)

        if request.body is not None and "Content-Type" not in headers:
            headers["Content-Type"] = request.content_type or APPLICATION_JSON
        if "Accept" not in headers:
            headers["Accept"] = ANY_MEDIA_TYPE if as_bytes else APPLICATION_JSON

        return headers

    @staticmethod
    def _send(
        transport: Transport,
        method: str,
        url: str,
        headers: httpx.Headers,
        content: Optional[bytes]
    ) -> httpx.Response:
        try:
            return transport.send(transport.build_request(method, url, headers, content))

        except httpx.TimeoutException as e:
            raise HTTPTimeoutError(
                message=f"Request to {url} timed out after {transport.config.timeout_seconds}s",
                url=url,
                original_error=e
            ) from e

        except httpx.TransportError as e:
            raise HTTPConnectionError(
                message=f"Connection failed for {method} {url}: {str(e)}",
                url=url,
                original_error=e
            ) from e

        except Exception as e:
            raise HTTPClientError(
                message=f"Unexpected error during {method} {url}: {str(e)}",
                url=url,
                original_error=e
            ) from e

    @staticmethod
    def _read_body(
        response: httpx.Response,
        method: str,
        url: str,
        as_bytes: bool
    ):
        try:
            content = response.read()
        except httpx.TimeoutException as e:
            raise HTTPTimeoutError(
                message=f"Reading response from {url} timed out",
                url=url,
                status_code=response.status_code,
                original_error=e
            ) from e
        except httpx.HTTPError as e:
            raise HTTPConnectionError(
                message=f"Failed reading response body for {method} {url}: {str(e)}",
                url=url,
                status_code=response.status_code,
                original_error=e
            ) from e

        if as_bytes:
            return response.status_code, content
        # declared charset, else the client's utf-8 default
        return response.status_code, response.text

    @staticmethod
    def _decode_error_body(content: bytes, charset: Optional[str]) -> str:
        """Diagnostic text for a failed download; empty if the bytes don't decode."""
        try:
            return content.decode(charset or "utf-8")
        except (UnicodeDecodeError, LookupError):
            return ""


class HTTPClient:
    """
    Synchronous HTTP client over a shared Transport.

    This client provides:
    - GET/DELETE without a body
    - POST/PUT/PATCH with a text, bytes, multipart or structured-data body
      (structured data is JSON-encoded)
    - Byte downloads via get_bytes()
    - Consistent exceptions from outbound.core.http.exceptions

    The client does not own its Transport: several clients may share one, and
    whoever created the Transport closes it.

    Example:
        ```python
        transport = TransportFactory.create()
        client = HTTPClient(transport)
        headers = {"Authorization": "Bearer myToken"}
        data = JSONCodec.decode(client.get("https://api.example.com/data", headers))
        ```
    """

    def __init__(self, transport: Transport, executor: Optional[RequestExecutor] = None):
        """
        Initialize HTTP client.

        Args:
            transport: Pooled transport shared with other callers
            executor: Request execution core (a default one is created if omitted)
        """
        self.transport = transport
        self.executor = executor or RequestExecutor()

    def get(self, uri: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Make a GET request.

        Args:
            uri: Absolute URI to request
            headers: HTTP headers to send (optional)

        Returns:
            Response body as text

        Raises:
            HTTPStatusError: If server returns a non-2xx status code
            HTTPTimeoutError: If request times out
            HTTPConnectionError: If connection fails
        """
        return self._call(HTTPMethod.GET, uri, None, headers)

    def delete(self, uri: str, headers: Optional[Dict[str, str]] = None) -> str:
        """Make a DELETE request and return the response body as text."""
        return self._call(HTTPMethod.DELETE, uri, None, headers)

    def post(self, uri: str, body: Body = None, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Make a POST request.

        Args:
            uri: Absolute URI to request
            body: Pre-encoded text or bytes (bytearray and memoryview are
                sent as bytes), a MultipartBody, or structured
                data to JSON-encode (None sends "{}")
            headers: HTTP headers to send (optional)

        Returns:
            Response body as text

        Raises:
            HTTPStatusError: If server returns a non-2xx status code
            HTTPTimeoutError: If request times out
            HTTPConnectionError: If connection fails
        """
        return self._call(HTTPMethod.POST, uri, body, headers, with_body=True)

    def put(self, uri: str, body: Body = None, headers: Optional[Dict[str, str]] = None) -> str:
        """Make a PUT request; body is handled as for post()."""
        return self._call(HTTPMethod.PUT, uri, body, headers, with_body=True)

    def patch(self, uri: str, body: Body = None, headers: Optional[Dict[str, str]] = None) -> str:
        """Make a PATCH request; body is handled as for post()."""
        return self._call(HTTPMethod.PATCH, uri, body, headers, with_body=True)

    def get_bytes(self, uri: str, headers: Optional[Dict[str, str]] = None) -> bytes:
        """
        Make a GET request and return the raw response body.

        Used for binary downloads (PDFs, images, files). Accept defaults to */*.

        Raises:
            HTTPStatusError: If server returns a non-2xx status code; body_text
                holds the decoded error body, or "" if it isn't text
        """
        request = RequestSpec(method=HTTPMethod.GET, uri=uri, headers=dict(headers or {}))
        return self.executor.execute(self.transport, request, as_bytes=True)

    def _call(
        self,
        method: HTTPMethod,
        uri: str,
        body: Body,
        headers: Optional[Dict[str, str]],
        with_body: bool = False
    ) -> str:
        content_type = None
        if not with_body:
            payload = None
        elif isinstance(body, str):
            try:
                payload = body.encode("utf-8")
            except UnicodeEncodeError as e:
                raise HTTPClientError(
                    message=f"Request body for {method.value} {uri} is not encodable as UTF-8: {str(e)}",
                    url=uri,
                    original_error=e
                ) from e
        elif isinstance(body, (bytes, bytearray, memoryview)):
            payload = bytes(body)
        elif isinstance(body, MultipartBody):
            payload, content_type = body.content, body.content_type
        else:
            payload = JSONCodec.encode(body)

        request = RequestSpec(
            method=method,
            uri=uri,
            body=payload,
            headers=dict(headers or {}),
            content_type=content_type
        )
        return self.executor.execute(self.transport, request)
