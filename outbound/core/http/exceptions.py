"""
Custom exceptions for HTTP client operations.

This module provides a hierarchy of exceptions for handling HTTP-related errors
in a consistent way across the application.
"""

from typing import Any, Optional


class HTTPClientError(Exception):
    """
    Base exception for all HTTP client errors.

    This is the parent class for all HTTP-related exceptions raised by the client.
    Catch this to handle any HTTP error generically.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize HTTP client error.

        Args:
            message: Human-readable error description
            url: The URL that was being accessed (optional)
            status_code: HTTP status code if applicable (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.message = message
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class ConfigurationError(HTTPClientError):
    """
    Exception raised when a transport cannot be constructed.

    Typically the TLS context for the requested trust policy could not be built.
    This is fatal for the transport being created and is never retried.
    """
    pass


class TransportError(HTTPClientError):
    """
    Exception raised for network-level failures.

    Parent of connection and timeout errors. Nothing at this level is retried.
    """
    pass


class HTTPConnectionError(TransportError):
    """
    Exception raised when connection to the server fails.

    This includes DNS resolution failures, connection refused errors,
    TLS handshake failures and errors while reading or writing the stream.
    """
    pass


class HTTPTimeoutError(TransportError):
    """
    Exception raised when a request times out.

    This occurs when no pooled connection could be acquired, or the server
    doesn't respond, within the transport's configured timeout.
    """
    pass


class HTTPStatusError(HTTPClientError):
    """
    Exception raised when the server returns a status outside 200-299.

    The full response body is kept as decoded text in ``body_text``.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body_text: str = "",
        original_error: Optional[Exception] = None
    ):
        self.body_text = body_text
        super().__init__(message, url=url, status_code=status_code, original_error=original_error)

    def json(self) -> Any:
        """Best-effort parse of the error body; empty mapping if it is not JSON."""
        from outbound.core.http.codec import JSONCodec

        return JSONCodec.decode(self.body_text)


class CodecError(HTTPClientError):
    """
    Exception raised inside the JSON codec.

    Never escapes JSONCodec.encode / JSONCodec.decode, which fall back to empty values.
    """
    pass


class MultipartStateError(HTTPClientError):
    """Exception raised when a MultipartBuilder is used after build()."""
    pass
