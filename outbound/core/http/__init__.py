"""
HTTP client subsystem.

This module provides pooled transports, a synchronous HTTP client with a single
execution core, best-effort JSON conversion, a multipart body builder and the
exception hierarchy used for all outbound HTTP calls.
"""

from outbound.core.http.client import HTTPClient, RequestExecutor
from outbound.core.http.codec import JSONCodec
from outbound.core.http.exceptions import (
    CodecError,
    ConfigurationError,
    HTTPClientError,
    HTTPConnectionError,
    HTTPStatusError,
    HTTPTimeoutError,
    MultipartStateError,
    TransportError,
)
from outbound.core.http.models import HTTPMethod, RequestSpec, TransportConfig, TrustPolicy
from outbound.core.http.multipart import (
    BytesPart,
    FilePart,
    JSONPart,
    MultipartBody,
    MultipartBuilder,
    TextPart,
)
from outbound.core.http.transport import Transport, TransportFactory, create_transport

__all__ = [
    "HTTPClient",
    "RequestExecutor",
    "JSONCodec",
    "Transport",
    "TransportFactory",
    "create_transport",
    "TransportConfig",
    "TrustPolicy",
    "HTTPMethod",
    "RequestSpec",
    "MultipartBuilder",
    "MultipartBody",
    "TextPart",
    "JSONPart",
    "FilePart",
    "BytesPart",
    "HTTPClientError",
    "ConfigurationError",
    "TransportError",
    "HTTPConnectionError",
    "HTTPTimeoutError",
    "HTTPStatusError",
    "CodecError",
    "MultipartStateError",
]
