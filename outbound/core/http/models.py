from enum import Enum
from typing import Dict, Optional, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from outbound.core import config


class TrustPolicy(str, Enum):
    """TLS trust policy, fixed when a transport is created."""

    VERIFIED = "verified"
    TRUST_ALL = "trust_all"


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class TransportConfig(BaseModel):
    """Configuration for a pooled transport. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    timeout_seconds: int = Field(30, gt=0, description="Pool acquisition and response timeout in seconds")
    trust_policy: TrustPolicy = Field(TrustPolicy.VERIFIED, description="TLS certificate/hostname validation policy")
    max_connections: int = Field(100, gt=0, description="Maximum open connections in the pool")
    max_keepalive_connections: int = Field(20, ge=0, description="Maximum idle keep-alive connections")
    keepalive_expiry: float = Field(5.0, ge=0, description="Seconds an idle connection is kept alive")

    @classmethod
    def from_env(cls) -> "TransportConfig":
        """Build a config from the HTTP_* environment / .env settings."""
        return cls(
            timeout_seconds=config.HTTP_TIMEOUT_SECONDS,
            trust_policy=config.HTTP_TRUST_POLICY,
            max_connections=config.HTTP_MAX_CONNECTIONS,
            max_keepalive_connections=config.HTTP_MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=config.HTTP_KEEPALIVE_EXPIRY,
        )


class RequestSpec(BaseModel):
    """One HTTP call: method, absolute URI, optional buffered body and headers."""

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod = Field(..., description="HTTP method")
    uri: str = Field(..., description="Absolute request URI")
    body: Optional[Union[str, bytes]] = Field(None, description="Fully buffered request body")
    headers: Dict[str, str] = Field(default_factory=dict, description="Caller headers, applied verbatim")
    content_type: Optional[str] = Field(
        None, description="Content-Type sent with a body when headers carry none (default application/json)"
    )

    @field_validator("uri")
    @classmethod
    def _require_absolute_uri(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"uri must be an absolute http(s) URI, got {value!r}")
        return value
