"""
Pooled, reusable HTTP transports.

A Transport wraps one httpx.Client over an explicitly built httpx.HTTPTransport
so that the verified and trust-all policies share the same pool shape and
differ only in their TLS context.
"""

import ssl
from typing import Optional

import httpx

from outbound.core.http.exceptions import ConfigurationError
from outbound.core.http.models import TransportConfig, TrustPolicy
from outbound.core.logging import get_logger

logger = get_logger(__name__)


class Transport:
    """
    Thread-safe handle over a pooled connection manager.

    Create once per configuration and share it between all callers; close it
    when the process shuts down. Nothing about it changes after construction:
    per-request headers and bodies are supplied on each call.

    Example:
        ```python
        with TransportFactory.create(TransportConfig(timeout_seconds=10)) as transport:
            client = HTTPClient(transport)
            data = client.get("https://api.example.com/data")
        ```
    """

    def __init__(self, config: TransportConfig, client: httpx.Client):
        self._config = config
        self._client = client

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def build_request(self, method: str, url: str, headers: httpx.Headers, content: Optional[bytes]) -> httpx.Request:
        return self._client.build_request(method, url, headers=headers, content=content)

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the response with its body still unread."""
        return self._client.send(request, stream=True)

    def close(self) -> None:
        """Close the pool and release its sockets."""
        if not self._client.is_closed:
            self._client.close()
            logger.info("HTTP transport closed")

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Transport(timeout_seconds={self._config.timeout_seconds}, "
            f"trust_policy={self._config.trust_policy.value}, closed={self.is_closed})"
        )


class TransportFactory:
    """
    Factory for Transport instances.

    Builds the TLS context for the requested trust policy, the pool limits and
    the timeout configuration, and wires them into one httpx.Client.
    """

    @staticmethod
    def create(
        config: Optional[TransportConfig] = None,
        http_transport: Optional[httpx.BaseTransport] = None
    ) -> Transport:
        """
        Create a pooled transport.

        Args:
            config: Transport configuration (defaults: 30s timeout, verified TLS)
            http_transport: Replacement for the pooled httpx transport, e.g.
                httpx.MockTransport in tests (optional)

        Returns:
            Transport ready to be shared by concurrent callers

        Raises:
            ConfigurationError: If the TLS context cannot be built
        """
        config = config or TransportConfig()

        ssl_context = TransportFactory.build_ssl_context(config.trust_policy)
        if http_transport is None:
            http_transport = httpx.HTTPTransport(
                verify=ssl_context,
                limits=TransportFactory.build_limits(config),
                retries=0,
            )

        client = httpx.Client(
            transport=http_transport,
            timeout=TransportFactory.build_timeout(config),
            follow_redirects=False,
            default_encoding="utf-8",
        )

        logger.info(
            f"HTTP transport created: timeout={config.timeout_seconds}s, "
            f"trust_policy={config.trust_policy.value}, max_connections={config.max_connections}"
        )
        return Transport(config, client)

    @staticmethod
    def build_ssl_context(trust_policy: TrustPolicy) -> ssl.SSLContext:
        """
        Build the TLS client context for a trust policy.

        VERIFIED uses the platform trust store with hostname checking.
        TRUST_ALL skips chain and hostname validation but still performs a
        normal TLS handshake.

        Raises:
            ConfigurationError: If the context cannot be created
        """
        try:
            if trust_policy == TrustPolicy.VERIFIED:
                return ssl.create_default_context(ssl.Purpose.SERVER_AUTH)

            logger.warning("TLS certificate and hostname verification disabled (trust_all)")
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            # check_hostname must be cleared before verify_mode can be relaxed
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            return context

        except (ssl.SSLError, OSError, ValueError) as e:
            raise ConfigurationError(
                message=f"Unable to build TLS context for trust policy {trust_policy.value}: {e}",
                original_error=e
            ) from e

    @staticmethod
    def build_limits(config: TransportConfig) -> httpx.Limits:
        return httpx.Limits(
            max_connections=config.max_connections,
            max_keepalive_connections=config.max_keepalive_connections,
            keepalive_expiry=config.keepalive_expiry,
        )

    @staticmethod
    def build_timeout(config: TransportConfig) -> httpx.Timeout:
        # pool bounds connection acquisition, read bounds waiting for the response
        return httpx.Timeout(config.timeout_seconds, pool=config.timeout_seconds)


def create_transport(
    timeout_seconds: Optional[int] = None,
    trust_policy: Optional[TrustPolicy] = None
) -> Transport:
    """
    Shorthand for TransportFactory.create(TransportConfig(...)).

    Arguments left as None take the TransportConfig defaults.
    """
    overrides = {"timeout_seconds": timeout_seconds, "trust_policy": trust_policy}
    return TransportFactory.create(
        TransportConfig(**{key: value for key, value in overrides.items() if value is not None})
    )
