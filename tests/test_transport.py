import logging
import ssl

import httpx
import pytest
from pydantic import ValidationError

from outbound.core.http import (
    ConfigurationError,
    TransportConfig,
    TransportFactory,
    TrustPolicy,
    create_transport,
)


def test_config_defaults():
    config = TransportConfig()

    assert config.timeout_seconds == 30
    assert config.trust_policy is TrustPolicy.VERIFIED


@pytest.mark.parametrize("timeout", [0, -1])
def test_config_rejects_non_positive_timeout(timeout):
    with pytest.raises(ValidationError):
        TransportConfig(timeout_seconds=timeout)


def test_config_accepts_policy_names():
    assert TransportConfig(trust_policy="trust_all").trust_policy is TrustPolicy.TRUST_ALL


def test_config_is_immutable():
    config = TransportConfig()
    with pytest.raises(ValidationError):
        config.timeout_seconds = 5


def test_verified_context_validates_chain_and_hostname():
    context = TransportFactory.build_ssl_context(TrustPolicy.VERIFIED)

    assert context.check_hostname is True
    assert context.verify_mode == ssl.CERT_REQUIRED


def test_trust_all_context_skips_validation_only(caplog):
    with caplog.at_level(logging.WARNING):
        context = TransportFactory.build_ssl_context(TrustPolicy.TRUST_ALL)

    assert context.check_hostname is False
    assert context.verify_mode == ssl.CERT_NONE
    # still a TLS client context: the handshake itself is unchanged
    assert context.protocol == ssl.PROTOCOL_TLS_CLIENT
    assert "verification disabled" in caplog.text


def test_unbuildable_tls_context_raises_configuration_error(monkeypatch):
    def broken_context(*args, **kwargs):
        raise ssl.SSLError("no trust store")

    monkeypatch.setattr(ssl, "create_default_context", broken_context)

    with pytest.raises(ConfigurationError) as exc_info:
        TransportFactory.create(TransportConfig())

    assert isinstance(exc_info.value.original_error, ssl.SSLError)


def test_pool_shape_is_independent_of_trust_policy():
    verified = TransportConfig(timeout_seconds=10, trust_policy=TrustPolicy.VERIFIED)
    trust_all = TransportConfig(timeout_seconds=10, trust_policy=TrustPolicy.TRUST_ALL)

    assert TransportFactory.build_limits(verified) == TransportFactory.build_limits(trust_all)
    assert TransportFactory.build_timeout(verified) == TransportFactory.build_timeout(trust_all)


def test_timeout_bounds_pool_acquisition_and_response():
    timeout = TransportFactory.build_timeout(TransportConfig(timeout_seconds=12))

    assert timeout.pool == 12
    assert timeout.read == 12


def test_limits_follow_config():
    limits = TransportFactory.build_limits(
        TransportConfig(max_connections=7, max_keepalive_connections=3, keepalive_expiry=1.5)
    )

    assert limits == httpx.Limits(max_connections=7, max_keepalive_connections=3, keepalive_expiry=1.5)


@pytest.mark.parametrize("policy", list(TrustPolicy))
def test_create_builds_pooled_transport_for_each_policy(policy):
    config = TransportConfig(timeout_seconds=15, trust_policy=policy)

    with TransportFactory.create(config) as transport:
        assert transport.config == config
        assert not transport.is_closed

    assert transport.is_closed


def test_create_transport_shorthand_uses_config_defaults():
    transport = create_transport()
    try:
        assert transport.config == TransportConfig()
    finally:
        transport.close()


def test_create_transport_shorthand_overrides():
    transport = create_transport(timeout_seconds=3, trust_policy=TrustPolicy.TRUST_ALL)
    try:
        assert transport.config.timeout_seconds == 3
        assert transport.config.trust_policy is TrustPolicy.TRUST_ALL
    finally:
        transport.close()


def test_close_is_idempotent():
    transport = TransportFactory.create(http_transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    transport.close()
    transport.close()

    assert transport.is_closed
    assert "closed=True" in repr(transport)
