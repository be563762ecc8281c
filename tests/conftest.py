from typing import Callable, List

import httpx
import pytest

from outbound.core.http import HTTPClient, Transport, TransportConfig, TransportFactory


class TrackingStream(httpx.SyncByteStream):
    """Response stream that records whether it was closed, optionally failing mid-read."""

    def __init__(self, chunks: List[bytes], fail_after: bool = False):
        self.chunks = chunks
        self.fail_after = fail_after
        self.closed = False

    def __iter__(self):
        yield from self.chunks
        if self.fail_after:
            raise httpx.ReadError("connection reset by peer")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_transport() -> Callable[..., Transport]:
    """Build transports backed by httpx.MockTransport; all are closed after the test."""
    created: List[Transport] = []

    def _make(handler, **config) -> Transport:
        transport = TransportFactory.create(
            TransportConfig(**config),
            http_transport=httpx.MockTransport(handler),
        )
        created.append(transport)
        return transport

    yield _make

    for transport in created:
        transport.close()


@pytest.fixture
def make_client(make_transport) -> Callable[..., HTTPClient]:
    def _make(handler, **config) -> HTTPClient:
        return HTTPClient(make_transport(handler, **config))

    return _make
