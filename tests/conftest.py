"""Pytest fixtures for registry client tests."""

import httpx
import pytest

from tf_registry.clients.middleware import RegistryMiddleware
from tf_registry.clients.registry import RegistryClient
from tf_registry.utils.config_loader import RegistryConfig

REGISTRY_ADDRESS = "https://registry.example"
TOKEN = "secret-token"


class CountingStream(httpx.SyncByteStream):
    """Response body double that records how often it was closed."""

    def __init__(self, body: bytes = b""):
        self._body = body
        self.close_calls = 0

    def __iter__(self):
        if self._body:
            yield self._body

    def close(self):
        self.close_calls += 1


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler):
        self.requests = []

        def record(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def counting_response():
    """Build a response over a CountingStream; returns (response, stream)."""

    def _make(request, status, body=b""):
        stream = CountingStream(body)
        return httpx.Response(status, stream=stream, request=request), stream

    return _make


@pytest.fixture
def config():
    return RegistryConfig(address=REGISTRY_ADDRESS + "/", token=TOKEN)


@pytest.fixture
def transport():
    return RecordingTransport(lambda request: httpx.Response(200))


@pytest.fixture
def middleware(config, transport):
    http_client = httpx.Client(transport=transport)
    yield RegistryMiddleware(config, http_client)
    http_client.close()


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def make_client(config):
    """Build a RegistryClient whose API traffic goes to the given handler."""
    clients = []

    def _make(handler):
        transport = RecordingTransport(handler)
        client = RegistryClient(config, http_client=httpx.Client(transport=transport))
        clients.append(client)
        return client, transport

    yield _make
    for client in clients:
        client.http_client.close()
