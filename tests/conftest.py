from __future__ import annotations

import pytest

from earth_geo.adapters.cache import InMemoryCache
from earth_geo.adapters.console import ConsoleSession, FlatWorld
from earth_geo.adapters.geocoding import ProviderGateway
from earth_geo.config import LookupConfig, ProviderConfig, reset_config
from earth_geo.services import LookupOrchestrator, ProtocolVersionGate

from fakes import FakeClock, FakeHttpClient


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCache(name="test", ttl_seconds=3600, clock=clock)


@pytest.fixture
def http():
    return FakeHttpClient()


@pytest.fixture
def gateway(http):
    return ProviderGateway(config=ProviderConfig(), http=http)


@pytest.fixture
def offline_gateway():
    return ProviderGateway(config=ProviderConfig(), http=None)


@pytest.fixture
def world():
    return FlatWorld(height=12.0)


@pytest.fixture
def session():
    return ConsoleSession(
        name="alice",
        address="8.8.8.8:30000",
        client_protocol=150,
        output=lambda text: None,
    )


@pytest.fixture
def make_orchestrator(world, cache):
    def _make(provider, **overrides):
        kwargs = dict(
            provider=provider,
            world=world,
            cache=cache,
            capability_gate=ProtocolVersionGate(),
            config=LookupConfig(),
        )
        kwargs.update(overrides)
        return LookupOrchestrator(**kwargs)

    return _make
