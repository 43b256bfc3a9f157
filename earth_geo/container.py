"""Dependency injection container.

Explicit registration and resolution, no framework. Ports are bound to
factories; adapters are built on first resolve. Resolution takes a lock
because lookups complete on HTTP worker threads.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config

_UNSET = object()


@dataclass
class _Binding:
    factory: Callable[[], Any]
    singleton: bool
    instance: Any = _UNSET


@dataclass
class Container:
    """Maps port types to the factories that build them.

    Usage:
        # Production
        container = Container.create_default()
        command = container.resolve(GeoCommand)

        # Testing
        container = Container.create_default(config)
        container.register(HttpClientPort, FakeHttpClient)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind port_type to factory, replacing any earlier binding.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: Zero-argument callable building an implementation.
            singleton: Build once and reuse the instance.
        """
        with self._lock:
            self._bindings[port_type] = _Binding(factory, singleton)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build or return the instance bound to port_type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"Type not registered: {port_type}")
            if not binding.singleton:
                return binding.factory()
            if binding.instance is _UNSET:
                binding.instance = binding.factory()
            return binding.instance

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._bindings

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the production bindings.

        The HTTP client is only bound when HTTP is enabled; without it the
        provider gateway reports itself unavailable and place lookups fall
        back to the offline table.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.console import FlatWorld
        from .adapters.geocoding import ProviderGateway, StaticPlaceTable
        from .adapters.http import RequestsHttpClient
        from .ports.cache import CachePort
        from .ports.geocoding import GeoProviderPort, PlaceTablePort
        from .ports.http import HttpClientPort
        from .ports.session import CapabilityGatePort, WorldPort
        from .services import GeoCommand, LookupOrchestrator, ProtocolVersionGate

        config = config or get_config()
        container = cls(config=config)
        lookup = config.lookup

        container.register(
            CachePort,
            lambda: InMemoryCache(name="geo", ttl_seconds=lookup.cache_ttl_seconds),
        )

        if lookup.http_enabled:
            container.register(
                HttpClientPort,
                lambda: RequestsHttpClient(
                    user_agent=lookup.user_agent,
                    max_workers=lookup.max_workers,
                ),
            )

        def create_provider() -> ProviderGateway:
            http = (
                container.resolve(HttpClientPort)
                if container.is_registered(HttpClientPort)
                else None
            )
            return ProviderGateway(
                config=config.provider,
                http=http,
                timeout_seconds=lookup.timeout_seconds,
            )

        container.register(GeoProviderPort, create_provider)
        container.register(PlaceTablePort, StaticPlaceTable)
        container.register(WorldPort, FlatWorld)
        container.register(
            CapabilityGatePort,
            lambda: ProtocolVersionGate(
                min_protocol_version=lookup.min_protocol_version
            ),
        )

        def create_orchestrator() -> LookupOrchestrator:
            return LookupOrchestrator(
                provider=container.resolve(GeoProviderPort),
                world=container.resolve(WorldPort),
                projection=config.projection.to_projection(),
                cache=container.resolve(CachePort),
                place_table=container.resolve(PlaceTablePort),
                capability_gate=container.resolve(CapabilityGatePort),
                config=lookup,
            )

        container.register(LookupOrchestrator, create_orchestrator)
        container.register(
            GeoCommand,
            lambda: GeoCommand(orchestrator=container.resolve(LookupOrchestrator)),
        )
        return container
