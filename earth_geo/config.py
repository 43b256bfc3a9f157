"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for lookup, provider,
projection and logging settings. Configuration is loaded once at startup
and is immutable for the lifetime of the process.

Configuration can be overridden via environment variables:
- EARTH_GEO_LOOKUP_ENABLE=false
- EARTH_GEO_LOOKUP_CACHE_TTL_SECONDS=3600
- EARTH_GEO_PROVIDER_API_KEY=...
- EARTH_GEO_PROJECTION_WORLD_METADATA='{"center": {"x": 10, "y": 5, "z": 50}}'
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.cache.memory_cache import ONE_YEAR_SECONDS
from .domain.errors import ConfigurationError
from .domain.models import WorldCenter
from .projection import Projection

DEFAULT_IP_API_URL = (
    "http://ip-api.com/json/%s"
    "?fields=status,message,country,regionName,city,lat,lon,timezone,isp,query"
)
DEFAULT_GEOCODE_API_URL = (
    "https://nominatim.openstreetmap.org/search?format=jsonv2&limit=1&q=%s"
)

logger = logging.getLogger(__name__)


class LookupConfig(BaseSettings):
    """Lookup engine configuration.

    Environment variables prefixed with EARTH_GEO_LOOKUP_.
    """

    model_config = SettingsConfigDict(env_prefix="EARTH_GEO_LOOKUP_")

    enable: bool = True
    auto_lookup_on_spawn: bool = False
    cache_ttl_seconds: float = Field(default=ONE_YEAR_SECONDS, gt=0)
    timeout_seconds: float = Field(default=8.0, gt=0)
    http_enabled: bool = True
    max_workers: int = Field(default=4, ge=1)
    user_agent: str = "earth-geo"
    min_protocol_version: int = 140


class ProviderConfig(BaseSettings):
    """Provider URL templates and credentials.

    Environment variables prefixed with EARTH_GEO_PROVIDER_.
    """

    model_config = SettingsConfigDict(env_prefix="EARTH_GEO_PROVIDER_")

    api_ip_url: str = DEFAULT_IP_API_URL
    api_geocode_url: str = DEFAULT_GEOCODE_API_URL
    api_key: Optional[str] = None


class _CenterModel(BaseModel):
    x: float
    y: float = 0.0
    z: float


class _WorldMetadata(BaseModel):
    center: Optional[_CenterModel] = None


class ProjectionSettings(BaseSettings):
    """Projection parameters and world metadata.

    Environment variables prefixed with EARTH_GEO_PROJECTION_.
    """

    model_config = SettingsConfigDict(env_prefix="EARTH_GEO_PROJECTION_")

    center_longitude: float = 0.0
    center_latitude: float = 0.0
    scale_x: float = 1.0
    scale_z: float = 1.0
    snap_to_grid: bool = True
    world_metadata: Optional[str] = None

    def world_center(self) -> Optional[WorldCenter]:
        """Parse the re-centering offset out of the world metadata blob.

        Unparseable metadata is treated as absent.
        """
        if not self.world_metadata:
            return None
        try:
            metadata = _WorldMetadata.model_validate_json(self.world_metadata)
        except ValidationError as e:
            logger.warning(
                "Ignoring unparseable world metadata",
                extra={"error": str(e)},
            )
            return None
        if metadata.center is None:
            return None
        return WorldCenter(
            x=metadata.center.x, y=metadata.center.y, z=metadata.center.z
        )

    def to_projection(self) -> Projection:
        """Build the immutable projection used by the orchestrator.

        Raises:
            ConfigurationError: If a scale factor is zero.
        """
        for name in ("scale_x", "scale_z"):
            if getattr(self, name) == 0:
                raise ConfigurationError(
                    "Projection scale must be non-zero",
                    setting_name=name,
                    expected_type="non-zero float",
                )
        return Projection(
            center_longitude=self.center_longitude,
            center_latitude=self.center_latitude,
            scale_x=self.scale_x,
            scale_z=self.scale_z,
            reference_center=self.world_center(),
            snap_to_grid=self.snap_to_grid,
        )


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with EARTH_GEO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="EARTH_GEO_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.lookup.cache_ttl_seconds)
        print(config.provider.api_ip_url)

    Environment variables prefixed with EARTH_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="EARTH_GEO_")

    lookup: LookupConfig = Field(default_factory=LookupConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
