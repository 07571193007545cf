"""
Runtime settings, read from the environment.

Example .env:
    GRAPHHOPPER_API_KEY=your-key
    TICK_INTERVAL_S=2
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from routesim import constants


class ConfigError(ValueError):
    """Raised when a setting has an unusable value."""
    pass


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    graphhopper_api_key: Optional[str] = None
    graphhopper_url: str = constants.GRAPHHOPPER_URL
    nominatim_url: str = constants.NOMINATIM_URL
    geocode_country: str = constants.GEOCODE_COUNTRY
    tick_interval_s: float = constants.TICK_INTERVAL_S
    routing_timeout_s: float = constants.ROUTING_TIMEOUT_S
    map_tiles: str = "Standard"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.tick_interval_s <= 0:
            raise ConfigError(f"tick interval must be positive, got {self.tick_interval_s}")
        if self.routing_timeout_s <= 0:
            raise ConfigError(f"routing timeout must be positive, got {self.routing_timeout_s}")
        if self.map_tiles not in constants.TILE_LAYERS:
            raise ConfigError(
                f"unknown tile layer {self.map_tiles!r}, expected one of {sorted(constants.TILE_LAYERS)}"
            )

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        return cls(
            graphhopper_api_key=os.getenv("GRAPHHOPPER_API_KEY") or None,
            graphhopper_url=os.getenv("GRAPHHOPPER_URL", constants.GRAPHHOPPER_URL),
            nominatim_url=os.getenv("NOMINATIM_URL", constants.NOMINATIM_URL),
            geocode_country=os.getenv("GEOCODE_COUNTRY", constants.GEOCODE_COUNTRY),
            tick_interval_s=_float_env("TICK_INTERVAL_S", constants.TICK_INTERVAL_S),
            routing_timeout_s=_float_env("ROUTING_TIMEOUT_S", constants.ROUTING_TIMEOUT_S),
            map_tiles=os.getenv("MAP_TILES", "Standard"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
