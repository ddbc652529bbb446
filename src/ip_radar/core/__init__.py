"""
Core module - shared models and configuration.
"""

from ip_radar.core.config import AppConfig, get_config, reload_config
from ip_radar.core.models import (
    AddressFamily,
    KnownAddressSet,
    ObservationKey,
    ObservedAddress,
    observation_key,
)

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "AddressFamily",
    "KnownAddressSet",
    "ObservationKey",
    "ObservedAddress",
    "observation_key",
]
