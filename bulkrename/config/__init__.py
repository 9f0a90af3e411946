"""Configuration management for bulkrename."""

from .loader import ConfigLoader, ConfigurationError
from .models import BulkRenameConfig, DiscoveryConfig, DisplayConfig, RenameDefaults

__all__ = [
    "BulkRenameConfig",
    "DiscoveryConfig",
    "DisplayConfig",
    "RenameDefaults",
    "ConfigLoader",
    "ConfigurationError",
]
