"""Configuration management for spiclient.

Loads and validates YAML-based configuration with Pydantic models.
Environment variables prefixed with ``SPICLIENT_`` override file values.
"""

from spiclient.config.settings import (
    CodecConfig,
    ConnectionConfig,
    KeysConfig,
    LoggingConfig,
    Settings,
    load_settings,
)

__all__ = [
    "CodecConfig",
    "ConnectionConfig",
    "KeysConfig",
    "LoggingConfig",
    "Settings",
    "load_settings",
]
