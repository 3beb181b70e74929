"""Configuration management for spiclient.

Loads settings from a YAML configuration file with environment variable
overrides. Supports .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
)

from spiclient.domain.models import OaepHash, Padding, ResponseMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/spiclient.yaml")


class ConnectionConfig(BaseModel):
    """Where and how the remote command client connects.

    Hostname and port are taken as given; no range checks are applied.
    """

    hostname: str = Field(default="localhost")
    port: int = Field(default=8443)
    insecure_transport: bool = Field(
        default=True, description="Accept self-signed or unverifiable server certificates"
    )
    exec_path: str = Field(default="/api/exec")
    timeout: float | None = Field(default=None, description="Seconds; None waits indefinitely")
    response_mode: ResponseMode = Field(default=ResponseMode.PLAINTEXT)


class CodecConfig(BaseModel):
    padding: Padding = Field(default=Padding.OAEP)
    oaep_hash: OaepHash = Field(default="SHA1")


class KeysConfig(BaseModel):
    public_key_path: Path = Field(default=Path("certs/public_key.pem"))
    private_key_path: Path = Field(default=Path("certs/private_key.pem"))
    private_key_passphrase: SecretStr | None = Field(default=None)

    def passphrase_bytes(self) -> bytes | None:
        if self.private_key_passphrase is None:
            return None
        value = self.private_key_passphrase.get_secret_value()
        return value.encode("utf-8") if value else None


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for spiclient.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "SPICLIENT_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    keys: KeysConfig = Field(default_factory=KeysConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs and rank below the environment.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
