"""
Shared configuration management for the Pokedex translation service.
"""

from typing import Any, Optional

from pydantic import Field, PrivateAttr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8080


def _parse_port(value: Any) -> Optional[int]:
    try:
        port = int(value)
    except (TypeError, ValueError):
        return None
    return port if 0 < port < 65536 else None


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # HTTP listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=DEFAULT_PORT)

    # Upstream services
    pokeapi_endpoint: str = Field(default="https://pokeapi.co/api/v2/")
    shakespeare_translator_endpoint: str = Field(default="https://api.funtranslations.com/")
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Cache
    pokeapi_cache_size: int = Field(default=100, ge=1)

    _rejected_port: Optional[Any] = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def _default_invalid_port(cls, data: Any, handler):
        """Fall back to the default port on an unparsable or out-of-range value.

        The rejected value is kept on the instance so the caller can report it
        once logging is configured.
        """
        rejected = None
        if isinstance(data, dict) and data.get("port") is not None:
            port = _parse_port(data["port"])
            if port is None:
                rejected = data["port"]
            data = {**data, "port": port or DEFAULT_PORT}
        config = handler(data)
        config._rejected_port = rejected
        return config

    @property
    def rejected_port(self) -> Optional[Any]:
        """The PORT value replaced by the default, if any."""
        return self._rejected_port


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, **overrides)
