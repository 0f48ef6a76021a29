"""
Configuration Management for the Visit Counter

Settings come from the environment. Every value has a fallback so both
processes start with no configuration at all.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional

from .core.errors import ConfigError


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class ApiConfig:
    """Counter service configuration"""
    host: str = "0.0.0.0"
    port: int = 4000
    database_url: str = "sqlite+aiosqlite:///./visits.db"
    database_echo: bool = False


@dataclass
class WebConfig:
    """Client application and proxy configuration"""
    host: str = "0.0.0.0"
    port: int = 3000
    api_url: str = "http://api:4000"
    proxy_prefix: str = "/backend"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


_LEVEL_BY_ENVIRONMENT = {
    Environment.DEVELOPMENT: "DEBUG",
    Environment.TESTING: "WARNING",
    Environment.PRODUCTION: "INFO",
}


def _parse_port(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"{name} must be between 1 and 65535, got {port}")
    return port


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def _parse_log_level(env: Mapping[str, str], default: str) -> str:
    level = (env.get("LOG_LEVEL") or default).strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {level!r}")
    return level


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ApplicationConfig:
    """Complete application configuration"""
    environment: Environment = Environment.DEVELOPMENT
    api: ApiConfig = field(default_factory=ApiConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'ApplicationConfig':
        """
        Build configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigError: if APP_ENV, LOG_LEVEL or a port variable is invalid
        """
        env = os.environ if env is None else env

        try:
            environment = Environment(env.get("APP_ENV", Environment.DEVELOPMENT.value).lower())
        except ValueError:
            raise ConfigError(f"APP_ENV must be one of {[e.value for e in Environment]}")

        config = cls(environment=environment)
        host = env.get("HOST")

        config.api.port = _parse_port(env, "PORT_API", config.api.port)
        config.api.database_url = env.get("DATABASE_URL") or config.api.database_url
        config.api.database_echo = _parse_bool(env.get("DATABASE_ECHO"))

        config.web.port = _parse_port(env, "PORT_WEB", config.web.port)
        config.web.api_url = (env.get("API_URL") or config.web.api_url).rstrip("/")

        if host:
            config.api.host = host
            config.web.host = host

        config.logging.level = _parse_log_level(env, _LEVEL_BY_ENVIRONMENT[environment])
        return config


def configure_logging(config: LoggingConfig) -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(level=config.level, format=config.format, force=True)
