"""
Configuration Management for querysync

🔧 Unified Configuration System:
Environment-aware settings for logging and for the defaults new contexts
start from. Configuration can come from code, a dictionary, a JSON file
or ``QUERYSYNC_*`` environment variables.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None


@dataclass
class ContextConfig:
    """Defaults applied to newly created contexts"""
    default_page: int = 1
    default_items_per_page: int = 10


@dataclass
class ApplicationConfig:
    """Complete querysync configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    context: ContextConfig = field(default_factory=ContextConfig)

    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'ApplicationConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        for section in ("logging", "context"):
            for key, value in config_dict.get(section, {}).items():
                target = getattr(config, section)
                if hasattr(target, key):
                    setattr(target, key, value)

        config.custom.update(config_dict.get("custom", {}))
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> 'ApplicationConfig':
        """Load configuration from a JSON file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix != '.json':
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        with open(config_path) as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_environment(cls) -> 'ApplicationConfig':
        """Create configuration from environment variables"""
        env_name = os.getenv('QUERYSYNC_ENV', 'development')
        config = cls.for_environment(Environment(env_name))

        if os.getenv('QUERYSYNC_DEBUG'):
            config.debug = os.getenv('QUERYSYNC_DEBUG').lower() == 'true'

        if os.getenv('QUERYSYNC_LOG_LEVEL'):
            config.logging.level = os.getenv('QUERYSYNC_LOG_LEVEL').upper()

        if os.getenv('QUERYSYNC_ITEMS_PER_PAGE'):
            config.context.default_items_per_page = int(os.getenv('QUERYSYNC_ITEMS_PER_PAGE'))

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file_path": self.logging.file_path
            },
            "context": {
                "default_page": self.context.default_page,
                "default_items_per_page": self.context.default_items_per_page
            },
            "custom": self.custom
        }


# Global configuration management
_current_config: Optional[ApplicationConfig] = None


def set_config(config: Optional[ApplicationConfig]):
    """Set the global configuration (None resets to environment defaults)"""
    global _current_config
    _current_config = config


def get_config() -> ApplicationConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = ApplicationConfig.from_environment()

    return _current_config


def configure_logging(config: Optional[ApplicationConfig] = None) -> logging.Logger:
    """
    Apply a LoggingConfig to the ``querysync`` logger.

    Args:
        config: Configuration to apply; defaults to ``get_config()``

    Returns:
        The configured package logger
    """
    config = config or get_config()
    logger = logging.getLogger("querysync")
    logger.setLevel(config.logging.level)

    if config.logging.file_path:
        handler: logging.Handler = logging.FileHandler(config.logging.file_path)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)

    return logger


__all__ = [
    "ApplicationConfig", "Environment", "LoggingConfig", "ContextConfig",
    "set_config", "get_config", "configure_logging"
]
