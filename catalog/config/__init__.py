"""Configuration module."""

from catalog.config.configuration import (
    ApiConfig,
    AppConfig,
    CloudinaryConfig,
    ConfigurationError,
    CosmosDBConfig,
    LoggingConfig,
    get_cloudinary_config,
    get_config,
    get_environment,
    load_cloudinary_config,
    load_config,
    reset_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "CloudinaryConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "LoggingConfig",
    "get_cloudinary_config",
    "get_config",
    "get_environment",
    "load_cloudinary_config",
    "load_config",
    "reset_config",
]
