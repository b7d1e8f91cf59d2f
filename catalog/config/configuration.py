"""Configuration module for the product catalog service.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (local development, verbose logging)
- Default      → config.yaml

Secrets (database connection string, Cloudinary credentials) are loaded
from the .env file. Fails fast with clear error messages if required
configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from catalog/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for the product container."""
    connection_string: str
    database_name: str
    container_name: str


@dataclass(frozen=True)
class CloudinaryConfig:
    """Cloudinary media host configuration.

    Credentials are optional at load time so the rest of the service can run
    without them; the upload relay checks them before every upload.
    """
    cloud_name: Optional[str]
    api_key: Optional[str]
    api_secret: Optional[str]
    folder: str = "products"
    upload_prefix: str = "https://api.cloudinary.com"
    timeout: float = 30.0

    def missing_credentials(self) -> List[str]:
        """Names of the credential environment variables that are not set."""
        credentials = {
            "CLOUDINARY_CLOUD_NAME": self.cloud_name,
            "CLOUDINARY_API_KEY": self.api_key,
            "CLOUDINARY_API_SECRET": self.api_secret,
        }
        return [name for name, value in credentials.items() if not value]


@dataclass(frozen=True)
class ApiConfig:
    """HTTP server configuration."""
    host: str
    port: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    cosmosdb: CosmosDBConfig
    cloudinary: CloudinaryConfig
    api: ApiConfig
    logging: LoggingConfig


def _build_cloudinary_config(yaml_config: dict) -> CloudinaryConfig:
    cloudinary_section = yaml_config.get("cloudinary", {})

    return CloudinaryConfig(
        cloud_name=_get_optional_env("CLOUDINARY_CLOUD_NAME"),
        api_key=_get_optional_env("CLOUDINARY_API_KEY"),
        api_secret=_get_optional_env("CLOUDINARY_API_SECRET"),
        folder=cloudinary_section.get("folder", "products"),
        upload_prefix=cloudinary_section.get("upload_prefix", "https://api.cloudinary.com"),
        timeout=float(cloudinary_section.get("timeout", 30.0)),
    )


def load_cloudinary_config() -> CloudinaryConfig:
    """
    Load the media host configuration on its own.

    Unlike load_config(), this does not require the database connection
    string, so uploads work in processes that never touch Cosmos DB.

    Returns:
        CloudinaryConfig: Media host configuration; credentials may be unset.
    """
    load_dotenv()
    return _build_cloudinary_config(_load_yaml_config())


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from config.yaml for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build CosmosDB config
    cosmosdb_section = yaml_config.get("cosmosdb", {})

    cosmosdb_config = CosmosDBConfig(
        connection_string=_get_required_env("COSMOSDB_CONNECTION_STRING"),
        database_name=cosmosdb_section.get("database_name", "product_catalog"),
        container_name=cosmosdb_section.get("container_name", "products"),
    )

    # Build Cloudinary config
    cloudinary_config = _build_cloudinary_config(yaml_config)

    # Build API config
    api_section = yaml_config.get("api", {})

    try:
        port = int(api_section.get("port", 8000))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid api.port value: {api_section.get('port')!r}") from e

    api_config = ApiConfig(
        host=api_section.get("host", "127.0.0.1"),
        port=port,
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    return AppConfig(
        cosmosdb=cosmosdb_config,
        cloudinary=cloudinary_config,
        api=api_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None
_cloudinary_config: Optional[CloudinaryConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_cloudinary_config() -> CloudinaryConfig:
    """
    Get the media host configuration.

    Reuses the full configuration when it is already loaded; otherwise
    loads only the media host settings, so a missing database connection
    string never blocks uploads.

    Returns:
        CloudinaryConfig: Media host configuration.
    """
    global _cloudinary_config
    if _config is not None:
        return _config.cloudinary
    if _cloudinary_config is None:
        _cloudinary_config = load_cloudinary_config()
    return _cloudinary_config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev' or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env == "dev" else "default"


def reset_config() -> None:
    """Reset the config singletons. Useful for testing."""
    global _config, _cloudinary_config
    _config = None
    _cloudinary_config = None
