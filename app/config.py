"""Configuration management using Pydantic BaseSettings with JSON file support."""
import json
import logging
import os
from typing import Any, Optional

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def flatten_json_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested JSON config into flat key-value pairs.

    Supports nested structures like:
    {
        "places": {"google_places_api_key": "...", "places_language": "ja"},
        "server": {"server_port": 8080}
    }

    Becomes:
    {"google_places_api_key": "...", "places_language": "ja", "server_port": 8080}

    Keys starting with "_" (like "_comment") are skipped.
    """
    result = {}

    for key, value in config.items():
        # Skip comment keys
        if key.startswith("_"):
            continue

        if isinstance(value, dict):
            result.update(flatten_json_config(value))
        else:
            result[key] = value

    return result


def load_json_config(config_file: Optional[str] = None) -> dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        config_file: Path to JSON config file. If None, checks CONFIG_FILE env var.

    Returns:
        Dictionary of configuration values (flattened), or empty dict if no file found.
    """
    file_path = config_file or os.getenv("CONFIG_FILE")

    if not file_path:
        return {}

    if not os.path.exists(file_path):
        logger.warning(f"Config file not found: {file_path}")
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            config = json.load(f)
            logger.info(f"Loaded configuration from: {file_path}")
            return flatten_json_config(config)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file {file_path}: {e}")
        return {}
    except OSError as e:
        logger.error(f"Error reading config file {file_path}: {e}")
        return {}


class Settings(BaseSettings):
    """Application configuration with JSON file and environment variable support.

    Configuration priority (highest to lowest):
    1. Environment variables
    2. JSON config file (specified via CONFIG_FILE env var)
    3. Default values
    """

    # Google Places API Configuration (legacy JSON endpoints: nearbysearch/details)
    google_places_api_key: str = ""
    google_places_endpoint_base: str = "https://maps.googleapis.com/maps/api/place"
    places_language: str = "ja"
    places_timeout_seconds: float = 10.0

    # Venue clock: open-now and congestion are evaluated in this timezone
    venue_timezone: str = "Asia/Tokyo"

    # Search defaults (walking 5 minutes = 400m)
    default_category: str = "restaurant"
    default_max_distance_m: int = 400

    # Number of newest reviews read for the crowd signal
    review_window: int = 5

    # Server Configuration
    server_port: int = 8080
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def __init__(self, **kwargs):
        """Initialize settings from JSON file and environment variables.

        Priority: env vars > JSON config > defaults
        """
        # Init kwargs beat env vars in BaseSettings, so drop JSON keys the env sets
        json_config = {
            key: value
            for key, value in load_json_config().items()
            if key.upper() not in os.environ
        }

        # kwargs override JSON config
        merged_kwargs = {**json_config, **kwargs}

        super().__init__(**merged_kwargs)

    @property
    def places_enabled(self) -> bool:
        """Whether a Google Places API key is configured."""
        return bool(self.google_places_api_key)


# Global settings instance
settings = Settings()
