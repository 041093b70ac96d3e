"""Configuration management for the subtitle pipeline."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from subtitle_pipeline.exceptions import ConfigurationError, InvalidSettingError

# Load .env if exists (local dev only, no-op when deployed)
load_dotenv()

CONFIG_DIR = Path(__file__).parent.parent.parent / ".config"


def _load_json_config(filename: str) -> dict:
    """Load configuration from JSON file in .config directory."""
    config_path = CONFIG_DIR / filename
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    return {}


def _get_config(key: str, default: str = "") -> str:
    """Get config value with priority: env var > secrets json > dev json > default."""
    env_value = os.getenv(key.upper())
    if env_value:  # Treat empty string as missing
        return env_value

    environment = os.getenv("APP_ENV", "dev")
    secrets = _load_json_config(f"config.secrets.{environment}.json")
    if key.lower() in secrets:
        return str(secrets[key.lower()])

    public = _load_json_config(f"config.{environment}.json")
    if key.lower() in public:
        return str(public[key.lower()])

    return default


def _setting(key: str, default: str = ""):
    return field(default_factory=lambda: _get_config(key, default))


def _parse_number(key: str, default: str, cast):
    raw = _get_config(key, default)
    try:
        return cast(raw)
    except ValueError as e:
        raise InvalidSettingError(key, raw, f"a number, e.g. {default}") from e


def _number_setting(key: str, default: str, cast=int):
    return field(default_factory=lambda: _parse_number(key, default, cast))


@dataclass
class Config:
    """Pipeline configuration loaded from env vars or JSON files."""

    # Storage (S3-compatible)
    storage_endpoint: str = _setting("STORAGE_ENDPOINT")
    storage_access_key_id: str = _setting("STORAGE_ACCESS_KEY_ID")
    storage_secret_access_key: str = _setting("STORAGE_SECRET_ACCESS_KEY")
    storage_region: str = _setting("STORAGE_REGION", "us-east-1")
    storage_bucket: str = _setting("STORAGE_BUCKET", "audio-uploads")
    upload_url_expires_seconds: int = _number_setting("UPLOAD_URL_EXPIRES_SECONDS", "600")
    download_url_expires_seconds: int = _number_setting("DOWNLOAD_URL_EXPIRES_SECONDS", "900")

    # Google Gemini (.config/config.dev.json supplies the dev model name)
    google_api_key: str = _setting("GOOGLE_API_KEY")
    gemini_model: str = _setting("GEMINI_MODEL")
    gemini_temperature: float = _number_setting("GEMINI_TEMPERATURE", "0.2", float)

    # "inline" sends the object bytes, "uri" sends a pre-signed GET URL
    media_handoff: str = _setting("MEDIA_HANDOFF", "inline")

    def missing(self) -> list[str]:
        """Return the names of required variables that are not set."""
        required = {
            "STORAGE_ENDPOINT": self.storage_endpoint,
            "STORAGE_ACCESS_KEY_ID": self.storage_access_key_id,
            "STORAGE_SECRET_ACCESS_KEY": self.storage_secret_access_key,
            "GOOGLE_API_KEY": self.google_api_key,
            "GEMINI_MODEL": self.gemini_model,
        }
        return [name for name, value in required.items() if not value]

    def validate(self) -> None:
        """Validate required configuration."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(missing)

        if self.media_handoff not in ("inline", "uri"):
            raise InvalidSettingError("MEDIA_HANDOFF", self.media_handoff, "'inline' or 'uri'")

    def validate_storage(self) -> None:
        """Validate only the storage settings (the upload endpoint needs no model)."""
        missing = [
            name
            for name in self.missing()
            if name.startswith("STORAGE_")
        ]
        if missing:
            raise ConfigurationError(missing)


@dataclass(frozen=True)
class DriverSettings:
    """Client-side settings for talking to the pipeline endpoints."""

    api_base_url: str = "http://localhost:8000"
    upload_url_path: str = "/upload-url"
    transcribe_path: str = "/transcribe"
    max_file_size_bytes: int = 50 * 1024 * 1024
    timeout: float = 300.0
