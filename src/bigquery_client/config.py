"""Client configuration.

Settings come from keyword overrides, then BIGQUERY_* environment variables
(or a local .env file), then defaults.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bigquery_client.request.builder import DEFAULT_ROOT_URL, DEFAULT_UPLOAD_ROOT_URL


class ClientSettings(BaseSettings):
    """Options shared by every request a client makes."""

    model_config = SettingsConfigDict(
        env_prefix="BIGQUERY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    root_url: str = Field(default=DEFAULT_ROOT_URL, min_length=8)
    upload_root_url: str = Field(default=DEFAULT_UPLOAD_ROOT_URL, min_length=8)
    access_token: str | None = Field(default=None, description="OAuth2 bearer token.")
    api_key: str | None = Field(default=None, description="API key sent as the `key` query parameter.")
    timeout_seconds: float = Field(default=60.0, gt=0)
    user_agent: str = Field(default="bigquery-client/0.1.0", min_length=1)
    max_workers: int = Field(default=4, ge=1, le=64)


def load_options_file(file_path: Path) -> dict[str, Any]:
    """Read client options from a YAML (or JSON) file."""
    data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: expected a mapping of options")
    return data
