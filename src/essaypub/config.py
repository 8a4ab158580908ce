"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (ESSAYPUB__STORAGE__BUCKET=my-bucket)
  2. essaypub.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. Storage
credentials are not part of these settings; they come from the standard
AWS environment variables (see publisher.build_s3_client).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_TEMPLATE_URL = (
    "https://docs.google.com/document/d/e/"
    "2PACX-1vQA5iy-l8G6v90lncp-5ZE4ugE03oE3TvDJH44pDqnimm4wefn8aEaF5eCTxXV14b6yNmAknCYOxbka/pub"
)
DEFAULT_ESSAY_URL = (
    "https://docs.google.com/document/d/e/"
    "2PACX-1vQ2jncgUpg-CQ4DzKl9PgqNeU5E_ZfoxJugms8XMX71T8HZfZsZDIGX9q_Ie6g6CD-Z5HScxNnR5Blw/pub"
)


def _find_config_file() -> str | None:
    """Return the path of the first essaypub.yaml found, or None."""
    candidates = [
        Path("essaypub.yaml"),
        Path(platformdirs.user_config_dir("essaypub")) / "essaypub.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SourceSettings(BaseModel):
    template_url: str = DEFAULT_TEMPLATE_URL
    essay_url: str = DEFAULT_ESSAY_URL
    # When true, a missing essay URL argument is a usage error instead of
    # falling back to essay_url.
    require_essay_url: bool = False


class ExtractionSettings(BaseModel):
    header_id: str = "header"
    footer_id: str = "footer"
    body_placeholder: str = "HTML_GOES_HERE"
    title_placeholder: str = "TITLE_GOES_HERE"


class HttpSettings(BaseModel):
    timeout_seconds: float = 30.0
    user_agent: str = "essaypub/1.0"


class RetrySettings(BaseModel):
    max_retries: int = 3
    delay_ms: int = 10


class StorageSettings(BaseModel):
    bucket: str = "brlknd"
    region: str = "us-east-1"
    public_base_url: str = "https://s3.amazonaws.com"
    endpoint_url: str | None = None
    client_max_attempts: int = 3


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: ESSAYPUB__RETRY__MAX_RETRIES=5
        env_prefix="ESSAYPUB__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    sources: SourceSettings = SourceSettings()
    extraction: ExtractionSettings = ExtractionSettings()
    http: HttpSettings = HttpSettings()
    retry: RetrySettings = RetrySettings()
    storage: StorageSettings = StorageSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
