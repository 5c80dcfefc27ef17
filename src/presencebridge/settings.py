# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Application settings.

Values come from (highest priority first) keyword arguments, environment
variables prefixed with ``PRESENCEBRIDGE_``, and the JSON config file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from presencebridge.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_CACHE_TTL_HOURS,
    DEFAULT_IGNORED_GAMES,
    DEFAULT_IO_TIMEOUT_S,
    DEFAULT_SCAN_INTERVAL_S,
    DETECTABLE_URL_TEMPLATE,
)
from presencebridge.paths import default_cache_file, default_config_file


class Settings(BaseSettings):
    log_level: str = "INFO"
    scan_interval: float = Field(default=DEFAULT_SCAN_INTERVAL_S, gt=0)
    ignored_games: list[str] = Field(default_factory=list)
    api_version: int = Field(default=DEFAULT_API_VERSION, ge=1)
    cache_ttl_hours: float = Field(default=DEFAULT_CACHE_TTL_HOURS, ge=0)
    cache_file: Path = Field(default_factory=default_cache_file)
    socket_path: Path | None = None
    io_timeout: float = Field(default=DEFAULT_IO_TIMEOUT_S, gt=0)
    clear_activity_on_stop: bool = True

    model_config = SettingsConfigDict(
        env_prefix="PRESENCEBRIDGE_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Resolved per instantiation so PRESENCEBRIDGE_CONFIG can point elsewhere.
        json_settings = JsonConfigSettingsSource(settings_cls, json_file=default_config_file())
        return (init_settings, env_settings, json_settings)

    @property
    def detectable_url(self) -> str:
        return DETECTABLE_URL_TEMPLATE.format(version=self.api_version)

    def ignored_set(self) -> frozenset[str]:
        """Built-in ignore list merged with the configured one."""
        return DEFAULT_IGNORED_GAMES | frozenset(self.ignored_games)
