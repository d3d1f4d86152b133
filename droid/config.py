"""Central configuration loaded from config.yaml / .env / environment."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Later files take priority, so a config.yaml in the working directory
# overrides the one in ~/.droid.
CONFIG_FILES = [
    Path.home() / ".droid" / "config.yaml",
    Path("config.yaml"),
]

EPOCHS_PATH = "/osmosis/epochs/v1beta1/epochs"


class DroidSettings(BaseSettings):
    """Settings for the droid sidecar."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        yaml_file=CONFIG_FILES,
    )

    # Upstream node
    rpc_endpoint: str = "http://0.0.0.0:26657"
    lcd_endpoint: str = "http://0.0.0.0:1317"

    # Bind address
    listen_host: str = "0.0.0.0"
    listen_port: int = 8080

    # Status fetch: 48 attempts * 5s ~= 4 minutes before giving up
    status_retry_attempts: int = 48
    status_retry_delay: float = 5.0
    request_timeout: float = 10.0

    # Epoch tolerance
    epoch_identifier: str = "day"
    epoch_grace_minutes: int = 35
    epoch_lead_minutes: int = 5

    # Blocks older than this are stale outside the epoch window
    block_stale_seconds: int = 60

    # Logging
    log_level: str = "INFO"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @property
    def status_url(self) -> str:
        return self.rpc_endpoint.rstrip("/") + "/status"

    @property
    def epochs_url(self) -> str:
        return self.lcd_endpoint.rstrip("/") + EPOCHS_PATH


settings = DroidSettings()
