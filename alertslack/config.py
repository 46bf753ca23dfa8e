"""Configuration management for alertslack."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are read once at start-up and never change afterwards, so the
    model is frozen and handed explicitly to the formatter and the gateway.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALERTSLACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    log_level: str = Field(default="INFO")

    # Slack delivery
    webhook_url: str = Field(description="Slack incoming webhook URL")
    username: str = Field(default="Grafana")
    default_channel: str = Field(default="alerts")
    request_timeout: float = Field(default=10.0)

    # Alert source
    source_mode: Literal["grafana", "alertmanager"] = Field(default="grafana")
    external_base_url: str = Field(default="")
    alertmanager_name: str = Field(default="alertmanager")
    explore_datasource: str = Field(default="prometheus")

    # Rendering
    silence_buttons: bool = Field(default=False)
    mention_label: str = Field(default="label_app_kubernetes_io_team")
    slack_date_macros: bool = Field(default=False)

    @field_validator("external_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_external_mode(self) -> "Settings":
        if self.source_mode == "alertmanager" and not self.external_base_url:
            raise ValueError("external_base_url is required when source_mode is 'alertmanager'")
        return self

    @property
    def external_mode(self) -> bool:
        return self.source_mode == "alertmanager"


@lru_cache
def get_settings() -> Settings:
    return Settings()
