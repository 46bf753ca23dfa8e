"""Inbound alert batch models (Grafana / Alertmanager webhook shape)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

RESOLVED = "resolved"


def _none_to_empty(value: Any) -> Any:
    return {} if value is None else value


class Alert(BaseModel):
    """A single alert record inside a batch."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    status: str = Field(default="firing")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: datetime | None = Field(default=None, alias="startsAt")
    ends_at: datetime | None = Field(default=None, alias="endsAt")
    generator_url: str = Field(default="", alias="generatorURL")
    fingerprint: str = Field(default="")
    silence_url: str = Field(default="", alias="silenceURL")
    dashboard_url: str = Field(default="", alias="dashboardURL")
    panel_url: str = Field(default="", alias="panelURL")
    value_string: str = Field(default="", alias="valueString")
    image_url: str = Field(default="", alias="imageURL")
    embedded_image: str = Field(default="", alias="embeddedImage")

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _null_maps(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator(
        "generator_url",
        "silence_url",
        "dashboard_url",
        "panel_url",
        "value_string",
        "image_url",
        "embedded_image",
        "fingerprint",
        mode="before",
    )
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("ends_at", mode="after")
    @classmethod
    def _zero_end_is_unset(cls, value: datetime | None) -> datetime | None:
        # Grafana sends 0001-01-01T00:00:00Z for alerts that are still firing
        if value is not None and value.year <= 1:
            return None
        return value

    @property
    def is_resolved(self) -> bool:
        return self.status == RESOLVED

    @property
    def has_ended(self) -> bool:
        return self.ends_at is not None

    @property
    def summary(self) -> str:
        return self.annotations.get("summary", "")

    @property
    def description(self) -> str:
        return self.annotations.get("description", "")

    @property
    def runbook_url(self) -> str:
        return self.annotations.get("runbook_url", "")


class AlertBatch(BaseModel):
    """One webhook notification carrying a group of alerts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    receiver: str = Field(default="")
    status: str = Field(default="")
    alerts: list[Alert] = Field(default_factory=list)

    group_labels: dict[str, str] = Field(default_factory=dict, alias="groupLabels")
    common_labels: dict[str, str] = Field(default_factory=dict, alias="commonLabels")
    common_annotations: dict[str, str] = Field(default_factory=dict, alias="commonAnnotations")

    external_url: str = Field(default="", alias="externalURL")

    version: str = Field(default="")
    group_key: str = Field(default="", alias="groupKey")
    truncated_alerts: int = Field(default=0, alias="truncatedAlerts")
    org_id: int = Field(default=0, alias="orgId")

    @field_validator("alerts", "group_labels", "common_labels", "common_annotations", mode="before")
    @classmethod
    def _null_collections(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "alerts" else {}
        return value
