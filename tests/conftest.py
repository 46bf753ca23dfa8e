from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from alertslack.channels.base import BaseChannel
from alertslack.config import Settings
from alertslack.errors import DeliveryError
from alertslack.models.alert import Alert
from alertslack.models.message import OutboundMessage

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"
STARTS_AT = datetime(2024, 1, 2, 15, 4, tzinfo=timezone.utc)
ENDS_AT = datetime(2024, 1, 2, 16, 30, tzinfo=timezone.utc)


class RecordingChannel(BaseChannel):
    """Channel double that records messages and fails on chosen attempts."""

    def __init__(self, fail_on: set[int] | None = None, crash_on: set[int] | None = None):
        self.sent: list[OutboundMessage] = []
        self.fail_on = fail_on or set()
        self.crash_on = crash_on or set()

    @property
    def name(self) -> str:
        return "recording"

    async def send(self, message: OutboundMessage) -> None:
        attempt = len(self.sent)
        self.sent.append(message)
        if attempt in self.fail_on:
            raise DeliveryError(f"delivery {attempt} rejected")
        if attempt in self.crash_on:
            raise RuntimeError(f"delivery {attempt} crashed")


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        overrides.setdefault("webhook_url", WEBHOOK_URL)
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def make_alert() -> Callable[..., Alert]:
    def _make(summary: str = "Disk full", status: str = "firing", **fields: Any) -> Alert:
        annotations = {"summary": summary}
        annotations.update(fields.pop("annotations", {}))
        fields.setdefault("labels", {"alertname": summary})
        fields.setdefault("starts_at", STARTS_AT)
        return Alert(status=status, annotations=annotations, **fields)

    return _make


def alert_payload(summary: str, status: str = "firing", **extra: Any) -> dict[str, Any]:
    """Raw webhook JSON for one alert, as Grafana posts it."""
    alert = {
        "status": status,
        "labels": {"alertname": summary, "instance": "node-1:9100"},
        "annotations": {"summary": summary},
        "startsAt": "2024-01-02T15:04:00Z",
        "endsAt": "2024-01-02T16:30:00Z" if status == "resolved" else "0001-01-01T00:00:00Z",
        "generatorURL": "http://grafana.local/alerting/grafana/abc/view?orgId=1",
        "fingerprint": "c6eadffa33f0b4bb",
        "silenceURL": "http://grafana.local/alerting/silence/new?alertmanager=grafana",
        "dashboardURL": "",
        "panelURL": "",
        "valueString": "[ var='B' labels={instance=node-1:9100} value=1500 ]",
    }
    alert.update(extra)
    return alert


def batch_payload(*alerts: dict[str, Any]) -> dict[str, Any]:
    return {
        "receiver": "slack-relay",
        "status": "firing",
        "alerts": list(alerts),
        "groupLabels": {"alertname": "Disk full"},
        "commonLabels": {"instance": "node-1:9100"},
        "commonAnnotations": {},
        "externalURL": "http://grafana.local/",
        "version": "1",
        "groupKey": "{}:{alertname=\"Disk full\"}",
        "truncatedAlerts": 0,
        "orgId": 1,
    }
