"""Webhook gateway: decode, render and deliver one alert batch."""

import logging

from pydantic import BaseModel, Field

from alertslack.channels.base import BaseChannel
from alertslack.config import Settings
from alertslack.formatter import render
from alertslack.sources.base import BaseSource
from alertslack.sources.grafana import GrafanaSource

logger = logging.getLogger(__name__)


class DeliveryReport(BaseModel):
    """Outcome of delivering every message rendered from one batch."""

    attempted: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def last_error(self) -> str:
        return self.errors[-1] if self.errors else ""


class WebhookGateway:
    """Relays inbound alert batches to a Slack channel."""

    def __init__(self, settings: Settings, channel: BaseChannel, source: BaseSource | None = None):
        self._settings = settings
        self._channel = channel
        self._source = source or GrafanaSource()

    def resolve_channel(self, channel_name: str | None) -> str:
        if channel_name:
            return channel_name
        logger.info(
            "Slack channel is not specified in 'channel' query param, "
            f"using default '{self._settings.default_channel}' channel"
        )
        return self._settings.default_channel

    async def handle(self, body: bytes | str, channel_name: str | None = None) -> DeliveryReport:
        """Decode a webhook body and deliver the rendered messages.

        Raises:
            DecodeError: the body is not an alert batch; nothing is sent.
        """
        channel = self.resolve_channel(channel_name)
        batch = self._source.parse(body)

        logger.info(
            f"Parsed {self._source.name} webhook: receiver={batch.receiver}, "
            f"status={batch.status}, alerts={len(batch.alerts)}"
        )

        messages = render(batch, channel, self._settings.username, self._settings)

        report = DeliveryReport()
        for message in messages:
            report.attempted += 1
            error = await self._channel.send_safe(message)
            if error is not None:
                report.failed += 1
                report.errors.append(str(error))

        if report.ok:
            logger.info(f"Delivered {report.attempted} message(s) to #{channel}")
        else:
            logger.error(f"Failed to deliver {report.failed} of {report.attempted} message(s) to #{channel}")
        return report
