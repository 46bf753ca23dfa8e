"""Slack incoming webhook channel implementation."""

import logging

import httpx

from alertslack.channels.base import BaseChannel
from alertslack.errors import DeliveryError
from alertslack.models.message import OutboundMessage

logger = logging.getLogger(__name__)


async def _log_failed_response(response: httpx.Response) -> None:
    """Dump request and response when Slack rejects a message."""
    if response.is_success:
        return
    await response.aread()
    request = response.request
    logger.error(f"err request {request.method} {request.url}\n{request.content.decode('utf-8', 'replace')}")
    logger.error(f"err response {response.status_code}\n{response.text}")


class SlackChannel(BaseChannel):
    """Slack incoming webhook channel.

    One POST per message, no retries: Grafana redelivers the whole batch
    when the relay answers with an error.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "slack"

    async def send(self, message: OutboundMessage) -> None:
        payload = message.to_payload()

        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            event_hooks={"response": [_log_failed_response]},
        ) as client:
            try:
                response = await client.post(self._webhook_url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise DeliveryError(
                    f"slack webhook returned {e.response.status_code}: {e.response.text}"
                ) from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise DeliveryError(f"slack webhook request failed: {e}") from e

        logger.info(f"Message sent to Slack channel #{message.channel} ({len(message.blocks)} blocks)")
