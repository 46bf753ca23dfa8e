"""Grafana / Alertmanager webhook parser."""

import logging

from pydantic import ValidationError

from alertslack.errors import DecodeError
from alertslack.models.alert import AlertBatch
from alertslack.sources.base import BaseSource

logger = logging.getLogger(__name__)


class GrafanaSource(BaseSource):
    """Parser for Grafana Unified Alerting and Alertmanager webhooks.

    Both systems post the same envelope; Grafana adds silenceURL,
    valueString and the dashboard/panel links, which default to empty for
    plain Alertmanager payloads.
    """

    @property
    def name(self) -> str:
        return "grafana"

    def parse(self, body: bytes | str) -> AlertBatch:
        try:
            batch = AlertBatch.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"invalid alert batch: {e}") from e

        logger.debug(
            f"Decoded {self.name} batch: receiver={batch.receiver}, "
            f"status={batch.status}, alerts={len(batch.alerts)}"
        )
        return batch
