"""Base class for notification channels."""

import logging
from abc import ABC, abstractmethod

from alertslack.errors import DeliveryError
from alertslack.models.message import OutboundMessage

logger = logging.getLogger(__name__)


class BaseChannel(ABC):
    """Abstract base class for notification channels."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name for logging."""
        ...

    @abstractmethod
    async def send(self, message: OutboundMessage) -> None:
        """Deliver one message, raising DeliveryError on failure."""
        ...

    async def send_safe(self, message: OutboundMessage) -> DeliveryError | None:
        """Send a message, returning the delivery error instead of raising it."""
        try:
            await self.send(message)
        except DeliveryError as e:
            logger.error(f"Failed to send to {self.name} channel #{message.channel}: {e}")
            return e
        except Exception as e:
            logger.exception(f"Failed to send to {self.name} channel #{message.channel}: {e}")
            return DeliveryError(str(e))
        return None
