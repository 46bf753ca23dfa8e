from alertslack.models.alert import Alert, AlertBatch
from alertslack.models.message import OutboundMessage

__all__ = ["Alert", "AlertBatch", "OutboundMessage"]
