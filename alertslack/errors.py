"""Error types raised while relaying alerts."""


class RelayError(Exception):
    """Base class for relay errors."""


class DecodeError(RelayError):
    """Inbound request body is not a valid alert batch."""


class DeliveryError(RelayError):
    """A single message could not be delivered to Slack."""


class BestEffortParseError(RelayError):
    """An auxiliary link could not be built from the alert data."""


class HumanizeError(RelayError):
    """Numeric text could not be parsed for display."""
