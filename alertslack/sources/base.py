"""Base class for alert source parsers."""

from abc import ABC, abstractmethod

from alertslack.models.alert import AlertBatch


class BaseSource(ABC):
    """Abstract base class for alert source parsers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name identifier."""
        ...

    @abstractmethod
    def parse(self, body: bytes | str) -> AlertBatch:
        """Decode a raw webhook body into an AlertBatch.

        Raises:
            DecodeError: the body is not valid JSON or does not match the
                alert batch shape.
        """
        ...
