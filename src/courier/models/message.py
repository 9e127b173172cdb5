"""Application-side message containers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from courier.errors import DecodeError

M = TypeVar("M")


@dataclass
class PublishedMessage:
    """A value to publish plus its optional attributes and ordering key."""

    value: Any
    attributes: Optional[dict[str, str]] = None
    ordering_key: Optional[str] = None


@dataclass
class PulledMessage(Generic[M]):
    """A pulled message with its envelope metadata.

    Exactly one of ``message`` and ``error`` is meaningful: when the decode chain
    failed for this message, ``error`` holds the failure and ``message`` is None.
    """

    ack_id: str
    id: str
    publish_time: datetime
    attributes: dict[str, str] = field(default_factory=dict)
    ordering_key: Optional[str] = None
    delivery_attempt: int = 0
    message: Optional[M] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def result(self) -> M:
        """Return the decoded message, or raise the error that prevented decoding."""
        if self.error is not None:
            raise self.error
        return self.message  # type: ignore[return-value]
