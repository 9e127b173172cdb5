"""Response bodies returned by the Pub/Sub REST API."""

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from courier.models.base import CamelCaseModel

# Pub/Sub timestamps carry nanoseconds; datetime holds microseconds.
_FRACTION = re.compile(r"(\.\d{6})\d+")


class Message(CamelCaseModel):
    """A pulled message matching the GCP Pub/Sub ``PubsubMessage`` structure.

    ``id`` is stable across redeliveries, unlike the ack id of the envelope.
    """

    id: str = Field(alias="messageId")
    data: Optional[str] = None
    attributes: dict[str, str] = Field(default_factory=dict)
    publish_time: datetime
    ordering_key: Optional[str] = None

    @field_validator("publish_time", mode="before")
    @classmethod
    def _truncate_nanoseconds(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _FRACTION.sub(r"\1", value)
        return value

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value: Any) -> Any:
        return {} if value is None else value


class ReceivedMessage(CamelCaseModel):
    """Envelope around a pulled message: the ack handle plus delivery metadata."""

    ack_id: str
    message: Message
    # The Pub/Sub emulator does not send this field
    delivery_attempt: int = 0


class PullResponse(CamelCaseModel):
    """Response of a pull; the service omits ``receivedMessages`` when nothing is pending."""

    received_messages: list[ReceivedMessage] = Field(default_factory=list)


class PublishResponse(CamelCaseModel):
    """Response of a publish: one service-assigned id per published message, in order."""

    message_ids: list[str]
