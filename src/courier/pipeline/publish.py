"""Encoding of application values into wire messages for publishing."""

import base64
from typing import Any, Iterable, Optional

from pydantic import TypeAdapter

from courier.errors import SerializeError
from courier.models.message import PublishedMessage
from courier.models.request import OutgoingMessage

# Serializes by runtime type: models, dataclasses and plain JSON values
_ANY_ADAPTER: TypeAdapter = TypeAdapter(Any)


def serialize_value(value: Any) -> bytes:
    """Serialize a value to JSON bytes, using field aliases of pydantic models."""
    return _ANY_ADAPTER.dump_json(value, by_alias=True)


def encode_messages(
    messages: Iterable[Any],
    ordering_key: Optional[str] = None,
) -> list[OutgoingMessage]:
    """
    Encode a batch of values into wire messages.

    The whole batch is encoded before anything is returned, so one value that
    cannot be serialized, or one message with non-string attributes, fails the
    whole batch.

    Args:
        messages: PublishedMessage instances or bare values (published without attributes)
        ordering_key: Ordering key for messages that do not carry their own

    Returns:
        Wire messages in input order

    Raises:
        SerializeError: If any value cannot be serialized to JSON or any message has
            attributes that are not a string-to-string mapping
    """
    published = [m if isinstance(m, PublishedMessage) else PublishedMessage(m) for m in messages]

    outgoing = []
    for index, message in enumerate(published):
        try:
            payload = serialize_value(message.value)
            outgoing.append(
                OutgoingMessage(
                    data=base64.b64encode(payload).decode("ascii"),
                    attributes=message.attributes,
                    ordering_key=message.ordering_key or ordering_key,
                )
            )
        except ValueError as exc:
            # pydantic ValidationError is a ValueError
            raise SerializeError(index, message.value) from exc
    return outgoing
