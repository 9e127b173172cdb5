"""Decoding of pulled envelopes into typed messages.

Each envelope goes through base64 decode, JSON parse, transform and typed
deserialization. A failure in any step is captured on that envelope's
PulledMessage; it never affects the other envelopes of the batch.
"""

import base64
import json
import logging
from typing import Any, Iterable, Optional

from pydantic import TypeAdapter

from courier.errors import (
    Base64DecodeError,
    DecodeError,
    MalformedJsonError,
    NoDataError,
    TransformFailedError,
    TypeMismatchError,
)
from courier.models.message import PulledMessage
from courier.models.response import ReceivedMessage
from courier.protocols.transform import TransformLike
from courier.transform import Identity

logger = logging.getLogger(__name__)


def resolve_transform(transform: Optional[TransformLike]) -> Any:
    """Turn a Transform, a plain function or None into a callable ``(envelope, value)``."""
    if transform is None:
        return Identity().apply
    apply = getattr(transform, "apply", None)
    if callable(apply):
        return apply
    if callable(transform):
        return transform
    raise TypeError(f"not a transform: {transform!r}")


class EnvelopeDecoder:
    """
    Decodes envelopes into one target type with one transform.

    Args:
        message_type: Target type, anything pydantic can validate
        transform: Reshapes the JSON value before deserialization, identity if None
        require_data: Whether a message without data is a NoDataError; when False
            the value passed to the transform is None (JSON null)
    """

    def __init__(
        self,
        message_type: Any,
        transform: Optional[TransformLike] = None,
        require_data: bool = True,
    ):
        self.message_type = message_type
        self.require_data = require_data
        self._adapter: TypeAdapter = TypeAdapter(message_type)
        self._apply = resolve_transform(transform)
        self._type_name = getattr(message_type, "__name__", None) or repr(message_type)

    def decode(self, envelope: ReceivedMessage) -> PulledMessage[Any]:
        message = None
        error = None
        try:
            message = self._decode(envelope)
        except DecodeError as exc:
            logger.debug("Decoding message %s failed: %s", envelope.message.id, exc)
            error = exc

        return PulledMessage(
            ack_id=envelope.ack_id,
            id=envelope.message.id,
            publish_time=envelope.message.publish_time,
            attributes=envelope.message.attributes,
            ordering_key=envelope.message.ordering_key,
            delivery_attempt=envelope.delivery_attempt,
            message=message,
            error=error,
        )

    def decode_all(self, envelopes: Iterable[ReceivedMessage]) -> list[PulledMessage[Any]]:
        return [self.decode(envelope) for envelope in envelopes]

    def _decode(self, envelope: ReceivedMessage) -> Any:
        data = envelope.message.data
        if data is None:
            if self.require_data:
                raise NoDataError()
            value = None
        else:
            value = _parse_json(_decode_base64(data))

        try:
            value = self._apply(envelope, value)
        except Exception as exc:
            raise TransformFailedError() from exc

        try:
            return self._adapter.validate_python(value)
        except Exception as exc:
            # custom validators are not limited to ValidationError
            raise TypeMismatchError(self._type_name) from exc


def decode_envelope(
    envelope: ReceivedMessage,
    message_type: Any,
    transform: Optional[TransformLike] = None,
    require_data: bool = True,
) -> PulledMessage[Any]:
    return EnvelopeDecoder(message_type, transform, require_data).decode(envelope)


def decode_envelopes(
    envelopes: Iterable[ReceivedMessage],
    message_type: Any,
    transform: Optional[TransformLike] = None,
    require_data: bool = True,
) -> list[PulledMessage[Any]]:
    """Decode a batch of envelopes into message_type, one PulledMessage each, in order."""
    return EnvelopeDecoder(message_type, transform, require_data).decode_all(envelopes)


def _decode_base64(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except ValueError as exc:
        raise Base64DecodeError() from exc


def _parse_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise MalformedJsonError() from exc
