"""Pull and publish pipelines between wire envelopes and application values."""

from courier.pipeline.publish import encode_messages, serialize_value
from courier.pipeline.pull import (
    EnvelopeDecoder,
    decode_envelope,
    decode_envelopes,
    resolve_transform,
)

__all__ = [
    "EnvelopeDecoder",
    "decode_envelope",
    "decode_envelopes",
    "encode_messages",
    "resolve_transform",
    "serialize_value",
]
