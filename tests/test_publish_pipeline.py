"""Tests for encoding values into wire messages (encode_messages, serialize_value)."""

import base64
import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from courier.errors import SerializeError
from courier.models.message import PublishedMessage
from courier.models.request import OutgoingMessage, PublishRequest
from courier.pipeline.publish import encode_messages, serialize_value
from courier.pipeline.pull import decode_envelopes
from courier.transform import Identity


class TrackRequested(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    track_id: str
    requested_by: str


@dataclass
class Vote:
    window_id: str
    option: str


def decode_data(message: OutgoingMessage):
    return json.loads(base64.b64decode(message.data))


class TestSerializeValue:
    """Test serialize_value."""

    def test_serializes_plain_json_values(self):
        assert json.loads(serialize_value({"a": [1, 2, None]})) == {"a": [1, 2, None]}

    def test_serializes_models_by_alias(self):
        value = TrackRequested(track_id="t1", requested_by="u1")

        assert json.loads(serialize_value(value)) == {"trackId": "t1", "requestedBy": "u1"}

    def test_serializes_dataclasses(self):
        assert json.loads(serialize_value(Vote("w1", "a"))) == {"window_id": "w1", "option": "a"}

    def test_unsupported_type_raises_value_error(self):
        with pytest.raises(ValueError):
            serialize_value({"handle": object()})


class TestEncodeMessages:
    """Test encode_messages."""

    def test_encodes_bare_values_without_attributes(self):
        [message] = encode_messages([{"text": "t"}])

        assert decode_data(message) == {"text": "t"}
        assert message.attributes is None
        assert message.ordering_key is None

    def test_attaches_attributes_and_ordering_key(self):
        messages = encode_messages(
            [
                PublishedMessage({"text": "a"}, attributes={"type": "Foo"}),
                PublishedMessage({"text": "b"}, ordering_key="own-key"),
            ],
            ordering_key="shared-key",
        )

        assert messages[0].attributes == {"type": "Foo"}
        assert messages[0].ordering_key == "shared-key"
        assert messages[1].attributes is None
        assert messages[1].ordering_key == "own-key"

    def test_preserves_order(self):
        messages = encode_messages([{"n": n} for n in range(5)])

        assert [decode_data(m)["n"] for m in messages] == [0, 1, 2, 3, 4]

    def test_empty_attributes_are_omitted_on_the_wire(self):
        messages = encode_messages([PublishedMessage({"text": "t"}, attributes={})])

        wire = PublishRequest(messages=messages).to_wire()

        assert wire == {"messages": [{"data": messages[0].data}]}

    def test_ordering_key_uses_wire_name(self):
        messages = encode_messages([{"text": "t"}], ordering_key="k")

        assert PublishRequest(messages=messages).to_wire()["messages"][0]["orderingKey"] == "k"

    def test_fails_fast_on_unserializable_value(self):
        """One value that cannot be serialized fails the whole batch."""
        values = [{"text": "ok"}, {"handle": object()}, {"text": "also ok"}]

        with pytest.raises(SerializeError) as exc_info:
            encode_messages(values)

        assert exc_info.value.index == 1
        assert exc_info.value.__cause__ is not None

    def test_fails_fast_on_cyclic_value(self):
        cyclic = {"name": "loop"}
        cyclic["self"] = cyclic

        with pytest.raises(SerializeError):
            encode_messages([{"text": "ok"}, cyclic])

    def test_non_string_attributes_raise_serialize_error(self):
        messages = [PublishedMessage({"text": "ok"}), PublishedMessage({"text": "n"}, attributes={"n": 1})]

        with pytest.raises(SerializeError) as exc_info:
            encode_messages(messages)

        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_round_trip_through_identity(self, make_envelope):
        """Encoding, then decoding with the identity transform, yields the original value."""
        values = [
            TrackRequested(track_id="t1", requested_by="u1"),
            TrackRequested(track_id="t2", requested_by="üñî"),
        ]
        messages = encode_messages(values)
        envelopes = [make_envelope(data=m.data, ack_id=f"ack-{i}") for i, m in enumerate(messages)]

        pulled = decode_envelopes(envelopes, TrackRequested, Identity())

        assert [p.result() for p in pulled] == values
