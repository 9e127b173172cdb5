"""Shared fixtures for courier unit tests."""

import httpx
import pytest

from courier.auth import StaticTokenSource
from courier.client import PubSubClient
from courier.models.response import ReceivedMessage

PUBLISH_TIME = "2022-02-20T22:02:20.123456789Z"


@pytest.fixture
def make_envelope():
    """Build a pulled envelope from wire-shaped fields."""

    def factory(
        data=None,
        attributes=None,
        ack_id="ack-1",
        message_id="msg-1",
        ordering_key=None,
        delivery_attempt=None,
    ) -> ReceivedMessage:
        message = {"messageId": message_id, "publishTime": PUBLISH_TIME}
        if data is not None:
            message["data"] = data
        if attributes is not None:
            message["attributes"] = attributes
        if ordering_key is not None:
            message["orderingKey"] = ordering_key
        envelope = {"ackId": ack_id, "message": message}
        if delivery_attempt is not None:
            envelope["deliveryAttempt"] = delivery_attempt
        return ReceivedMessage.model_validate(envelope)

    return factory


@pytest.fixture
def make_client():
    """Build a PubSubClient whose requests are answered by a RecordingTransport."""

    def factory(transport, timeout=None) -> PubSubClient:
        return PubSubClient(
            project_id="test-project",
            token_source=StaticTokenSource("test-token"),
            base_url="https://pubsub.test/",
            timeout=timeout,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(transport)),
        )

    return factory
