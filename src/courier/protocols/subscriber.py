"""Subscriber protocol definitions."""

from typing import Any, Optional, Protocol, runtime_checkable

from courier.models.message import PulledMessage
from courier.models.response import ReceivedMessage
from courier.protocols.transform import TransformLike


@runtime_checkable
class Subscriber(Protocol):
    """Async protocol for pulling and acknowledging Pub/Sub messages."""

    async def pull(
        self,
        subscription: str,
        message_type: Any,
        max_messages: int,
        transform: Optional[TransformLike] = None,
        require_data: bool = True,
        timeout: Optional[float] = None,
    ) -> list[PulledMessage[Any]]:
        """
        Pull messages from a subscription and decode them into message_type.

        Args:
            subscription: Subscription id or full subscription name
            message_type: Type to deserialize each message into
            max_messages: Upper bound of messages to return
            transform: Reshapes the JSON value before deserialization
            require_data: Whether a message without data is a decode error
            timeout: Timeout in seconds

        Returns:
            One PulledMessage per received message, each carrying its own result
        """
        ...

    async def pull_raw(
        self,
        subscription: str,
        max_messages: int,
        timeout: Optional[float] = None,
    ) -> list[ReceivedMessage]:
        """
        Pull undecoded envelopes from a subscription.

        Args:
            subscription: Subscription id or full subscription name
            max_messages: Upper bound of messages to return
            timeout: Timeout in seconds

        Returns:
            The envelopes as sent by the service
        """
        ...

    async def acknowledge(
        self,
        subscription: str,
        ack_ids: list[str],
        timeout: Optional[float] = None,
    ) -> None:
        """
        Acknowledge messages.

        Args:
            subscription: Subscription id or full subscription name
            ack_ids: Ack ids of pulled messages; one invalid id fails the whole call
            timeout: Timeout in seconds
        """
        ...
