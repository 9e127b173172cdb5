"""Publisher protocol definitions."""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from courier.models.request import OutgoingMessage


@runtime_checkable
class Publisher(Protocol):
    """Async protocol for publishing messages to Pub/Sub topics."""

    async def publish(
        self,
        topic: str,
        messages: Iterable[Any],
        ordering_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> list[str]:
        """
        Serialize and publish a batch of messages to a topic.

        Args:
            topic: Topic id or full topic name ('projects/PROJECT_ID/topics/TOPIC_NAME')
            messages: Values or PublishedMessage instances
            ordering_key: Ordering key for messages that do not carry their own
            timeout: Timeout in seconds

        Returns:
            Message ids assigned by the service, one per message, in order
        """
        ...

    async def publish_raw(
        self,
        topic: str,
        messages: list[OutgoingMessage],
        timeout: Optional[float] = None,
    ) -> list[str]:
        """
        Publish already encoded wire messages to a topic.

        Args:
            topic: Topic id or full topic name
            messages: Wire messages with base64 encoded data
            timeout: Timeout in seconds

        Returns:
            Message ids assigned by the service, one per message, in order
        """
        ...
