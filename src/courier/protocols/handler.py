"""Message handler protocol definitions."""

from typing import Protocol, Any, runtime_checkable


@runtime_checkable
class AsyncMessageHandler(Protocol):
    """
    Async protocol for message handlers.

    Handlers receive decoded messages and are responsible for:
    - Processing the message asynchronously
    - Handling domain errors internally
    """

    async def handle(self, message: Any) -> None:
        """
        Process a decoded message asynchronously.

        Args:
            message: Decoded message (type depends on the consumer's message_type)

        Note:
            If the handler raises, no message of the current batch is acknowledged
            and Pub/Sub redelivers them once their ack deadline expires.
        """
        ...
