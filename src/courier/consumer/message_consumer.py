"""Generic async message consumer for Pub/Sub."""

import logging
from typing import Any, Optional

from courier.protocols.handler import AsyncMessageHandler
from courier.protocols.subscriber import Subscriber
from courier.protocols.transform import TransformLike

logger = logging.getLogger(__name__)


class AsyncMessageConsumer:
    """
    Generic asynchronous message consumer for Pub/Sub.

    Responsibilities:
    - Pull batches from the subscription
    - Decode messages into message_type (through an optional transform)
    - Route decoded messages to the async handler
    - Acknowledge the handled messages in one call

    Messages that fail to decode are logged and left unacknowledged, so Pub/Sub
    redelivers them and eventually dead-letters them if the subscription has a
    dead letter policy.

    The handler is responsible for:
    - Domain processing logic
    - Publishing results
    """

    def __init__(
        self,
        subscription: str,
        handler: AsyncMessageHandler,
        message_type: Any,
        subscriber: Subscriber,
        transform: Optional[TransformLike] = None,
        max_messages: int = 10,
        timeout: float = 30,
    ):
        """
        Initialize async message consumer.

        Args:
            subscription: Pub/Sub subscription id or full name
            handler: Async message handler implementing AsyncMessageHandler protocol
            message_type: Type each message is deserialized into
            subscriber: Subscriber pulling and acknowledging messages (e.g. PubSubClient)
            transform: Reshapes each JSON value before deserialization
            max_messages: Upper bound of messages per pull
            timeout: Timeout in seconds for each pull and acknowledge call
        """
        self.subscription = subscription
        self.handler = handler
        self.message_type = message_type
        self.subscriber = subscriber
        self.transform = transform
        self.max_messages = max_messages
        self.timeout = timeout
        self._running = False

    def start(self) -> None:
        """Start the message consumer."""
        self._running = True

    def stop(self) -> None:
        """Stop the message consumer."""
        self._running = False

    async def process_batch(self) -> int:
        """
        Process one batch from the subscription.

        This method:
        1. Pulls up to max_messages from the subscription
        2. Routes every successfully decoded message to the handler, in order
        3. Acknowledges the handled messages

        Returns:
            Number of acknowledged messages
        """
        pulled_messages = await self.subscriber.pull(
            self.subscription,
            self.message_type,
            self.max_messages,
            transform=self.transform,
            timeout=self.timeout,
        )

        ack_ids = []
        for pulled in pulled_messages:
            if not pulled.ok:
                logger.warning(
                    "Skipping message %s (ack id %s, delivery attempt %s): %s",
                    pulled.id,
                    pulled.ack_id,
                    pulled.delivery_attempt,
                    pulled.error,
                )
                continue

            await self.handler.handle(pulled.message)
            ack_ids.append(pulled.ack_id)

        if ack_ids:
            await self.subscriber.acknowledge(self.subscription, ack_ids, timeout=self.timeout)
            logger.info("Acknowledged %d messages from %s", len(ack_ids), self.subscription)

        return len(ack_ids)

    async def run(self) -> None:
        """
        Run the async message consumer loop.

        Continuously processes batches from the subscription while running.
        Call start() before run(), and stop() to exit the loop.
        """
        while self._running:
            await self.process_batch()
