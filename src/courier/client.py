"""Async client for the Google Cloud Pub/Sub REST API."""

import logging
from datetime import timedelta
from typing import Any, Iterable, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from courier.auth import ServiceAccountTokenSource, TokenSource, load_service_account
from courier.config import DEFAULT_BASE_URL, PubSubSettings
from courier.errors import (
    HttpTransportError,
    InitializationError,
    RequestTimeoutError,
    UnexpectedResponseError,
    UnexpectedStatusCodeError,
)
from courier.models.base import CamelCaseModel
from courier.models.error import ErrorResponse
from courier.models.message import PulledMessage
from courier.models.request import AcknowledgeRequest, OutgoingMessage, PublishRequest, PullRequest
from courier.models.response import PublishResponse, PullResponse, ReceivedMessage
from courier.pipeline.publish import encode_messages
from courier.pipeline.pull import EnvelopeDecoder
from courier.protocols.transform import TransformLike

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=CamelCaseModel)

MAX_ERROR_TEXT = 2048


class PubSubClient:
    """
    Async Pub/Sub client implementing the Publisher and Subscriber protocols.

    Calls are independent of each other and may run concurrently. There is no
    retry; a failed call raises and the caller decides whether to repeat it.

    Topics and subscriptions are given either as short ids, which are resolved
    against ``project_id``, or as full names ('projects/PROJECT_ID/topics/TOPIC').
    """

    def __init__(
        self,
        project_id: str,
        token_source: TokenSource,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            project_id: Project that short topic and subscription ids belong to
            token_source: Provides bearer tokens for each request
            base_url: Service endpoint, e.g. the address of a local emulator
            timeout: Default timeout in seconds for calls that do not pass one; if None
                as well, requests have no timeout, or the timeout of a shared http_client
            http_client: Shared httpx client; if None the client creates and owns one
        """
        self.project_id = project_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token_source = token_source
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=None)

    @classmethod
    def from_service_account_file(
        cls,
        key_path: str,
        refresh_buffer: timedelta = timedelta(seconds=30),
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "PubSubClient":
        """
        Create a client authenticating with a service account key file.

        Tokens are refreshed ``refresh_buffer`` ahead of their expiry.

        Raises:
            InitializationError: If the key file is missing or malformed
        """
        credentials = load_service_account(key_path)
        return cls(
            project_id=credentials.project_id,
            token_source=ServiceAccountTokenSource(credentials, refresh_buffer),
            base_url=base_url,
            timeout=timeout,
            http_client=http_client,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[PubSubSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "PubSubClient":
        """Create a client from PubSubSettings, read from the environment if not given."""
        settings = settings or PubSubSettings()
        if not settings.key_path:
            raise InitializationError("no service account key configured (PUB_SUB_KEY_PATH)")
        return cls.from_service_account_file(
            settings.key_path,
            refresh_buffer=timedelta(seconds=settings.refresh_buffer_seconds),
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            http_client=http_client,
        )

    async def __aenter__(self) -> "PubSubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def __repr__(self) -> str:
        return f"PubSubClient(project_id={self.project_id!r}, base_url={self.base_url!r})"

    # Names and URLs

    def topic_name(self, topic: str) -> str:
        if topic.startswith("projects/"):
            return topic
        return f"projects/{self.project_id}/topics/{topic}"

    def subscription_name(self, subscription: str) -> str:
        if subscription.startswith("projects/"):
            return subscription
        return f"projects/{self.project_id}/subscriptions/{subscription}"

    def _url(self, name: str, action: str) -> str:
        return f"{self.base_url}/v1/{name}:{action}"

    # Publishing

    async def publish(
        self,
        topic: str,
        messages: Iterable[Any],
        ordering_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> list[str]:
        """
        Serialize and publish a batch of messages.

        Args:
            topic: Topic id or full topic name
            messages: PublishedMessage instances or bare values
            ordering_key: Ordering key for messages that do not carry their own
            timeout: Timeout in seconds, the client default if None

        Returns:
            Message ids assigned by the service, one per message, in order

        Raises:
            SerializeError: If any message cannot be serialized; nothing is sent
        """
        outgoing = encode_messages(messages, ordering_key)
        return await self.publish_raw(topic, outgoing, timeout)

    async def publish_raw(
        self,
        topic: str,
        messages: list[OutgoingMessage],
        timeout: Optional[float] = None,
    ) -> list[str]:
        """Publish already encoded wire messages; returns their message ids in order."""
        if not messages:
            return []

        url = self._url(self.topic_name(topic), "publish")
        response = await self.send_request(url, PublishRequest(messages=messages), timeout)
        message_ids = _parse(response, PublishResponse).message_ids
        if len(message_ids) != len(messages):
            raise UnexpectedResponseError(
                f"expected {len(messages)} message ids from Pub/Sub service, got {len(message_ids)}"
            )

        logger.debug("Published messages %s to %s", message_ids, topic)
        return message_ids

    # Pulling and acknowledging

    async def pull(
        self,
        subscription: str,
        message_type: Type[Any],
        max_messages: int,
        transform: Optional[TransformLike] = None,
        require_data: bool = True,
        timeout: Optional[float] = None,
    ) -> list[PulledMessage[Any]]:
        """
        Pull messages and decode each into message_type.

        A message that fails to decode does not fail the call; its PulledMessage
        carries the error instead, so the others can still be acknowledged.

        Args:
            subscription: Subscription id or full subscription name
            message_type: Type to deserialize into, anything pydantic can validate
            max_messages: Upper bound of messages to return, at least 1
            transform: Reshapes the JSON value before deserialization, identity if None
            require_data: Whether a message without data is a NoDataError
            timeout: Timeout in seconds, the client default if None

        Returns:
            One PulledMessage per received message, in the order the service sent them
        """
        decoder = EnvelopeDecoder(message_type, transform, require_data)
        envelopes = await self.pull_raw(subscription, max_messages, timeout)
        return decoder.decode_all(envelopes)

    async def pull_raw(
        self,
        subscription: str,
        max_messages: int,
        timeout: Optional[float] = None,
    ) -> list[ReceivedMessage]:
        """Pull undecoded envelopes; an empty list if nothing is pending."""
        url = self._url(self.subscription_name(subscription), "pull")
        request = PullRequest(max_messages=max_messages)
        response = await self.send_request(url, request, timeout)
        return _parse(response, PullResponse).received_messages

    async def acknowledge(
        self,
        subscription: str,
        ack_ids: list[str],
        timeout: Optional[float] = None,
    ) -> None:
        """
        Acknowledge pulled messages.

        Pub/Sub rejects the whole request if any ack id is invalid or expired;
        then none of the messages is acknowledged and UnexpectedStatusCodeError
        is raised.
        """
        if not ack_ids:
            return

        url = self._url(self.subscription_name(subscription), "acknowledge")
        await self.send_request(url, AcknowledgeRequest(ack_ids=ack_ids), timeout)

    # Transport

    async def send_request(
        self,
        url: str,
        body: CamelCaseModel,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        POST a JSON body with a bearer token and return the successful response.

        Raises:
            TokenFetchError: If no access token could be obtained
            RequestTimeoutError: If the request exceeded the timeout
            HttpTransportError: On other network failures
            UnexpectedStatusCodeError: If the service answered with a non-2xx status
        """
        token = await self._token_source.token()

        options: dict[str, Any] = {}
        timeout = timeout if timeout is not None else self.timeout
        if timeout is not None:
            options["timeout"] = timeout

        logger.debug("Sending request to %s", url)
        try:
            response = await self._http.post(
                url,
                json=body.to_wire(),
                headers={"Authorization": f"Bearer {token}"},
                **options,
            )
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"request to {url} timed out") from exc
        except httpx.RequestError as exc:
            raise HttpTransportError(f"HTTP communication with Pub/Sub service failed: {exc}") from exc

        if not response.is_success:
            raise UnexpectedStatusCodeError(response.status_code, _error_message(response))
        return response


def _parse(response: httpx.Response, model: Type[R]) -> R:
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        raise UnexpectedResponseError("unexpected HTTP response from Pub/Sub service") from exc


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate_json(response.content).error.message
    except ValidationError:
        return response.text[:MAX_ERROR_TEXT]
