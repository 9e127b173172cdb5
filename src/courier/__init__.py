"""courier: typed async client for Google Cloud Pub/Sub over HTTPS/JSON."""

from courier.auth import ServiceAccountTokenSource, StaticTokenSource, TokenSource
from courier.client import PubSubClient
from courier.config import PubSubSettings
from courier.consumer.message_consumer import AsyncMessageConsumer
from courier.errors import (
    Base64DecodeError,
    DecodeError,
    HttpTransportError,
    InitializationError,
    MalformedJsonError,
    MissingAttributeError,
    NoDataError,
    PubSubError,
    RequestTimeoutError,
    SerializeError,
    TokenFetchError,
    TransformError,
    TransformFailedError,
    TypeMismatchError,
    UnexpectedResponseError,
    UnexpectedStatusCodeError,
    UnexpectedValueError,
    UnknownVersionError,
)
from courier.models import OutgoingMessage, PublishedMessage, PulledMessage, ReceivedMessage
from courier.transform import Identity, InsertAttribute, VersionedTypeTag

__all__ = [
    "AsyncMessageConsumer",
    "Base64DecodeError",
    "DecodeError",
    "HttpTransportError",
    "Identity",
    "InitializationError",
    "InsertAttribute",
    "MalformedJsonError",
    "MissingAttributeError",
    "NoDataError",
    "OutgoingMessage",
    "PubSubClient",
    "PubSubError",
    "PubSubSettings",
    "PublishedMessage",
    "PulledMessage",
    "ReceivedMessage",
    "RequestTimeoutError",
    "SerializeError",
    "ServiceAccountTokenSource",
    "StaticTokenSource",
    "TokenFetchError",
    "TokenSource",
    "TransformError",
    "TransformFailedError",
    "TypeMismatchError",
    "UnexpectedResponseError",
    "UnexpectedStatusCodeError",
    "UnexpectedValueError",
    "UnknownVersionError",
    "VersionedTypeTag",
]
