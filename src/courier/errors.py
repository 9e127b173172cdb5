"""Exception hierarchy for the Pub/Sub client.

Batch-level errors are raised from client calls. Per-message errors
(``DecodeError`` subclasses) are never raised by a pull; they are attached to
the ``PulledMessage`` they belong to and only raised by ``PulledMessage.result()``.
"""

from typing import Any


class PubSubError(Exception):
    """Base class for every error raised by courier."""


class InitializationError(PubSubError):
    """Client could not be constructed (credentials missing or malformed)."""


class TokenFetchError(PubSubError):
    """The authentication provider rejected or failed a token request."""


class HttpTransportError(PubSubError):
    """Network-level failure talking to the Pub/Sub service."""


class RequestTimeoutError(HttpTransportError):
    """The request did not complete within the caller's timeout."""


class UnexpectedStatusCodeError(PubSubError):
    """The service answered with a non-2xx status code."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"unexpected HTTP status code {status_code} from Pub/Sub service: {message}")
        self.status_code = status_code
        self.message = message


class UnexpectedResponseError(PubSubError):
    """The service answered 2xx but the body had an unexpected shape."""


class SerializeError(PubSubError):
    """A message to be published could not be serialized to JSON."""

    def __init__(self, index: int, value: Any):
        super().__init__(f"serializing message {index} to be published failed: {value!r}")
        self.index = index


# Per-message decode errors


class DecodeError(PubSubError):
    """A pulled message could not be turned into the requested type."""


class NoDataError(DecodeError):
    def __init__(self) -> None:
        super().__init__("pulled message contains no data")


class Base64DecodeError(DecodeError):
    def __init__(self) -> None:
        super().__init__("decoding data of pulled message as base64 failed")


class MalformedJsonError(DecodeError):
    def __init__(self) -> None:
        super().__init__("data of pulled message is not valid JSON")


class TransformFailedError(DecodeError):
    def __init__(self) -> None:
        super().__init__("failed to transform JSON value")


class TypeMismatchError(DecodeError):
    def __init__(self, type_name: str):
        super().__init__(f"JSON value does not match type {type_name}")
        self.type_name = type_name


# Transform errors


class TransformError(PubSubError):
    """Raised by a transform that cannot reshape the given value."""


class MissingAttributeError(TransformError):
    def __init__(self, key: str):
        super().__init__(f"missing attribute `{key}`")
        self.key = key


class UnexpectedValueError(TransformError):
    def __init__(self, value: Any):
        super().__init__(f"unexpected JSON value `{value!r}`, expected an object")
        self.value = value


class UnknownVersionError(TransformError):
    def __init__(self, version: str):
        super().__init__(f"unknown version `{version}`")
        self.version = version

