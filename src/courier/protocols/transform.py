"""Transform protocol definitions."""

from typing import Any, Callable, Protocol, Union, runtime_checkable

from courier.models.response import ReceivedMessage


@runtime_checkable
class Transform(Protocol):
    """Reshapes the decoded JSON value of a pulled message before typed deserialization."""

    def apply(self, envelope: ReceivedMessage, value: Any) -> Any:
        """
        Transform a decoded JSON value.

        Args:
            envelope: The pulled envelope the value came from (ack id, attributes, ...)
            value: The JSON value decoded from the message data

        Returns:
            The JSON value to deserialize into the target type

        Raises:
            TransformError: If the value cannot be transformed
        """
        ...


TransformFunction = Callable[[ReceivedMessage, Any], Any]
TransformLike = Union[Transform, TransformFunction]
