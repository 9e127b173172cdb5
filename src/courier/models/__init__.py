"""Wire and application models for courier."""

from courier.models.error import ErrorResponse, ServiceError
from courier.models.message import PublishedMessage, PulledMessage
from courier.models.request import AcknowledgeRequest, OutgoingMessage, PublishRequest, PullRequest
from courier.models.response import Message, PublishResponse, PullResponse, ReceivedMessage

__all__ = [
    "AcknowledgeRequest",
    "ErrorResponse",
    "Message",
    "OutgoingMessage",
    "PublishRequest",
    "PublishResponse",
    "PublishedMessage",
    "PullRequest",
    "PullResponse",
    "PulledMessage",
    "ReceivedMessage",
    "ServiceError",
]
