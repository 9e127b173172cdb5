"""Request bodies sent to the Pub/Sub REST API."""

from typing import Optional

from pydantic import Field, field_validator

from courier.models.base import CamelCaseModel


class OutgoingMessage(CamelCaseModel):
    """A message as it goes over the wire in a publish request.

    ``data`` is the base64 encoded payload. Empty attributes are dropped so that the
    field is omitted from the request rather than sent as ``{}``.
    """

    data: Optional[str] = None
    attributes: Optional[dict[str, str]] = None
    ordering_key: Optional[str] = None

    @field_validator("attributes")
    @classmethod
    def _omit_empty_attributes(cls, value: Optional[dict[str, str]]) -> Optional[dict[str, str]]:
        return value or None


class PublishRequest(CamelCaseModel):
    """Body of ``POST .../topics/{topic}:publish``."""

    messages: list[OutgoingMessage]


class PullRequest(CamelCaseModel):
    """Body of ``POST .../subscriptions/{subscription}:pull``."""

    max_messages: int = Field(gt=0)


class AcknowledgeRequest(CamelCaseModel):
    """Body of ``POST .../subscriptions/{subscription}:acknowledge``."""

    ack_ids: list[str]
