"""Base model for the Pub/Sub JSON wire format."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """Base model that maps snake_case fields to the camelCase names of the Pub/Sub REST API.

    Unknown fields sent by the service are ignored so that additions to the API
    do not break parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump as a JSON-ready dict using wire names, leaving out absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
