"""Error body returned by the Pub/Sub REST API for non-2xx responses."""

from typing import Optional

from courier.models.base import CamelCaseModel


class ServiceError(CamelCaseModel):
    """Structured error information (``google.rpc.Status`` as JSON)."""

    code: Optional[int] = None
    message: str
    status: Optional[str] = None  # e.g. INVALID_ARGUMENT, NOT_FOUND


class ErrorResponse(CamelCaseModel):
    """Envelope of the error body: ``{"error": {...}}``."""

    error: ServiceError
