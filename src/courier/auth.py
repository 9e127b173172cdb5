"""Service account credentials and access token caching."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol, runtime_checkable

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from courier.errors import InitializationError, TokenFetchError

logger = logging.getLogger(__name__)

PUBSUB_SCOPE = "https://www.googleapis.com/auth/pubsub"


@runtime_checkable
class TokenSource(Protocol):
    """Provides bearer tokens for requests to the Pub/Sub service."""

    async def token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        ...


def load_service_account(key_path: str) -> service_account.Credentials:
    """
    Load service account credentials scoped for Pub/Sub from a JSON key file.

    Raises:
        InitializationError: If the file is missing, is not a service account key,
            or contains a malformed private key
    """
    try:
        credentials = service_account.Credentials.from_service_account_file(
            key_path, scopes=[PUBSUB_SCOPE]
        )
    except (OSError, ValueError) as exc:
        raise InitializationError(
            f"missing or malformed service account key at `{key_path}`"
        ) from exc

    if not credentials.project_id:
        raise InitializationError(f"service account key at `{key_path}` has no project_id")
    return credentials


class ServiceAccountTokenSource:
    """
    Caches the access token of a google-auth credentials object.

    The cached token is served while it is valid for at least ``refresh_buffer``.
    Concurrent callers wait on a single refresh instead of each fetching a token.
    The blocking refresh runs in a worker thread.
    """

    def __init__(
        self,
        credentials: Any,
        refresh_buffer: timedelta = timedelta(seconds=30),
        request_factory: Callable[[], Any] = Request,
    ):
        self._credentials = credentials
        self._refresh_buffer = refresh_buffer
        self._request_factory = request_factory
        self._lock = asyncio.Lock()

    async def token(self) -> str:
        async with self._lock:
            if self._needs_refresh():
                try:
                    await asyncio.to_thread(self._credentials.refresh, self._request_factory())
                except google.auth.exceptions.GoogleAuthError as exc:
                    raise TokenFetchError("getting authentication token failed") from exc
                logger.debug("Fetched access token valid until %s", self._credentials.expiry)
            return self._credentials.token

    def _needs_refresh(self) -> bool:
        expiry = self._credentials.expiry
        if not self._credentials.token or expiry is None:
            return True
        return expiry - self._refresh_buffer <= _now(expiry)


def _now(reference: datetime) -> datetime:
    # google-auth keeps expiry as a naive UTC datetime
    now = datetime.now(timezone.utc)
    return now if reference.tzinfo is not None else now.replace(tzinfo=None)


class StaticTokenSource:
    """Serves a fixed token; for the Pub/Sub emulator, which does not check credentials."""

    def __init__(self, token: str = "emulator"):
        self._token = token

    async def token(self) -> str:
        return self._token
