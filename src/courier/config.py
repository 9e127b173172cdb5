"""Settings for building a PubSubClient from the environment."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://pubsub.googleapis.com"


class PubSubSettings(BaseSettings):
    """
    Client settings read from ``PUB_SUB_*`` environment variables or a ``.env`` file.

    Set ``PUB_SUB_BASE_URL`` to the emulator address (e.g. ``http://localhost:8085``)
    to test locally.
    """

    key_path: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    refresh_buffer_seconds: float = 30.0
    timeout_seconds: Optional[float] = None

    model_config = SettingsConfigDict(env_prefix="PUB_SUB_", env_file=".env", extra="ignore")
