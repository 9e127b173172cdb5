"""Fixtures for integration tests against the Pub/Sub emulator."""

import subprocess
import time
import uuid

import httpx
import pytest

from courier.auth import StaticTokenSource
from courier.client import PubSubClient

EMULATOR_PORT = 8086  # Non-default port to avoid conflicts
EMULATOR_URL = f"http://localhost:{EMULATOR_PORT}"
PROJECT_ID = "test-project"
ACK_DEADLINE_SECONDS = 10


@pytest.fixture(scope="session")
def pubsub_emulator() -> str:
    """Start the Pub/Sub emulator Docker container for the test session."""
    container_name = "courier-pubsub-emulator-test"

    # Clean up any existing container
    subprocess.run(["docker", "rm", "-f", container_name], capture_output=True)

    subprocess.run(
        [
            "docker",
            "run",
            "-d",
            "--name",
            container_name,
            "-p",
            f"{EMULATOR_PORT}:8085",
            "gcr.io/google.com/cloudsdktool/google-cloud-cli:emulators",
            "gcloud",
            "beta",
            "emulators",
            "pubsub",
            "start",
            "--host-port=0.0.0.0:8085",
            f"--project={PROJECT_ID}",
        ],
        check=True,
        capture_output=True,
    )

    # Wait for the emulator to accept requests
    deadline = time.monotonic() + 60
    while True:
        try:
            httpx.get(EMULATOR_URL, timeout=1)
            break
        except httpx.TransportError:
            if time.monotonic() > deadline:
                raise
            time.sleep(1)

    yield EMULATOR_URL

    # Cleanup
    subprocess.run(["docker", "stop", container_name], capture_output=True)
    subprocess.run(["docker", "rm", container_name], capture_output=True)


@pytest.fixture
def topic_and_subscription(pubsub_emulator) -> tuple[str, str]:
    """Create a unique topic with one subscription; yields their ids."""
    suffix = uuid.uuid4().hex[:8]
    topic_name = f"projects/{PROJECT_ID}/topics/test-topic-{suffix}"
    subscription_name = f"projects/{PROJECT_ID}/subscriptions/test-subscription-{suffix}"

    with httpx.Client(base_url=pubsub_emulator) as http:
        http.put(f"/v1/{topic_name}").raise_for_status()
        http.put(
            f"/v1/{subscription_name}",
            json={"topic": topic_name, "ackDeadlineSeconds": ACK_DEADLINE_SECONDS},
        ).raise_for_status()

        yield topic_name.rsplit("/", 1)[-1], subscription_name.rsplit("/", 1)[-1]

        # Cleanup
        http.delete(f"/v1/{subscription_name}")
        http.delete(f"/v1/{topic_name}")


@pytest.fixture
def ack_deadline_seconds() -> int:
    """Ack deadline of subscriptions created by topic_and_subscription."""
    return ACK_DEADLINE_SECONDS


@pytest.fixture
def client(pubsub_emulator) -> PubSubClient:
    """PubSubClient talking to the emulator, which ignores credentials."""
    return PubSubClient(PROJECT_ID, StaticTokenSource(), base_url=pubsub_emulator, timeout=10)
