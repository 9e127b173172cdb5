"""Helpers shared by the unit tests."""

import base64
import json

import httpx


def encode(value) -> str:
    """Base64 encode the JSON representation of value, as the service sends it."""
    return base64.b64encode(json.dumps(value).encode("utf-8")).decode("ascii")


class RecordingTransport:
    """httpx transport handler answering from a queue of responses and recording requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def bodies(self) -> list:
        return [json.loads(request.content) for request in self.requests]
