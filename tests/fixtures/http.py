"""Recording HTTP transport standing in for PayFast and the relay."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from itnrelay.models.config import PAYFAST_VALIDATE_URL

RELAY_ENDPOINT = "https://formspree.io/f/test"


@dataclass
class FakeUpstreams:
    """Answers PayFast validation and relay requests and records every call.

    Set ``validate_error`` or ``relay_error`` to an exception to simulate a
    transport failure on that leg.
    """

    validate_url: str = PAYFAST_VALIDATE_URL
    relay_endpoint: str = RELAY_ENDPOINT
    validate_status: int = 200
    validate_text: str = "VALID"
    relay_status: int = 200
    validate_error: Exception | None = None
    relay_error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == self.validate_url:
            if self.validate_error is not None:
                raise self.validate_error
            return httpx.Response(self.validate_status, text=self.validate_text)

        if url == self.relay_endpoint:
            if self.relay_error is not None:
                raise self.relay_error
            return httpx.Response(self.relay_status, json={"ok": self.relay_status < 300})

        return httpx.Response(404, text="not found")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))

    def calls_to(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == url]

    @property
    def validate_calls(self) -> list[httpx.Request]:
        return self.calls_to(self.validate_url)

    @property
    def relay_calls(self) -> list[httpx.Request]:
        return self.calls_to(self.relay_endpoint)

    def relay_payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.relay_calls]
