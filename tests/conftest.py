import json
import os
from typing import Callable, List

os.environ.setdefault("ENVIRONMENT", "testing")

import httpx
import pytest

from leadcapture.core.config import settings

IP_HOST = httpx.URL(settings.ip_lookup_url).host
VALIDATION_HOST = httpx.URL(settings.email_validation_url).host
HUBSPOT_HOST = httpx.URL(settings.hubspot_submit_url).host

DEEPLY_NESTED_JSON = "[" * 100000 + "]" * 100000


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable):
        self.requests: List[httpx.Request] = []

        async def _record(request: httpx.Request):
            self.requests.append(request)
            response = handler(request)
            if not isinstance(response, httpx.Response):
                response = await response
            return response

        super().__init__(_record)

    def to_host(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


def upstream_handler(
    *,
    ip: dict = None,
    validation_status: int = 200,
    validation_body=None,
    hubspot_status: int = 200,
):
    """Route requests to canned responses for the three upstream services."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == IP_HOST:
            return httpx.Response(200, json=ip if ip is not None else {"ip": "203.0.113.7"})
        if request.url.host == VALIDATION_HOST:
            body = validation_body if validation_body is not None else {"result": "valid"}
            if isinstance(body, str):
                return httpx.Response(validation_status, text=body)
            return httpx.Response(validation_status, json=body)
        if request.url.host == HUBSPOT_HOST:
            return httpx.Response(hubspot_status, json={"inlineMessage": "Thanks"})
        return httpx.Response(404)

    return handler


def request_json(request: httpx.Request):
    return json.loads(request.content)


@pytest.fixture
def make_client():
    """Build AsyncClients over a RecordingTransport; returns (client, transport)."""

    def _make(handler: Callable):
        transport = RecordingTransport(handler)
        return httpx.AsyncClient(transport=transport), transport

    return _make
