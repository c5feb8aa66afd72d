"""Shared fixtures: an in-memory stand-in for the site and search service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import httpx
import pytest

SITE_URL = "https://go.promapp.com"
SEARCH_ENDPOINT = "https://ausearch.promapp.io"
TENANT = "acme"


def make_hit(name: str, index: int = 0) -> Dict[str, Any]:
    return {
        "Name": f"{name} process {index}",
        "ProcessUniqueId": f"{name.lower()}-{index}",
        "ItemUrl": f"{SITE_URL}/{TENANT}/Process/{name.lower()}-{index}",
        "EntityType": "UnpublishedProcess",
    }


@dataclass
class FakeBackend:
    """Answers the token, search-token and full-search endpoints."""

    hits: Dict[str, int] = field(default_factory=dict)
    token_status: int = 200
    token_body: Any = field(default_factory=lambda: {"access_token": "bearer-123"})
    exchange_status: int = 200
    exchange_body: Any = field(
        default_factory=lambda: {"Status": "Success", "Message": "search-456"}
    )
    failing_names: set = field(default_factory=set)
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/oauth2/token"):
            return httpx.Response(self.token_status, json=self.token_body)
        if path.endswith("/search/GetSearchServiceToken"):
            return httpx.Response(self.exchange_status, json=self.exchange_body)
        if path.endswith("/fullsearch"):
            name = request.url.params["SearchCriteria"].strip('"')
            if name in self.failing_names:
                return httpx.Response(500, json={"error": "boom"})
            count = self.hits.get(name, 0)
            return httpx.Response(
                200,
                json={"success": True, "response": [make_hit(name, i) for i in range(count)]},
            )
        return httpx.Response(404)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def search_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/fullsearch")]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an httpx client whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return factory
