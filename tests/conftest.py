"""
Pytest configuration and fixtures for ghl-mcp tests.
"""

import json
import sys
from dataclasses import replace
from pathlib import Path

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from ghl_mcp.tools import ...` to work without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from ghl_mcp.config import get_settings  # noqa: E402
from ghl_mcp.integrations.highlevel import HighLevelClient, HighLevelConfig  # noqa: E402

BASE_URL = "https://services.leadconnectorhq.com"
LOCATION_ID = "loc_default"
ACCESS_TOKEN = "pit-test-token"


class MockApi:
    """
    Fake HighLevel API for httpx.MockTransport.

    Routes are keyed by (method, path). Every request is recorded so
    tests can assert on method, path, query, headers and body.
    Unrouted requests answer 200 with an empty JSON object.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], object] = {}

    def add(self, method, path, *, status=200, json=None, content=None, headers=None):
        """Answer ``method path`` with a canned response."""
        self._routes[(method, path)] = {
            "status_code": status,
            "json": json,
            "content": content,
            "headers": headers,
        }

    def add_handler(self, method, path, handler):
        """Answer ``method path`` by calling ``handler(request)``."""
        self._routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(200, json={})
        if callable(route):
            return route(request)
        if route["json"] is not None:
            return httpx.Response(
                route["status_code"], json=route["json"], headers=route["headers"]
            )
        return httpx.Response(
            route["status_code"], content=route["content"] or b"", headers=route["headers"]
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @staticmethod
    def body(request: httpx.Request):
        """Decode a JSON request body."""
        return json.loads(request.content) if request.content else None


def attach_transport(client: HighLevelClient, api: MockApi) -> HighLevelClient:
    """Pre-create the client's HTTP client on top of the fake API."""
    client._client = httpx.AsyncClient(
        base_url=client.config.base_url,
        timeout=client.config.timeout,
        headers={**client._get_default_headers(), **client._get_auth_headers()},
        transport=httpx.MockTransport(api),
    )
    return client


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; every test starts clean."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def highlevel_config():
    """Create test HighLevel configuration."""
    return HighLevelConfig(
        access_token=ACCESS_TOKEN,
        base_url=BASE_URL,
        location_id=LOCATION_ID,
    )


@pytest.fixture
def mock_api():
    """Fake API recording every request."""
    return MockApi()


@pytest.fixture
def ghl_client(highlevel_config, mock_api):
    """HighLevel client whose requests go to ``mock_api``."""
    return attach_transport(HighLevelClient(highlevel_config), mock_api)


@pytest.fixture
def make_client(highlevel_config):
    """Build extra clients on their own fake APIs (config fields overridable)."""

    def _make(api: MockApi, **overrides) -> HighLevelClient:
        config = replace(highlevel_config, **overrides)
        return attach_transport(HighLevelClient(config), api)

    return _make


@pytest.fixture
def sample_contact():
    """Sample contact as returned by the API."""
    return {
        "id": "contact_123",
        "locationId": LOCATION_ID,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "+15555550100",
        "tags": ["vip"],
    }


@pytest.fixture
def sample_pipelines():
    """Sample pipelines response."""
    return {
        "pipelines": [
            {
                "id": "pipe_1",
                "name": "Sales",
                "stages": [{"id": "stage_1", "name": "New Lead"}],
            },
            {
                "id": "pipe_2",
                "name": "Renewals",
                "stages": [{"id": "stage_2", "name": "Up for renewal"}],
            },
        ]
    }
