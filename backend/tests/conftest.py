import sys
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

backend_dir = Path(__file__).resolve().parents[1]
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from iconserver.main import create_app
from iconserver.services.upstream import UpstreamFetcher, build_http_client, get_upstream

CDN = "https://cdn.test/icons"


class FakeCdn:
    """In-memory upstream: maps absolute URLs to (status, body) and records every GET."""

    def __init__(self):
        self.files: dict[str, tuple[int, bytes]] = {}
        self.requested: list[str] = []
        self.user_agents: list[str] = []

    def add(self, url: str, body: bytes | str, status: int = 200) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.files[url] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        self.user_agents.append(request.headers.get("user-agent", ""))
        status, body = self.files.get(url, (404, b"not found"))
        return httpx.Response(status, content=body)


@pytest.fixture()
def cdn():
    return FakeCdn()


@pytest.fixture()
def upstream(cdn):
    client = build_http_client(transport=httpx.MockTransport(cdn.handler))
    return UpstreamFetcher(client, cdn_root=CDN)


@pytest.fixture()
def client(upstream):
    app = create_app()
    app.dependency_overrides[get_upstream] = lambda: upstream
    return TestClient(app)
