from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from fastapi import Request

from iconserver.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResult:
    url: str
    ok: bool
    status_code: int | None = None
    body: bytes = b""
    content_type_hint: str = ""


def build_http_client(*, user_agent: str | None = None, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    ua = (str(user_agent).strip() if user_agent is not None else "") or str(settings.upstream_user_agent or "").strip()
    return httpx.AsyncClient(
        follow_redirects=True,
        headers={"User-Agent": ua},
        transport=transport,
    )


class UpstreamFetcher:
    """Single-shot GETs against the icon CDN or an arbitrary absolute URL.

    Holds only the pooled ``httpx.AsyncClient``; safe to share across requests.
    Never raises: every failure comes back as ``UpstreamResult(ok=False)``.
    """

    def __init__(self, client: httpx.AsyncClient, *, cdn_root: str | None = None):
        self._client = client
        self.cdn_root = ((cdn_root or "").strip() or str(settings.cdn_root or "").strip()).rstrip("/")

    def cdn_url(self, *parts: str) -> str:
        return "/".join([self.cdn_root, *(p.strip("/") for p in parts)])

    async def fetch(self, url: str) -> UpstreamResult:
        try:
            r = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("upstream unreachable url=%s error=%s", url, type(e).__name__)
            return UpstreamResult(url=url, ok=False)

        if not r.is_success:
            logger.info("upstream returned %s url=%s", r.status_code, url)
            return UpstreamResult(url=url, ok=False, status_code=r.status_code)

        return UpstreamResult(
            url=url,
            ok=True,
            status_code=r.status_code,
            body=r.content,
            content_type_hint=r.headers.get("content-type", "").split(";")[0].strip().lower(),
        )

    async def aclose(self) -> None:
        await self._client.aclose()


def get_upstream(request: Request) -> UpstreamFetcher:
    return request.app.state.upstream
