from __future__ import annotations

import logging
from urllib.parse import urlparse

from iconserver.core.errors import InvalidExternalTarget, UpstreamUnavailable
from iconserver.schemas.icon import AssetRequest, IconResponse, IconRoute
from iconserver.services.assets import AssetReference, parse_asset_path
from iconserver.services.media_types import SVG_MEDIA_TYPE, content_type_for_url
from iconserver.services.recolor import recolor_svg_bytes
from iconserver.services.upstream import UpstreamFetcher

logger = logging.getLogger(__name__)


class IconPipeline:
    """Decides, per request, which upstream asset to serve and how.

    Start -> external check -> {external | local parse}
          -> {variant | colorized with fallback | plain} -> response or 404.

    Failures are raised as ``IconServerError`` subclasses; the app turns them into 404s.
    """

    def __init__(self, upstream: UpstreamFetcher):
        self.upstream = upstream

    async def handle(self, req: AssetRequest) -> IconResponse:
        if req.external_url is not None:
            return await self._serve_external(req.external_url, req.color)

        ref = parse_asset_path(req.raw_path)

        if ref.is_variant:
            return await self._serve_variant(ref)

        if not ref.is_svg or req.color is None:
            return await self._serve_plain(ref)

        return await self._serve_colorized(ref, req.color)

    async def _serve_external(self, url: str, color: str | None) -> IconResponse:
        target = (url or "").strip()
        try:
            parsed = urlparse(target)
        except ValueError as e:
            raise InvalidExternalTarget() from e
        if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
            raise InvalidExternalTarget()

        res = await self.upstream.fetch(target)
        if not res.ok or not parsed.path.lower().endswith(".svg"):
            raise InvalidExternalTarget()

        body = recolor_svg_bytes(res.body, color) if color is not None else res.body
        return IconResponse(body=body, media_type=SVG_MEDIA_TYPE, route=IconRoute.external)

    async def _serve_variant(self, ref: AssetReference) -> IconResponse:
        # -light/-dark files are pre-themed; a color parameter is ignored.
        return await self._pipe(self.upstream.cdn_url(ref.cdn_path()), IconRoute.variant)

    async def _serve_plain(self, ref: AssetReference) -> IconResponse:
        return await self._pipe(self.upstream.cdn_url(ref.cdn_path()), IconRoute.plain)

    async def _serve_colorized(self, ref: AssetReference, color: str) -> IconResponse:
        light_url = self.upstream.cdn_url(ref.light_variant_path())
        res = await self.upstream.fetch(light_url)
        if not res.ok:
            logger.info("no light variant for %s, serving original without color", ref.filename)
            return await self._serve_plain(ref)

        return IconResponse(
            body=recolor_svg_bytes(res.body, color),
            media_type=SVG_MEDIA_TYPE,
            route=IconRoute.colorized,
        )

    async def _pipe(self, url: str, route: IconRoute) -> IconResponse:
        res = await self.upstream.fetch(url)
        if not res.ok:
            raise UpstreamUnavailable()
        return IconResponse(body=res.body, media_type=content_type_for_url(url), route=route)
