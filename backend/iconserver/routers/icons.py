from __future__ import annotations

from urllib.parse import unquote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from iconserver.core.config import settings
from iconserver.schemas.icon import AssetRequest
from iconserver.services.colors import normalize_color
from iconserver.services.pipeline import IconPipeline
from iconserver.services.upstream import UpstreamFetcher, get_upstream

router = APIRouter(tags=["icons"])

_COLOR_QUERY = Query(default=None, description="Hex color, with or without leading #")
_EXTERNAL_QUERY = Query(default=None, description="Absolute URL of an SVG to proxy")


def get_pipeline(upstream: UpstreamFetcher = Depends(get_upstream)) -> IconPipeline:
    return IconPipeline(upstream)


async def _serve(pipeline: IconPipeline, *, url_path: str, color: str | None, external: str | None) -> Response:
    req = AssetRequest(
        raw_path=unquote(url_path),
        color=normalize_color(color),
        external_url=external,
    )
    icon = await pipeline.handle(req)
    return Response(
        content=icon.body,
        media_type=icon.media_type,
        headers={"X-Icon-Route": icon.route.value},
    )


@router.get("/")
async def root(
    color: str | None = _COLOR_QUERY,
    external: str | None = _EXTERNAL_QUERY,
    pipeline: IconPipeline = Depends(get_pipeline),
):
    if external is None:
        return PlainTextResponse(str(settings.service_banner))
    return await _serve(pipeline, url_path="", color=color, external=external)


@router.get("/{url_path:path}")
async def serve_icon(
    url_path: str,
    color: str | None = _COLOR_QUERY,
    external: str | None = _EXTERNAL_QUERY,
    pipeline: IconPipeline = Depends(get_pipeline),
):
    return await _serve(pipeline, url_path=url_path, color=color, external=external)
