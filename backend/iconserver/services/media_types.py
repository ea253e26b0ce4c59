from __future__ import annotations

import posixpath
from urllib.parse import urlparse

_MEDIA_TYPES = {
    "svg": "image/svg+xml",
    "png": "image/png",
    "webp": "image/webp",
}

DEFAULT_MEDIA_TYPE = "application/octet-stream"
SVG_MEDIA_TYPE = _MEDIA_TYPES["svg"]


def resolve_content_type(ext: str | None) -> str:
    return _MEDIA_TYPES.get((ext or "").strip().lstrip(".").lower(), DEFAULT_MEDIA_TYPE)


def content_type_for_url(url: str) -> str:
    path = urlparse(url).path
    _, ext = posixpath.splitext(path)
    return resolve_content_type(ext)
