from __future__ import annotations

import re

_HEX = r"#(?:[0-9a-f]{6}|[0-9a-f]{3})(?![0-9a-f])"

# Applied in this order, each to the whole document. Plain text patterns, no XML parsing.
_ATTRIBUTE_RE = re.compile(r'fill\s*=\s*"#(?:[0-9a-f]{6}|[0-9a-f]{3})"', re.IGNORECASE)
_STYLE_RE = re.compile(r"fill\s*:\s*" + _HEX, re.IGNORECASE)
_STOP_COLOR_RE = re.compile(r"stop-color\s*:\s*" + _HEX, re.IGNORECASE)


def apply_color_to_svg(svg: str, color: str) -> str:
    # lambdas keep backslashes in a user supplied color from being read as group refs
    svg = _ATTRIBUTE_RE.sub(lambda _m: f'fill="{color}"', svg)
    svg = _STYLE_RE.sub(lambda _m: f"fill:{color}", svg)
    svg = _STOP_COLOR_RE.sub(lambda _m: f"stop-color:{color}", svg)
    return svg


def recolor_svg_bytes(body: bytes, color: str) -> bytes:
    text = body.decode("utf-8", errors="surrogateescape")
    return apply_color_to_svg(text, color).encode("utf-8", errors="surrogateescape")
