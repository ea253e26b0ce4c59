from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from iconserver.core.errors import NoExtension, UnsupportedFormat

_EXTENSION_RE = re.compile(r"\.(\w+)$")
_IMAGE_SUFFIX_RE = re.compile(r"\.(png|webp|svg)$", re.IGNORECASE)

_VARIANT_SUFFIXES = {
    "-light.svg": "light",
    "-dark.svg": "dark",
}


class ImageFormat(str, enum.Enum):
    png = "png"
    webp = "webp"
    svg = "svg"


@dataclass(frozen=True)
class AssetReference:
    filename: str
    extension: ImageFormat
    base_name: str
    variant_suffix: str | None = None

    @property
    def is_variant(self) -> bool:
        return self.variant_suffix is not None

    @property
    def is_svg(self) -> bool:
        return self.extension is ImageFormat.svg

    def cdn_path(self) -> str:
        """Location on the CDN, which keeps one folder per format."""
        return f"{self.extension.value}/{self.filename}"

    def light_variant_path(self) -> str:
        return f"{ImageFormat.svg.value}/{self.base_name}-light.svg"


def _variant_suffix(filename: str) -> str | None:
    lower = filename.lower()
    for suffix, variant in _VARIANT_SUFFIXES.items():
        if lower.endswith(suffix):
            return variant
    return None


def parse_asset_path(raw_path: str) -> AssetReference:
    m = _EXTENSION_RE.search(raw_path or "")
    if not m:
        raise NoExtension()

    ext = m.group(1).lower()
    try:
        fmt = ImageFormat(ext)
    except ValueError as e:
        raise UnsupportedFormat() from e

    filename = raw_path[1:] if raw_path.startswith("/") else raw_path
    return AssetReference(
        filename=filename,
        extension=fmt,
        base_name=_IMAGE_SUFFIX_RE.sub("", filename, count=1),
        variant_suffix=_variant_suffix(filename),
    )
