from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


class IconRoute(str, enum.Enum):
    external = "external"
    variant = "variant"
    colorized = "colorized"
    plain = "plain"


class AssetRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw_path: str
    color: str | None = None  # already normalized, None means no recolor
    external_url: str | None = None


class IconResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: bytes
    media_type: str
    route: IconRoute
