from __future__ import annotations


class IconServerError(Exception):
    """Base for every failure the icon pipeline reports to the client.

    All of them surface as HTTP 404 with ``reason`` as the message.
    """

    status_code = 404
    error_code = "icon_error"
    default_reason = "File not found"

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class NoExtension(IconServerError):
    error_code = "no_extension"
    default_reason = "File not found"


class UnsupportedFormat(IconServerError):
    error_code = "unsupported_format"
    default_reason = "Format not supported"


class UpstreamUnavailable(IconServerError):
    error_code = "upstream_unavailable"
    default_reason = "File not found"


class InvalidExternalTarget(IconServerError):
    error_code = "invalid_external_target"
    default_reason = "Invalid external SVG"
