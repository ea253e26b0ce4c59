from __future__ import annotations


def normalize_color(raw: str | None) -> str | None:
    """Turn a ``color`` query value into the literal inserted into SVG markup.

    Blank input means no recolor was asked for. Anything else gets a leading
    ``#`` when it lacks one; the hex digits themselves are not checked.
    """
    if raw is None or not raw.strip():
        return None
    if raw.startswith("#"):
        return raw
    return f"#{raw}"
