# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Destination classification against compiled route patterns."""

from rla.model import Classification, RoutePattern

EXTERNAL_PREFIXES: tuple[str, ...] = ("http://", "https://", "//", "mailto:", "tel:")


def classify_destination(raw: str, patterns: list[RoutePattern]) -> Classification:
    """Classify a link destination.

    The external-prefix test runs on the trimmed destination before any
    normalization; only non-external destinations lose their query and
    fragment and are matched against the route patterns.

    Args:
        raw: Destination as captured from source.
        patterns: Compiled active route patterns.

    Returns:
        ``external``, ``matched`` or ``unknown``.
    """
    url = raw.strip()
    if is_external(url):
        return "external"

    path = strip_query_and_fragment(url)
    if not path.startswith("/"):
        path = f"/{path}"
    if any(pattern.matches(path) for pattern in patterns):
        return "matched"
    return "unknown"


def is_external(url: str) -> bool:
    """Check whether a destination points outside the application."""
    return url.strip().lower().startswith(EXTERNAL_PREFIXES)


def strip_query_and_fragment(url: str) -> str:
    """Remove the ``#fragment`` and then the ``?query`` suffix."""
    url = url.split("#", 1)[0]
    return url.split("?", 1)[0]
