# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Compile active route templates into path matchers."""

import logging
import re
from typing import Iterable

from rla.model import RoutePattern, RouteRecord

logger = logging.getLogger(__name__)

# Matches `{name}`, `{id:int}`, `{id?}` and the catch-all `{**path}`.
TEMPLATE_SEGMENT_RX = re.compile(r"\{(?P<catch_all>\*\*)?(?P<name>[^}]+)\}")

PARAMETER_PATTERN = "[^/]+"
CATCH_ALL_PATTERN = ".+"


def compile_route_patterns(routes: Iterable[RouteRecord]) -> list[RoutePattern]:
    """Compile the distinct active route templates.

    A template is eligible when any active record carries it; duplicates are
    collapsed case-insensitively, keeping the first-seen spelling.

    Args:
        routes: Route records from every route-bearing file.

    Returns:
        One compiled pattern per distinct active template.
    """
    templates: dict[str, str] = {}
    for route in routes:
        if route.active:
            templates.setdefault(route.route.casefold(), route.route)

    patterns = [
        RoutePattern(template=template, regex=compile_template(template))
        for template in templates.values()
    ]
    logger.debug(f"Compiled route patterns (count={len(patterns)})")
    return patterns


def compile_template(template: str) -> re.Pattern[str]:
    """Translate one route template into a case-insensitive full-path regex.

    Args:
        template: Route template such as ``/items/{id}`` or ``files/{**path}``.

    Returns:
        Compiled regex to be used with ``fullmatch``; a trailing ``/`` is
        tolerated.
    """
    rooted = template if template.startswith("/") else f"/{template}"
    parts: list[str] = []
    position = 0
    for segment in TEMPLATE_SEGMENT_RX.finditer(rooted):
        parts.append(re.escape(rooted[position : segment.start()]))
        parts.append(
            CATCH_ALL_PATTERN if segment.group("catch_all") else PARAMETER_PATTERN
        )
        position = segment.end()
    parts.append(re.escape(rooted[position:]))
    return re.compile("".join(parts) + "/?", re.IGNORECASE)
