# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Page route declaration extraction."""

import re

from rla.comments import find_comment_ranges, is_in_comment
from rla.model import ExtractedRoute

ROUTE_RX = re.compile(r'@page\s*"([^"]+)"', re.IGNORECASE)


def extract_routes(text: str) -> list[ExtractedRoute]:
    """Extract every ``@page "<template>"`` declaration from file text.

    Declarations inside ``@* ... *@`` comments are kept but marked inactive.

    Args:
        text: Raw file content.

    Returns:
        Extracted routes in text order.
    """
    comment_ranges = find_comment_ranges(text)
    routes: list[ExtractedRoute] = []
    for match in ROUTE_RX.finditer(text):
        offset = match.start()
        routes.append(
            ExtractedRoute(
                route=match.group(1),
                active=not is_in_comment(offset, comment_ranges),
                offset=offset,
            )
        )
    return routes
