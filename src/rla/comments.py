# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Razor comment span detection."""

import re

from rla.model import CommentRange

RAZOR_COMMENT_RX = re.compile(r"@\*.*?\*@", re.DOTALL)


def find_comment_ranges(text: str) -> list[CommentRange]:
    """Find ``@* ... *@`` comment spans in text order.

    Nesting is not interpreted: each span ends at the first closing delimiter.

    Args:
        text: Raw file content.

    Returns:
        Comment ranges with inclusive start and end offsets.
    """
    return [
        CommentRange(start=match.start(), end=match.end() - 1)
        for match in RAZOR_COMMENT_RX.finditer(text)
    ]


def is_in_comment(offset: int, ranges: list[CommentRange]) -> bool:
    """Check whether an offset falls inside any comment range."""
    return any(comment_range.contains(offset) for comment_range in ranges)
