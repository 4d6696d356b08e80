# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Hyperlink and navigation call scanning."""

import re

from rla.classifier import classify_destination
from rla.model import LinkMethod, LinkRecord, RoutePattern

HREF_RX = re.compile(
    r"""<\s*a\b[^>]*\bhref\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""",
    re.IGNORECASE,
)

NAVIGATE_TO_RX = re.compile(
    r"""\bNavigateTo\s*\(\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)')""",
    re.IGNORECASE,
)

LINK_IDIOMS: tuple[tuple[LinkMethod, re.Pattern[str]], ...] = (
    ("href", HREF_RX),
    ("NavigateTo", NAVIGATE_TO_RX),
)


def scan_links(
    source_file: str, lines: list[str], patterns: list[RoutePattern]
) -> list[LinkRecord]:
    """Find and classify link destinations line by line.

    Within a line, every ``href`` match precedes every ``NavigateTo`` match.

    Args:
        source_file: Root-relative path of the scanned file.
        lines: File content split into lines.
        patterns: Compiled active route patterns.

    Returns:
        Classified link records in line order.
    """
    records: list[LinkRecord] = []
    for line_number, line in enumerate(lines, start=1):
        for method, regex in LINK_IDIOMS:
            for match in regex.finditer(line):
                raw = match.group("dq")
                if raw is None:
                    raw = match.group("sq") or ""
                destination = raw.strip()
                records.append(
                    LinkRecord(
                        source_file=source_file,
                        line_number=line_number,
                        destination=destination,
                        method=method,
                        scheme=get_scheme(destination),
                        classification=classify_destination(destination, patterns),
                    )
                )
    return records


def get_scheme(url: str) -> str:
    """Classify the scheme prefix of a destination.

    Args:
        url: Destination string.

    Returns:
        ``//`` for protocol-relative URLs, the lower-cased text before a colon
        that precedes any ``/``, otherwise ``relative``.
    """
    value = url.strip()
    if not value:
        return "relative"
    if value.startswith("//"):
        return "//"
    colon = value.find(":")
    slash = value.find("/")
    if colon > 0 and (slash == -1 or colon < slash):
        return value[:colon].lower()
    return "relative"
