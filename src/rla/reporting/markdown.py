# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Markdown report rendering."""

from typing import Sequence

from rla.audit import AuditResult
from rla.model import Classification, LinkMethod, LinkRecord, RouteRecord

ROUTE_COLUMNS_BEFORE_ROLES: tuple[str, ...] = ("Route", "RouteActive", "Authorized")
LINK_COLUMNS: tuple[str, ...] = (
    "File",
    "Line",
    "Method",
    "Scheme",
    "Destination",
    "Match",
)

CLASSIFICATION_COLORS: dict[Classification, str] = {
    "external": "blue",
    "matched": "green",
    "unknown": "red",
}

DESTINATION_MARKUP: dict[LinkMethod, tuple[str, str]] = {
    "href": ("<u><em>", "</em></u>"),
    "NavigateTo": ("<strong>", "</strong>"),
}


def yes_no(value: bool) -> str:
    return "yes" if value else "no"


def render_classification(classification: Classification) -> str:
    """Render a classification as a colored HTML span."""
    color = CLASSIFICATION_COLORS[classification]
    return f'<span style="color:{color}">{classification}</span>'


def render_destination(link: LinkRecord) -> str:
    """Render a destination with pipes escaped and method-specific emphasis."""
    opening, closing = DESTINATION_MARKUP[link.method]
    return f"{opening}{escape_pipes(link.destination)}{closing}"


def escape_pipes(value: str) -> str:
    return value.replace("|", "\\|")


class MarkdownReportBuilder:
    """Build the Markdown audit report from an audit result."""

    def __init__(self, result: AuditResult) -> None:
        self._result = result

    def build(self) -> str:
        """Render the full report.

        Returns:
            Markdown text with the routes table followed by the link scan table.
        """
        lines: list[str] = []
        lines.extend(self.build_routes_section())
        lines.append("")
        lines.append("")
        lines.append("## Link Scan")
        lines.append("")
        lines.extend(self.build_links_table())
        lines.append("")
        return "\n".join(lines) + "\n"

    def build_routes_section(self) -> list[str]:
        roles = list(self._result.role_vocabulary)
        columns = [*ROUTE_COLUMNS_BEFORE_ROLES, *roles, "File"]
        lines = [
            "## Routes",
            "",
            _table_row(columns),
            _table_row(["---"] * len(columns)),
        ]
        for route in self._result.routes:
            lines.append(_table_row(route_cells(route, roles)))
        return lines

    def build_links_table(self) -> list[str]:
        lines = [_table_row(LINK_COLUMNS), _table_row(["---"] * len(LINK_COLUMNS))]
        for link in self._result.links:
            lines.append(
                _table_row(
                    [
                        link.source_file,
                        str(link.line_number),
                        link.method,
                        link.scheme,
                        render_destination(link),
                        render_classification(link.classification),
                    ]
                )
            )
        return lines


def route_cells(route: RouteRecord, roles: list[str]) -> list[str]:
    """Build the plain cell values of one route row."""
    cells = [route.route, yes_no(route.active), yes_no(route.authorized)]
    cells.extend("yes" if route.has_role(role) else "-" for role in roles)
    cells.append(route.source_file)
    return cells


def _table_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"
