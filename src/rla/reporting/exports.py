# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CSV and JSON exports of audit results."""

import csv
import io
import json
import logging
from dataclasses import asdict
from pathlib import Path

from rla.audit import AuditError, AuditResult
from rla.reporting.markdown import LINK_COLUMNS, ROUTE_COLUMNS_BEFORE_ROLES, route_cells

logger = logging.getLogger(__name__)


class ReportWriteError(AuditError):
    """Represent a failure to write a report file."""


# CSV exports sit next to the Markdown report: `report.md` -> `report_routes.csv`.
def routes_csv_path(output_path: Path) -> Path:
    return output_path.with_name(f"{output_path.stem}_routes.csv")


def links_csv_path(output_path: Path) -> Path:
    return output_path.with_name(f"{output_path.stem}_links.csv")


def render_routes_csv(result: AuditResult) -> str:
    """Render the routes table as CSV.

    Args:
        result: Audit result.

    Returns:
        CSV text with one column per role in the vocabulary.
    """
    roles = list(result.role_vocabulary)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([*ROUTE_COLUMNS_BEFORE_ROLES, *roles, "File"])
    for route in result.routes:
        writer.writerow(route_cells(route, roles))
    return buffer.getvalue()


def render_links_csv(result: AuditResult) -> str:
    """Render the link scan as CSV with plain classification text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(LINK_COLUMNS)
    for link in result.links:
        writer.writerow(
            [
                link.source_file,
                link.line_number,
                link.method,
                link.scheme,
                link.destination,
                link.classification,
            ]
        )
    return buffer.getvalue()


def render_json(result: AuditResult) -> str:
    """Render the audit result as a JSON document."""
    payload = {
        "routes": [asdict(route) for route in result.routes],
        "roles": list(result.role_vocabulary),
        "links": [asdict(link) for link in result.links],
    }
    return json.dumps(payload, indent=2, sort_keys=True)


def write_text_file(output_path: Path, content: str) -> None:
    """Write a UTF-8 report file, creating parent directories.

    Args:
        output_path: Target file path.
        content: Rendered report content.

    Raises:
        ReportWriteError: If directory creation or file writing fails.
    """
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        logger.warning(
            f"Failed to write report file (output_path={output_path} error={exc})"
        )
        raise ReportWriteError(f"Failed to write report file: {output_path}") from exc
