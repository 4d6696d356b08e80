# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Report builders for route and link audit results."""

from rla.reporting.exports import (
    ReportWriteError,
    links_csv_path,
    render_json,
    render_links_csv,
    render_routes_csv,
    routes_csv_path,
    write_text_file,
)
from rla.reporting.markdown import MarkdownReportBuilder

__all__ = [
    "MarkdownReportBuilder",
    "ReportWriteError",
    "links_csv_path",
    "render_json",
    "render_links_csv",
    "render_routes_csv",
    "routes_csv_path",
    "write_text_file",
]
