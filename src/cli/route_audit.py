# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Route and link audit CLI for Razor/Blazor source trees."""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from rla.audit import AuditError, AuditResult, RootNotFoundError, audit_tree
from rla.reporting import (
    MarkdownReportBuilder,
    links_csv_path,
    render_json,
    render_links_csv,
    render_routes_csv,
    routes_csv_path,
    write_text_file,
)
from rla.sources import ExclusionMatcher

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "routes.md"


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich on stderr.

    Args:
        verbose: Emit debug records, including skipped and excluded files.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="route-audit")
    parser.add_argument(
        "--path",
        default=None,
        help="Root folder to audit. Defaults to the current directory.",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        help="Markdown report path.",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also write <output>_routes.csv and <output>_links.csv.",
    )
    parser.add_argument(
        "--json-output",
        required=False,
        help="Optional output file path for a JSON export.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern of root-relative paths to skip. Repeatable.",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        help="Also skip paths ignored by .gitignore files under the root.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the audit command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code: 0 on success, 2 for usage errors or a missing root, 1 for
        any other failure.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    root_path = Path(args.path) if args.path else Path.cwd()
    if not root_path.is_dir():
        logger.warning(f"Root folder not found (path={root_path})")
        stderr.write(f"Root folder not found: {root_path}\n")
        return 2

    try:
        matcher = _build_matcher(
            root_path=root_path,
            patterns=args.exclude,
            respect_gitignore=args.respect_gitignore,
        )
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read .gitignore files (error={exc})")
        stderr.write(f"Failed to read .gitignore files: {exc}\n")
        return 2

    try:
        result = audit_tree(root=root_path, matcher=matcher)
        written = _write_reports(
            result=result,
            output_path=Path(args.output),
            export_csv=args.csv,
            json_output=Path(args.json_output) if args.json_output else None,
        )
    except RootNotFoundError as exc:
        logger.warning(f"Root folder not found (path={root_path})")
        stderr.write(f"{exc}\n")
        return 2
    except AuditError as exc:
        logger.warning(f"Audit failed (error={exc})")
        stderr.write(f"{exc}\n")
        return 1
    except Exception as exc:
        logger.exception(f"Unexpected audit failure (path={root_path})")
        stderr.write(f"{exc!r}\n")
        return 1

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    _write_summary(result=result, console=console)
    for label, path in written:
        console.print(
            f"{label} written: {path.resolve()}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    return 0


def _build_matcher(
    root_path: Path, patterns: list[str], respect_gitignore: bool
) -> ExclusionMatcher | None:
    if not patterns and not respect_gitignore:
        return None
    return ExclusionMatcher.from_patterns(
        root=root_path, patterns=patterns, respect_gitignore=respect_gitignore
    )


def _write_reports(
    result: AuditResult,
    output_path: Path,
    export_csv: bool,
    json_output: Path | None,
) -> list[tuple[str, Path]]:
    """Render every requested report in memory, then write them.

    Args:
        result: Audit result.
        output_path: Markdown report path.
        export_csv: Whether to write the CSV exports.
        json_output: Optional JSON export path.

    Returns:
        ``(label, path)`` pairs of written files.

    Raises:
        ReportWriteError: If any report file cannot be written.
    """
    rendered: list[tuple[str, Path, str]] = [
        ("Markdown report", output_path, MarkdownReportBuilder(result).build())
    ]
    if export_csv:
        rendered.append(
            ("Routes CSV", routes_csv_path(output_path), render_routes_csv(result))
        )
        rendered.append(
            ("Links CSV", links_csv_path(output_path), render_links_csv(result))
        )
    if json_output is not None:
        rendered.append(("JSON export", json_output, render_json(result)))

    for _, path, content in rendered:
        write_text_file(output_path=path, content=content)
    return [(label, path) for label, path, _ in rendered]


def _write_summary(result: AuditResult, console: Console) -> None:
    """Print route and link counters as a table."""
    classifications = Counter(link.classification for link in result.links)
    table = Table(title="Route audit summary", show_header=True)
    table.add_column("metric")
    table.add_column("count", justify="right")
    rows = [
        ("routes", len(result.routes)),
        ("routes_active", sum(1 for route in result.routes if route.active)),
        ("routes_authorized", sum(1 for route in result.routes if route.authorized)),
        ("roles", len(result.role_vocabulary)),
        ("links", len(result.links)),
        ("links_external", classifications["external"]),
        ("links_matched", classifications["matched"]),
        ("links_unknown", classifications["unknown"]),
    ]
    for metric, count in rows:
        table.add_row(metric, str(count))
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
