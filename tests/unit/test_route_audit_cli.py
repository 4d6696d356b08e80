# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the route audit CLI."""

import io
import json
import logging
import re
from pathlib import Path

import pytest
from rich.logging import RichHandler

from cli.route_audit import configure_logging, run


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


def _sample_project(root: Path) -> None:
    _write_file(
        root / "Pages" / "Admin.razor",
        '@page "/admin"\n@attribute [Authorize(Roles="Admin")]\n',
    )
    _write_file(
        root / "Shared" / "Nav.razor",
        '<a href="/admin">Go</a>\n<a href="/nowhere">?</a>\n',
    )
    _write_file(root / "bin" / "Stale.razor", '@page "/stale"\n')


def test_cli_writes_markdown_report(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    output_path = tmp_path / "out" / "report.md"
    _sample_project(project_root)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--path", str(project_root), "--output", str(output_path)],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert stderr.getvalue() == ""
    report = output_path.read_text(encoding="utf-8")
    assert "| /admin | yes | yes | yes | Pages/Admin.razor |" in report
    assert (
        "| Shared/Nav.razor | 1 | href | relative | <u><em>/admin</em></u> | "
        '<span style="color:green">matched</span> |'
    ) in report
    assert '<span style="color:red">unknown</span>' in report
    assert not (tmp_path / "out" / "report_routes.csv").exists()
    console_text = _strip_ansi(stdout.getvalue())
    assert "links_matched" in console_text
    assert "Markdown report written" in console_text


def test_cli_writes_csv_and_json_exports(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    output_path = tmp_path / "out" / "report.md"
    json_path = tmp_path / "out" / "audit.json"
    _sample_project(project_root)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "--path",
            str(project_root),
            "--output",
            str(output_path),
            "--csv",
            "--json-output",
            str(json_path),
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    routes_csv = (tmp_path / "out" / "report_routes.csv").read_text(encoding="utf-8")
    links_csv = (tmp_path / "out" / "report_links.csv").read_text(encoding="utf-8")
    assert routes_csv.splitlines()[0] == "Route,RouteActive,Authorized,Admin,File"
    assert "/admin,yes,yes,yes,Pages/Admin.razor" in routes_csv.splitlines()
    assert "Shared/Nav.razor,2,href,relative,/nowhere,unknown" in links_csv.splitlines()
    assert "<span" not in links_csv
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert [route["route"] for route in payload["routes"]] == ["/admin", "/stale"]


def test_cli_exclude_pattern_skips_paths(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    output_path = tmp_path / "report.md"
    _sample_project(project_root)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "--path",
            str(project_root),
            "--output",
            str(output_path),
            "--exclude",
            "bin/",
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert "/stale" not in output_path.read_text(encoding="utf-8")


def test_cli_respect_gitignore_skips_ignored_paths(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    output_path = tmp_path / "report.md"
    _sample_project(project_root)
    _write_file(project_root / ".gitignore", "bin/\n")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "--path",
            str(project_root),
            "--output",
            str(output_path),
            "--respect-gitignore",
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert "/stale" not in output_path.read_text(encoding="utf-8")


def test_cli_missing_root_exits_with_two_and_writes_nothing(tmp_path: Path) -> None:
    output_path = tmp_path / "report.md"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--path", str(tmp_path / "missing"), "--output", str(output_path)],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Root folder not found" in stderr.getvalue()
    assert not output_path.exists()


def test_cli_rejects_unknown_arguments() -> None:
    exit_code = run(["--bogus"], stdout=io.StringIO(), stderr=io.StringIO())

    assert exit_code == 2


def test_cli_report_write_failure_exits_with_one(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _sample_project(project_root)
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--path", str(project_root), "--output", str(blocker / "report.md")],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 1
    assert "Failed to write report file" in stderr.getvalue()


def test_cli_output_is_identical_across_runs(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _sample_project(project_root)
    first = tmp_path / "first.md"
    second = tmp_path / "second.md"

    for output_path in (first, second):
        exit_code = run(
            ["--path", str(project_root), "--output", str(output_path), "--csv"],
            stdout=io.StringIO(),
            stderr=io.StringIO(),
        )
        assert exit_code == 0

    assert first.read_bytes() == second.read_bytes()
    assert (tmp_path / "first_links.csv").read_bytes() == (
        tmp_path / "second_links.csv"
    ).read_bytes()


@pytest.mark.parametrize(
    ("verbose", "expected_level"),
    [(False, logging.INFO), (True, logging.DEBUG)],
)
def test_configure_logging_installs_rich_handler_on_stderr(
    monkeypatch: pytest.MonkeyPatch, verbose: bool, expected_level: int
) -> None:
    captured: dict = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    configure_logging(verbose=verbose)

    assert captured["level"] == expected_level
    (handler,) = captured["handlers"]
    assert isinstance(handler, RichHandler)
    assert handler.console.stderr
