# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Source file discovery and best-effort reading."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Literal

import pathspec

logger = logging.getLogger(__name__)

ROUTE_FILE_SUFFIXES: tuple[str, ...] = (".razor",)
LINK_SCAN_FILE_SUFFIXES: tuple[str, ...] = (".razor", ".cs", ".cshtml", ".html")

ReadStatus = Literal["read", "skipped"]


@dataclass(frozen=True)
class SourceReadResult:
    """Represent the outcome of reading one source file.

    Attributes:
        path: File path that was read.
        status: ``read`` on success, ``skipped`` when the file was unreadable.
        text: Decoded content; empty when skipped.
        error: Failure detail when skipped.
    """

    path: Path
    status: ReadStatus
    text: str = ""
    error: str | None = None


class ExclusionMatcher:
    """Match root-relative paths against gitignore-style exclusion patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_patterns(
        cls,
        root: Path,
        patterns: list[str],
        respect_gitignore: bool = False,
    ) -> "ExclusionMatcher":
        """Build matcher from explicit patterns and optionally .gitignore files.

        Args:
            root: Audit root.
            patterns: Root-relative gitignore-style patterns.
            respect_gitignore: Also load every ``.gitignore`` below the root.

        Returns:
            Configured exclusion matcher.

        Raises:
            OSError: If .gitignore files cannot be read.
            UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
        """
        lines = list(patterns)
        if respect_gitignore:
            for ignore_path in sorted(root.rglob(".gitignore")):
                base = ignore_path.parent.relative_to(root).as_posix()
                if base == ".":
                    base = ""
                for line in ignore_path.read_text(encoding="utf-8").splitlines():
                    lines.append(cls._rebase_pattern(line=line, base=base))
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(lines))

    @staticmethod
    def _rebase_pattern(line: str, base: str) -> str:
        """Anchor a nested .gitignore pattern below its own directory.

        Patterns without an inner slash keep matching at any depth below
        ``base``; blank and comment lines pass through unchanged.
        """
        if not base or not line.strip() or line.startswith("#"):
            return line
        negation = "!" if line.startswith("!") else ""
        pattern = line[len(negation) :]
        if not pattern:
            return line
        if pattern.startswith("/"):
            rebased = f"/{base}{pattern}"
        elif "/" in pattern.rstrip("/"):
            rebased = f"/{base}/{pattern}"
        else:
            rebased = f"/{base}/**/{pattern}"
        return f"{negation}{rebased}"

    def matches(self, relative_path: str) -> bool:
        """Check whether a root-relative file path is excluded."""
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        return self._spec.match_file(normalized)


def discover_files(
    root: Path,
    suffixes: tuple[str, ...],
    matcher: ExclusionMatcher | None = None,
) -> list[Path]:
    """Recursively list files under a root whose suffix is accepted.

    Args:
        root: Audit root directory.
        suffixes: Accepted lower-case file suffixes.
        matcher: Optional exclusion matcher.

    Returns:
        Matching file paths in sorted order.
    """
    files: list[Path] = []
    for path in sorted(root.rglob("*")):
        if path.suffix.lower() not in suffixes or not path.is_file():
            continue
        if matcher is not None and matcher.matches(relative_path(path, root)):
            logger.debug(f"Excluded file (file_path={path})")
            continue
        files.append(path)
    return files


def read_source(path: Path) -> SourceReadResult:
    """Read a file as UTF-8 text, reporting failures as a skipped result.

    Args:
        path: File to read.

    Returns:
        Read result; never raises for unreadable files.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug(f"Skipping unreadable file (file_path={path} error={exc})")
        return SourceReadResult(path=path, status="skipped", error=str(exc))
    return SourceReadResult(path=path, status="read", text=text)


def iter_sources(
    root: Path,
    suffixes: tuple[str, ...],
    matcher: ExclusionMatcher | None = None,
) -> Iterator[tuple[str, str]]:
    """Yield ``(relative_path, text)`` for every readable matching file."""
    for path in discover_files(root=root, suffixes=suffixes, matcher=matcher):
        result = read_source(path)
        if result.status == "skipped":
            continue
        yield relative_path(path, root), result.text


def split_lines(text: str) -> list[str]:
    """Split decoded text into lines without a phantom trailing empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def relative_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
