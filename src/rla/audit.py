# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Two-pass route and link audit pipeline."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from rla.authorization import extract_authorization, sort_case_insensitive
from rla.links import scan_links
from rla.model import LinkRecord, RoutePattern, RouteRecord
from rla.patterns import compile_route_patterns
from rla.routes import extract_routes
from rla.sources import (
    LINK_SCAN_FILE_SUFFIXES,
    ROUTE_FILE_SUFFIXES,
    ExclusionMatcher,
    iter_sources,
    split_lines,
)

logger = logging.getLogger(__name__)


class AuditError(RuntimeError):
    """Represent a fatal audit failure."""


class RootNotFoundError(AuditError):
    """Represent a missing or non-directory audit root."""


@dataclass(frozen=True)
class RoutePassResult:
    """Represent the output of the route and authorization pass.

    Attributes:
        routes: Route records in processing order.
        role_vocabulary: Distinct role names across all route records.
    """

    routes: tuple[RouteRecord, ...]
    role_vocabulary: tuple[str, ...]


@dataclass(frozen=True)
class AuditResult:
    """Represent the ordered audit output handed to report builders."""

    routes: tuple[RouteRecord, ...]
    role_vocabulary: tuple[str, ...]
    links: tuple[LinkRecord, ...]


def run_route_pass(sources: Iterable[tuple[str, str]]) -> RoutePassResult:
    """Extract routes and authorization from route-bearing files.

    Files without any ``@page`` declaration contribute nothing, including
    their roles.

    Args:
        sources: ``(source_file, text)`` pairs.

    Returns:
        Route records and the role vocabulary.
    """
    routes: list[RouteRecord] = []
    for source_file, text in sources:
        extracted = extract_routes(text)
        if not extracted:
            continue
        auth = extract_authorization(text)
        routes.extend(
            RouteRecord(
                route=route.route,
                active=route.active,
                authorized=auth.authorized,
                roles=auth.roles,
                source_file=source_file,
            )
            for route in extracted
        )
    return RoutePassResult(
        routes=tuple(routes), role_vocabulary=build_role_vocabulary(routes)
    )


def build_role_vocabulary(routes: Iterable[RouteRecord]) -> tuple[str, ...]:
    """Merge route roles case-insensitively, keeping first-seen spelling."""
    roles: dict[str, str] = {}
    for route in routes:
        for role in route.roles:
            roles.setdefault(role.casefold(), role)
    return tuple(sort_case_insensitive(roles.values()))


def run_link_pass(
    sources: Iterable[tuple[str, list[str]]], patterns: list[RoutePattern]
) -> tuple[LinkRecord, ...]:
    """Scan and classify links in every scannable file.

    Args:
        sources: ``(source_file, lines)`` pairs.
        patterns: Final compiled route patterns.

    Returns:
        Link records in processing order.
    """
    links: list[LinkRecord] = []
    for source_file, lines in sources:
        links.extend(scan_links(source_file, lines, patterns))
    return tuple(links)


def sort_routes(routes: Iterable[RouteRecord]) -> tuple[RouteRecord, ...]:
    return tuple(
        sorted(
            routes,
            key=lambda route: (route.route.upper(), route.source_file.upper()),
        )
    )


def sort_links(links: Iterable[LinkRecord]) -> tuple[LinkRecord, ...]:
    return tuple(
        sorted(links, key=lambda link: (link.source_file.upper(), link.line_number))
    )


def audit_tree(root: Path, matcher: ExclusionMatcher | None = None) -> AuditResult:
    """Run the full two-pass audit over a source tree.

    Args:
        root: Root directory to audit.
        matcher: Optional exclusion matcher applied to both passes.

    Returns:
        Routes sorted by template then file, links sorted by file then line.

    Raises:
        RootNotFoundError: If ``root`` is not an existing directory.
    """
    if not root.is_dir():
        raise RootNotFoundError(f"Root folder not found: {root}")

    route_pass = run_route_pass(
        iter_sources(root=root, suffixes=ROUTE_FILE_SUFFIXES, matcher=matcher)
    )
    patterns = compile_route_patterns(route_pass.routes)
    logger.info(
        f"Route pass completed (path={root} routes={len(route_pass.routes)} "
        f"patterns={len(patterns)} roles={len(route_pass.role_vocabulary)})"
    )

    link_sources = (
        (source_file, split_lines(text))
        for source_file, text in iter_sources(
            root=root, suffixes=LINK_SCAN_FILE_SUFFIXES, matcher=matcher
        )
    )
    links = run_link_pass(link_sources, patterns)
    logger.info(f"Link pass completed (path={root} links={len(links)})")

    return AuditResult(
        routes=sort_routes(route_pass.routes),
        role_vocabulary=route_pass.role_vocabulary,
        links=sort_links(links),
    )
