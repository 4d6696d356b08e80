# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for route and link audit artifacts."""

import re
from dataclasses import dataclass
from typing import Literal

Classification = Literal["external", "matched", "unknown"]
LinkMethod = Literal["href", "NavigateTo"]


@dataclass(frozen=True)
class CommentRange:
    """Represent one ``@* ... *@`` span as inclusive character offsets."""

    start: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


@dataclass(frozen=True)
class ExtractedRoute:
    """Represent one ``@page`` declaration found in a file.

    Attributes:
        route: Literal route template.
        active: ``False`` when the declaration sits inside a comment span.
        offset: Character offset of the declaration in the file text.
    """

    route: str
    active: bool
    offset: int


@dataclass(frozen=True)
class AuthorizationInfo:
    """Represent the file-level authorization outcome.

    Attributes:
        authorized: Whether the file requires authorization.
        roles: Required role names, sorted case-insensitively.
    """

    authorized: bool
    roles: tuple[str, ...] = ()


@dataclass(frozen=True)
class RouteRecord:
    """Represent one discovered route declaration.

    Attributes:
        route: Literal route template; identity is case-insensitive.
        active: Whether the declaration is outside any comment span.
        authorized: Whether the owning file requires authorization.
        roles: Required role names; empty means any authenticated user.
        source_file: Root-relative POSIX path of the owning file.
    """

    route: str
    active: bool
    authorized: bool
    roles: tuple[str, ...]
    source_file: str

    def has_role(self, role: str) -> bool:
        needle = role.casefold()
        return any(candidate.casefold() == needle for candidate in self.roles)


@dataclass(frozen=True)
class RoutePattern:
    """Represent one compiled active route template."""

    template: str
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.fullmatch(path) is not None


@dataclass(frozen=True)
class LinkRecord:
    """Represent one classified link or navigation destination.

    Attributes:
        source_file: Root-relative POSIX path of the scanned file.
        line_number: Source line (1-based).
        destination: Trimmed destination string as written.
        method: Syntactic idiom that produced the destination.
        scheme: Classified prefix (``http``, ``mailto``, ``//``, ``relative``...).
        classification: ``external``, ``matched`` or ``unknown``.
    """

    source_file: str
    line_number: int
    destination: str
    method: LinkMethod
    scheme: str
    classification: Classification
