# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""File-level authorization marker extraction."""

import re
from typing import Iterable

from rla.model import AuthorizationInfo

HAS_AUTHORIZE_RX = re.compile(
    r"(@attribute\s*\[\s*Authorize(?:\s*\([^)]*\))?\s*\]"
    r"|\[\s*Authorize(?:\s*\([^)]*\))?\s*\]"
    r"|@attribute\s+Authorize)",
    re.IGNORECASE | re.DOTALL,
)

HAS_ALLOW_ANONYMOUS_RX = re.compile(
    r"(@attribute\s*\[\s*AllowAnonymous\s*\]|\[\s*AllowAnonymous\s*\])",
    re.IGNORECASE | re.DOTALL,
)

AUTHORIZE_BLOCK_RX = re.compile(
    r"(@attribute\s*)?\[\s*Authorize(?:\s*\((?P<args>[^)]*)\))?\s*\]",
    re.IGNORECASE | re.DOTALL,
)

ROLES_ARG_RX = re.compile(
    r"""\b(?:Role|Roles)\s*=\s*(?:"(?P<dq>[^"]+)"|'(?P<sq>[^']+)')""",
    re.IGNORECASE,
)

ROLE_SEPARATOR_RX = re.compile(r"[,;]")


def extract_authorization(text: str) -> AuthorizationInfo:
    """Determine the authorization requirement declared by a file.

    The file is authorized when it carries at least one ``Authorize`` marker
    and no ``AllowAnonymous`` marker anywhere. Roles come from every
    ``Role``/``Roles`` assignment inside ``[Authorize(...)]`` arguments.

    Args:
        text: Raw file content.

    Returns:
        Authorization outcome with case-insensitively sorted roles; roles are
        empty when the file is not authorized.
    """
    has_authorize = HAS_AUTHORIZE_RX.search(text) is not None
    has_allow_anonymous = HAS_ALLOW_ANONYMOUS_RX.search(text) is not None
    authorized = has_authorize and not has_allow_anonymous
    if not authorized:
        return AuthorizationInfo(authorized=False, roles=())
    return AuthorizationInfo(authorized=True, roles=tuple(extract_roles(text)))


def extract_roles(text: str) -> list[str]:
    """Collect role names from ``[Authorize(...)]`` arguments.

    Args:
        text: Raw file content.

    Returns:
        Case-insensitively distinct role names, first-seen spelling, sorted
        case-insensitively.
    """
    roles: dict[str, str] = {}
    for block in AUTHORIZE_BLOCK_RX.finditer(text):
        args = block.group("args") or ""
        if not args.strip():
            continue
        for role_match in ROLES_ARG_RX.finditer(args):
            value = role_match.group("dq") or role_match.group("sq") or ""
            for part in ROLE_SEPARATOR_RX.split(value):
                role = part.strip()
                if role:
                    roles.setdefault(role.casefold(), role)
    return sort_case_insensitive(roles.values())


def sort_case_insensitive(values: Iterable[str]) -> list[str]:
    """Sort strings comparing their upper-cased form, so `_` follows letters."""
    return sorted(values, key=lambda value: (value.upper(), value))
