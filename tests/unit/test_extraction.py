# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for comment, route and authorization extraction."""

from rla.authorization import extract_authorization, extract_roles
from rla.comments import find_comment_ranges, is_in_comment
from rla.model import CommentRange
from rla.routes import extract_routes


def test_comment_ranges_are_inclusive_and_in_text_order() -> None:
    text = "ab@* one *@cd@*\ntwo\n*@"

    ranges = find_comment_ranges(text)

    assert ranges == [CommentRange(start=2, end=10), CommentRange(start=13, end=21)]
    assert is_in_comment(2, ranges)
    assert is_in_comment(10, ranges)
    assert not is_in_comment(11, ranges)
    assert is_in_comment(17, ranges)


def test_comment_ranges_do_not_nest() -> None:
    text = "@* outer @* inner *@ tail *@"

    ranges = find_comment_ranges(text)

    assert ranges == [CommentRange(start=0, end=19)]


def test_route_inside_comment_is_inactive() -> None:
    text = "\n".join(
        [
            '@page "/live"',
            '@* @page "/retired" *@',
            "@*",
            '@page "/also-retired"',
            "*@",
        ]
    )

    routes = extract_routes(text)

    assert [(route.route, route.active) for route in routes] == [
        ("/live", True),
        ("/retired", False),
        ("/also-retired", False),
    ]


def test_route_extraction_supports_multiple_templates_and_case() -> None:
    text = '@PAGE "/items"\n@page"/items/{id:int}"\n@page "" \n'

    routes = extract_routes(text)

    assert [route.route for route in routes] == ["/items", "/items/{id:int}"]
    assert all(route.active for route in routes)
    assert routes[0].offset == 0


def test_authorize_without_arguments_is_authorized_without_roles() -> None:
    info = extract_authorization('@page "/x"\n@attribute [Authorize]\n')

    assert info.authorized is True
    assert info.roles == ()


def test_bare_attribute_authorize_form_is_detected() -> None:
    info = extract_authorization("@attribute Authorize\n")

    assert info.authorized is True


def test_allow_anonymous_always_wins() -> None:
    text = "\n".join(
        [
            '@attribute [Authorize(Roles = "Admin")]',
            "[Authorize]",
            "@attribute [AllowAnonymous]",
        ]
    )

    info = extract_authorization(text)

    assert info.authorized is False
    assert info.roles == ()


def test_authorize_view_component_is_not_a_marker() -> None:
    info = extract_authorization("<AuthorizeView><p>hi</p></AuthorizeView>")

    assert info.authorized is False


def test_roles_are_split_trimmed_and_sorted_case_insensitively() -> None:
    text = "\n".join(
        [
            '@attribute [Authorize(Roles = "editor; Admin, ,viewer")]',
            "[Authorize(Policy = \"x\", role='ADMIN')]",
        ]
    )

    info = extract_authorization(text)

    assert info.authorized is True
    assert info.roles == ("Admin", "editor", "viewer")


def test_role_extraction_ignores_markers_without_arguments() -> None:
    assert extract_roles('[Authorize] [Authorize()] [Authorize(Policy="p")]') == []
