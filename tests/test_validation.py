from __future__ import annotations

import pytest

from repostarter.errors import InvalidInput
from repostarter.validation import Visibility, validate_repo_name


@pytest.mark.parametrize("name", ["my-proj", "proj", "a.b_c-d", "Repo42", "..hidden", "x"])
def test_valid_names_pass_through(name: str) -> None:
    assert validate_repo_name(name) == name


@pytest.mark.parametrize("name", ["bad name!", "", "a/b", "..", ".", "-x", "--public", "naïve", "trailing\n", "semi;colon", "~home"])
def test_invalid_names_are_rejected(name: str) -> None:
    with pytest.raises(InvalidInput, match="Invalid repository name"):
        validate_repo_name(name)


def test_invalid_name_has_no_filesystem_side_effects(isolated_env) -> None:
    with pytest.raises(InvalidInput):
        validate_repo_name("bad name!")
    assert list(isolated_env.iterdir()) == []


@pytest.mark.parametrize(
    "token, expected",
    [
        ("public", Visibility.PUBLIC),
        ("--public", Visibility.PUBLIC),
        ("PUBLIC", Visibility.PUBLIC),
        ("private", Visibility.PRIVATE),
        ("--private", Visibility.PRIVATE),
        (None, Visibility.PRIVATE),
        ("internal", Visibility.PRIVATE),
        ("", Visibility.PRIVATE),
    ],
)
def test_visibility_defaults_to_private(token: str | None, expected: Visibility) -> None:
    assert Visibility.from_token(token) is expected


def test_visibility_flag() -> None:
    assert Visibility.PUBLIC.flag == "--public"
    assert Visibility.PRIVATE.flag == "--private"
    assert Visibility.is_token("--private")
    assert not Visibility.is_token("--internal")


def test_leading_dash_is_rejected() -> None:
    with pytest.raises(InvalidInput, match="must not start with '-'"):
        validate_repo_name("-x")
    assert validate_repo_name("x-") == "x-"
