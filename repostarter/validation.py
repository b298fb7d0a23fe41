"""
validation.py

Responsibility: Check the repository name and resolve the visibility flag.

Nothing in here touches the filesystem or launches a process.
"""

from __future__ import annotations

import re
from enum import Enum

from repostarter.errors import InvalidInput

_REPO_NAME_RE = re.compile(r"[A-Za-z0-9._-]+")


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def flag(self) -> str:
        return f"--{self.value}"

    @classmethod
    def from_token(cls, token: str | None) -> "Visibility":
        """
        Map a visibility token to a Visibility.

        Accepts `public`/`private` with or without leading dashes. Anything
        else, including None, resolves to PRIVATE.
        """
        if token is None:
            return cls.PRIVATE
        normalized = token.strip().lstrip("-").lower()
        if normalized == cls.PUBLIC.value:
            return cls.PUBLIC
        return cls.PRIVATE

    @classmethod
    def is_token(cls, token: str) -> bool:
        return token.strip().lstrip("-").lower() in {v.value for v in cls}


def validate_repo_name(name: str) -> str:
    """
    Return `name` unchanged if it is usable as both a directory name and a
    hosted repository name; otherwise raise InvalidInput.
    """
    if not _REPO_NAME_RE.fullmatch(name):
        raise InvalidInput(
            f"Invalid repository name {name!r}: only letters, digits, '.', '_' and '-' are allowed"
        )
    if name in {".", ".."}:
        raise InvalidInput(f"Invalid repository name {name!r}: must name a new directory")
    if name.startswith("-"):
        raise InvalidInput(f"Invalid repository name {name!r}: must not start with '-'")
    return name
