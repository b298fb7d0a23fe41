"""
publisher.py

Responsibility: Create the hosted repository with `gh` and push to it.

This module is the only place that builds `gh repo create` / `gh api`
arguments. Failures leave the local repository untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repostarter.errors import RemoteCreateFailed
from repostarter.executor import CommandExecutor
from repostarter.preflight import GH
from repostarter.validation import Visibility

logger = logging.getLogger(__name__)


def remote_repo_ref(name: str, owner: str | None = None) -> str:
    return f"{owner}/{name}" if owner else name


def create_repo_args(
    *,
    name: str,
    visibility: Visibility,
    remote: str = "origin",
    owner: str | None = None,
    description: str = "",
) -> list[str]:
    args = [
        "repo",
        "create",
        remote_repo_ref(name, owner),
        visibility.flag,
        "--source=.",
        f"--remote={remote}",
        "--push",
    ]
    if description:
        args.extend(["--description", description])
    return args


def create_and_push(
    executor: CommandExecutor,
    *,
    workdir: Path,
    name: str,
    visibility: Visibility,
    remote: str = "origin",
    owner: str | None = None,
    description: str = "",
) -> None:
    logger.info("Creating %s repository %s", visibility.value, remote_repo_ref(name, owner))
    args = create_repo_args(name=name, visibility=visibility, remote=remote, owner=owner, description=description)
    result = executor.run(GH, *args, cwd=workdir)
    if not result.ok:
        raise RemoteCreateFailed(result.returncode)


def fetch_gitignore_template(executor: CommandExecutor, template: str, *, cwd: Path) -> str | None:
    """
    Fetch a standard ignore-file template (e.g. "Python") from the host.

    Returns None when the template cannot be fetched; the caller keeps its
    static ignore file in that case.
    """
    result = executor.run(GH, "api", f"gitignore/templates/{template}", "--jq", ".source", cwd=cwd, capture=True)
    if not result.ok or not result.output.strip():
        return None
    text = result.output
    return text if text.endswith("\n") else text + "\n"
