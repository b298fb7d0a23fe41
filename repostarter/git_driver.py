"""
git_driver.py

Responsibility: Turn a populated workspace into a repository with one commit.

The primary branch is always passed explicitly so the result does not depend
on the user's `init.defaultBranch` setting.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from repostarter.errors import VersionControlFailed
from repostarter.executor import CommandExecutor
from repostarter.preflight import GIT

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE = "Initial commit"


def git_env_deterministic(base_env: Mapping[str, str]) -> dict[str, str]:
    """
    Fixed git author/committer metadata, used only where the environment
    does not already set it.
    """
    env = dict(base_env)
    env.setdefault("GIT_AUTHOR_NAME", "repostarter")
    env.setdefault("GIT_AUTHOR_EMAIL", "repostarter@example.invalid")
    env.setdefault("GIT_COMMITTER_NAME", "repostarter")
    env.setdefault("GIT_COMMITTER_EMAIL", "repostarter@example.invalid")
    env.setdefault("GIT_AUTHOR_DATE", "1970-01-01T00:00:00Z")
    env.setdefault("GIT_COMMITTER_DATE", "1970-01-01T00:00:00Z")
    return env


def _git(executor: CommandExecutor, step: str, *args: str, cwd: Path, env: dict[str, str] | None) -> None:
    result = executor.run(GIT, *args, cwd=cwd, env=env)
    if not result.ok:
        raise VersionControlFailed(step, result.returncode)


def init_and_commit(
    executor: CommandExecutor,
    *,
    workdir: Path,
    primary_branch: str = "main",
    deterministic_git: bool = False,
) -> None:
    """Run `git init`, `git add -A` and `git commit` in `workdir`."""
    env = git_env_deterministic(os.environ) if deterministic_git else None

    logger.info("Initializing git repository on branch %s", primary_branch)
    _git(executor, "init", "init", "--initial-branch", primary_branch, cwd=workdir, env=env)
    _git(executor, "add", "add", "-A", cwd=workdir, env=env)
    _git(executor, "commit", "commit", "-m", INITIAL_COMMIT_MESSAGE, cwd=workdir, env=env)
