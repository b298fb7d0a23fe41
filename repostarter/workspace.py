"""
workspace.py

Responsibility: Prepare the local directory that holds the new project.

- `resolve_workspace` turns a repository name into an absolute path.
- `prepare_workspace` refuses non-empty targets, then creates the directory.
- `working_directory` moves the process into the workspace and restores the
  starting directory exactly once, however the block exits.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from repostarter.errors import TargetNotEmpty, WorkspaceError

logger = logging.getLogger(__name__)


def resolve_workspace(repo_name: str, start_dir: Path) -> Path:
    return (start_dir / repo_name).resolve()


def ensure_empty_target(path: Path) -> None:
    """
    Raise TargetNotEmpty unless `path` is missing or an empty directory.
    """
    if not path.exists():
        return
    if not path.is_dir():
        raise TargetNotEmpty(path, reason="exists and is not a directory")
    if any(path.iterdir()):
        raise TargetNotEmpty(path)


def prepare_workspace(path: Path) -> Path:
    ensure_empty_target(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(path, e.strerror or str(e)) from e
    logger.info("Using workspace %s", path)
    return path


@contextlib.contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    previous = Path.cwd()
    try:
        os.chdir(path)
    except OSError as e:
        raise WorkspaceError(path, e.strerror or str(e)) from e
    try:
        yield path
    finally:
        os.chdir(previous)
