"""
preflight.py

Responsibility: Confirm the external tools are usable before anything is
created on disk or on the host.
"""

from __future__ import annotations

import logging

from repostarter.errors import MissingDependency, NotAuthenticated
from repostarter.executor import CommandExecutor

logger = logging.getLogger(__name__)

GIT = "git"
GH = "gh"
REQUIRED_TOOLS: tuple[str, ...] = (GIT, GH)


def check_tool(executor: CommandExecutor, tool: str) -> None:
    try:
        result = executor.run(tool, "--version", capture=True)
    except OSError as e:
        raise MissingDependency(tool, str(e)) from e
    if not result.ok:
        raise MissingDependency(tool, f"`{tool} --version` exited with {result.returncode}")
    logger.debug("%s: %s", tool, result.output.strip().splitlines()[0] if result.output.strip() else "ok")


def check_authenticated(executor: CommandExecutor) -> None:
    result = executor.run(GH, "auth", "status", capture=True)
    if not result.ok:
        raise NotAuthenticated(GH)


def run_preflight(executor: CommandExecutor, tools: tuple[str, ...] = REQUIRED_TOOLS) -> None:
    """
    Check every tool in order, then the gh login state.

    Raises MissingDependency for the first unusable tool and NotAuthenticated
    when `gh auth status` fails.
    """
    logger.info("Checking required tools: %s", ", ".join(tools))
    for tool in tools:
        check_tool(executor, tool)
    check_authenticated(executor)
