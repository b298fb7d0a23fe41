"""
integrations.py

Responsibility: Best-effort launches of an editor and a desktop companion app
pointed at the new workspace.

Launch failures raise IntegrationWarning; the workflow logs and swallows it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repostarter.config import IntegrationConfig
from repostarter.errors import IntegrationWarning
from repostarter.executor import CommandExecutor

logger = logging.getLogger(__name__)


def launch(executor: CommandExecutor, command: tuple[str, ...], *, cwd: Path) -> None:
    program, *args = command
    try:
        result = executor.run(program, *args, cwd=cwd)
    except OSError as e:
        raise IntegrationWarning(program, str(e)) from e
    if not result.ok:
        raise IntegrationWarning(program, f"exited with code {result.returncode}")


def enabled_launches(integrations: IntegrationConfig) -> list[tuple[str, ...]]:
    commands: list[tuple[str, ...]] = []
    if integrations.open_editor:
        commands.append(integrations.editor)
    if integrations.open_desktop:
        commands.append(integrations.desktop)
    return commands


def run_integrations(
    executor: CommandExecutor,
    integrations: IntegrationConfig,
    *,
    cwd: Path,
) -> list[IntegrationWarning]:
    """Launch every enabled integration; return the warnings instead of raising."""
    warnings: list[IntegrationWarning] = []
    for command in enabled_launches(integrations):
        try:
            launch(executor, command, cwd=cwd)
        except IntegrationWarning as w:
            logger.warning("%s", w)
            warnings.append(w)
    return warnings
