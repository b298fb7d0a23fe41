"""
executor.py

Responsibility: The single "run an external command" primitive.

Every stage talks to git, gh and the integration launchers through a
`CommandExecutor`, so the workflow can be exercised with a fake executor that
never spawns a process.

Rules:
- Calls block until the child exits; there is no timeout.
- A program that cannot be launched raises `OSError` (usually
  `FileNotFoundError`); callers decide what that means for their stage.
- A non-zero exit is returned, never raised.
"""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandInvocation:
    program: str
    args: tuple[str, ...] = ()
    cwd: Path | None = None
    env: dict[str, str] | None = field(default=None, compare=False)
    # True: collect stdout+stderr as text. False: inherit the parent's stdio.
    capture: bool = False

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandExecutor(ABC):
    """Runs one external command and reports how it exited."""

    @abstractmethod
    def execute(self, invocation: CommandInvocation) -> CommandResult:
        ...

    def run(
        self,
        program: str,
        *args: str,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        return self.execute(CommandInvocation(program=program, args=tuple(args), cwd=cwd, env=env, capture=capture))


class SubprocessExecutor(CommandExecutor):
    def execute(self, invocation: CommandInvocation) -> CommandResult:
        logger.debug("Running: %s (cwd=%s)", invocation.display(), invocation.cwd or ".")
        if invocation.capture:
            proc = subprocess.run(
                invocation.argv,
                cwd=str(invocation.cwd) if invocation.cwd else None,
                env=invocation.env,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
            return CommandResult(returncode=proc.returncode, output=proc.stdout or "")

        proc = subprocess.run(
            invocation.argv,
            cwd=str(invocation.cwd) if invocation.cwd else None,
            env=invocation.env,
            check=False,
        )
        return CommandResult(returncode=proc.returncode)
