"""
errors.py

Responsibility: The error taxonomy shared by every stage.

Every fatal error aborts the run; `cli.main` turns it into a single
`Error: ...` line on stderr and exit code 1. `IntegrationWarning` is the only
non-fatal member: it is logged and swallowed by the workflow.
"""

from __future__ import annotations

from pathlib import Path


class RepoStarterError(RuntimeError):
    pass


class InvalidInput(RepoStarterError):
    pass


class ConfigError(RepoStarterError):
    pass


class RenderError(RepoStarterError):
    pass


class WorkspaceError(RepoStarterError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        super().__init__(f"Cannot use workspace {path}: {detail}")


class MissingDependency(RepoStarterError):
    def __init__(self, tool: str, detail: str = "") -> None:
        self.tool = tool
        msg = f"Required tool is not available: {tool}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class NotAuthenticated(RepoStarterError):
    def __init__(self, tool: str = "gh") -> None:
        self.tool = tool
        super().__init__(f"{tool} is not authenticated (run `{tool} auth login` first)")


class TargetNotEmpty(RepoStarterError):
    def __init__(self, path: Path, reason: str = "is not empty") -> None:
        self.path = path
        super().__init__(f"Target directory {reason}: {path}")


class VersionControlFailed(RepoStarterError):
    def __init__(self, step: str, exit_code: int) -> None:
        self.step = step
        self.exit_code = exit_code
        super().__init__(f"git {step} failed with exit code {exit_code}")


class RemoteCreateFailed(RepoStarterError):
    def __init__(self, exit_code: int) -> None:
        self.exit_code = exit_code
        super().__init__(
            f"Remote repository creation failed with exit code {exit_code} "
            "(the local repository was kept)"
        )


class IntegrationWarning(RepoStarterError):
    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        super().__init__(f"Could not launch {tool}: {detail}")
