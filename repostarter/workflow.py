"""
workflow.py

Responsibility: Run the stages in order for one repository.

preflight -> workspace -> starter files -> git init/commit -> gh create/push
-> integrations

Any RepoStarterError other than IntegrationWarning stops the run. Nothing is
rolled back: a failure after the workspace exists leaves it on disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from repostarter.config import Config
from repostarter.errors import IntegrationWarning, RenderError
from repostarter.executor import CommandExecutor
from repostarter.git_driver import init_and_commit
from repostarter.integrations import run_integrations
from repostarter.preflight import run_preflight
from repostarter.publisher import create_and_push, fetch_gitignore_template
from repostarter.renderer import render_layers
from repostarter.validation import Visibility, validate_repo_name
from repostarter.workspace import prepare_workspace, resolve_workspace, working_directory

logger = logging.getLogger(__name__)

GITIGNORE = Path(".gitignore")


@dataclass(frozen=True)
class CreateRequest:
    name: str
    visibility: Visibility = Visibility.PRIVATE
    description: str = ""


@dataclass(frozen=True)
class CreateResult:
    name: str
    workspace: Path
    files: tuple[Path, ...]
    remote: str
    warnings: list[IntegrationWarning] = field(default_factory=list)


def _build_context(request: CreateRequest, config: Config) -> dict[str, object]:
    return {
        "repo_name": request.name,
        "description": request.description,
        "primary_branch": config.primary_branch,
        "visibility": request.visibility.value,
    }


def _apply_gitignore_template(executor: CommandExecutor, template: str, workdir: Path) -> None:
    text = fetch_gitignore_template(executor, template, cwd=workdir)
    if text is None:
        logger.warning("Could not fetch .gitignore template %r; keeping the default one", template)
        return
    try:
        (workdir / GITIGNORE).write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise RenderError(f"Cannot write {GITIGNORE}: {e.strerror or e}") from e


def write_starter_files(
    executor: CommandExecutor,
    request: CreateRequest,
    config: Config,
    workdir: Path,
) -> tuple[Path, ...]:
    result = render_layers(layers=config.layers, destination_dir=workdir, context=_build_context(request, config))
    if config.gitignore_template and GITIGNORE in result.files:
        _apply_gitignore_template(executor, config.gitignore_template, workdir)
    logger.info("Wrote %d starter file(s)", len(result.files))
    return result.files


def create_repository(
    request: CreateRequest,
    *,
    executor: CommandExecutor,
    config: Config | None = None,
    start_dir: Path | None = None,
) -> CreateResult:
    """
    Bootstrap `request.name` under `start_dir` (default: the current directory).

    The process working directory is the workspace while git/gh run, and is
    restored before this function returns or raises.
    """
    config = config or Config()
    name = validate_repo_name(request.name)

    run_preflight(executor)

    workdir = prepare_workspace(resolve_workspace(name, start_dir or Path.cwd()))
    with working_directory(workdir):
        files = write_starter_files(executor, request, config, workdir)
        init_and_commit(
            executor,
            workdir=workdir,
            primary_branch=config.primary_branch,
            deterministic_git=config.deterministic_git,
        )
        create_and_push(
            executor,
            workdir=workdir,
            name=name,
            visibility=request.visibility,
            remote=config.remote,
            owner=config.owner,
            description=request.description,
        )
        warnings = run_integrations(executor, config.integrations, cwd=workdir)

    return CreateResult(name=name, workspace=workdir, files=files, remote=config.remote, warnings=warnings)
