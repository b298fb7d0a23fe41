from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from repostarter.config import IntegrationConfig
from repostarter.errors import MissingDependency, NotAuthenticated, RemoteCreateFailed, VersionControlFailed
from repostarter.executor import SubprocessExecutor
from repostarter.git_driver import git_env_deterministic, init_and_commit
from repostarter.integrations import run_integrations
from repostarter.preflight import run_preflight
from repostarter.publisher import create_and_push, create_repo_args, fetch_gitignore_template
from repostarter.validation import Visibility
from tests.fakes import FakeExecutor

# --- preflight ---------------------------------------------------------------


def test_preflight_checks_tools_then_auth(executor: FakeExecutor) -> None:
    run_preflight(executor)
    assert executor.commands == [
        ["git", "--version"],
        ["gh", "--version"],
        ["gh", "auth", "status"],
    ]
    assert all(inv.capture for inv in executor.invocations)


def test_preflight_missing_program() -> None:
    executor = FakeExecutor(missing={"gh"})
    with pytest.raises(MissingDependency) as excinfo:
        run_preflight(executor)
    assert excinfo.value.tool == "gh"
    assert ["gh", "auth", "status"] not in executor.commands


def test_preflight_tool_exits_non_zero() -> None:
    executor = FakeExecutor(exit_codes={("git", "--version"): 1})
    with pytest.raises(MissingDependency, match="git"):
        run_preflight(executor)
    assert executor.commands == [["git", "--version"]]


def test_preflight_not_authenticated() -> None:
    executor = FakeExecutor(exit_codes={("gh", "auth", "status"): 1})
    with pytest.raises(NotAuthenticated, match="gh auth login"):
        run_preflight(executor)


# --- git driver --------------------------------------------------------------


def test_git_steps_use_explicit_branch(executor: FakeExecutor, tmp_path: Path) -> None:
    init_and_commit(executor, workdir=tmp_path, primary_branch="trunk")
    assert executor.commands == [
        ["git", "init", "--initial-branch", "trunk"],
        ["git", "add", "-A"],
        ["git", "commit", "-m", "Initial commit"],
    ]
    assert all(inv.cwd == tmp_path for inv in executor.invocations)
    assert all(inv.env is None for inv in executor.invocations)


def test_git_failure_reports_step_and_exit_code(tmp_path: Path) -> None:
    executor = FakeExecutor(exit_codes={("git", "commit"): 128})
    with pytest.raises(VersionControlFailed) as excinfo:
        init_and_commit(executor, workdir=tmp_path)
    assert excinfo.value.step == "commit"
    assert excinfo.value.exit_code == 128


def test_deterministic_git_env(executor: FakeExecutor, tmp_path: Path) -> None:
    init_and_commit(executor, workdir=tmp_path, deterministic_git=True)
    env = executor.invocations[-1].env
    assert env is not None
    assert env["GIT_COMMITTER_DATE"] == "1970-01-01T00:00:00Z"


def test_deterministic_git_env_keeps_existing_values() -> None:
    env = git_env_deterministic({"GIT_AUTHOR_NAME": "Ada", "PATH": "/bin"})
    assert env["GIT_AUTHOR_NAME"] == "Ada"
    assert env["GIT_COMMITTER_NAME"] == "repostarter"
    assert env["PATH"] == "/bin"


# --- publisher ---------------------------------------------------------------


def test_create_repo_args() -> None:
    assert create_repo_args(name="proj", visibility=Visibility.PRIVATE) == [
        "repo",
        "create",
        "proj",
        "--private",
        "--source=.",
        "--remote=origin",
        "--push",
    ]


def test_create_repo_args_with_owner_and_description() -> None:
    args = create_repo_args(
        name="proj",
        visibility=Visibility.PUBLIC,
        remote="upstream",
        owner="my-org",
        description="Demo",
    )
    assert args[:4] == ["repo", "create", "my-org/proj", "--public"]
    assert "--remote=upstream" in args
    assert args[-2:] == ["--description", "Demo"]


def test_remote_create_failure(tmp_path: Path) -> None:
    executor = FakeExecutor(exit_codes={("gh", "repo", "create"): 1})
    with pytest.raises(RemoteCreateFailed) as excinfo:
        create_and_push(executor, workdir=tmp_path, name="proj", visibility=Visibility.PRIVATE)
    assert excinfo.value.exit_code == 1
    assert executor.invocations[0].capture is False


def test_fetch_gitignore_template(tmp_path: Path) -> None:
    executor = FakeExecutor(outputs={("gh", "api"): "__pycache__/\n*.py[cod]"})
    assert fetch_gitignore_template(executor, "Python", cwd=tmp_path) == "__pycache__/\n*.py[cod]\n"
    assert executor.commands == [["gh", "api", "gitignore/templates/Python", "--jq", ".source"]]


def test_fetch_gitignore_template_failure(tmp_path: Path) -> None:
    executor = FakeExecutor(exit_codes={("gh", "api"): 1}, outputs={("gh", "api"): "Not Found"})
    assert fetch_gitignore_template(executor, "Nope", cwd=tmp_path) is None


# --- integrations ------------------------------------------------------------


def test_integrations_disabled_by_default(executor: FakeExecutor, tmp_path: Path) -> None:
    assert run_integrations(executor, IntegrationConfig(), cwd=tmp_path) == []
    assert executor.commands == []


def test_integrations_launch_enabled_commands(executor: FakeExecutor, tmp_path: Path) -> None:
    cfg = IntegrationConfig(open_editor=True, open_desktop=True)
    assert run_integrations(executor, cfg, cwd=tmp_path) == []
    assert executor.commands == [["code", "."], ["github", "."]]


def test_integration_failures_are_warnings(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    executor = FakeExecutor(missing={"code"}, exit_codes={("github",): 3})
    cfg = IntegrationConfig(open_editor=True, open_desktop=True)

    with caplog.at_level(logging.WARNING):
        warnings = run_integrations(executor, cfg, cwd=tmp_path)

    assert [w.tool for w in warnings] == ["code", "github"]
    assert "Could not launch code" in caplog.text
    assert "exited with code 3" in caplog.text


# --- subprocess executor -----------------------------------------------------


def test_subprocess_executor_captures_output(tmp_path: Path) -> None:
    result = SubprocessExecutor().run(sys.executable, "-c", "import os; print(os.getcwd())", cwd=tmp_path, capture=True)
    assert result.ok
    assert Path(result.output.strip()) == tmp_path.resolve()


def test_subprocess_executor_returns_exit_code() -> None:
    result = SubprocessExecutor().run(sys.executable, "-c", "raise SystemExit(3)", capture=True)
    assert result.returncode == 3
    assert not result.ok


def test_subprocess_executor_missing_program_raises() -> None:
    with pytest.raises(FileNotFoundError):
        SubprocessExecutor().run("repostarter-no-such-program-xyz", "--version", capture=True)
