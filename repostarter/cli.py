"""
cli.py

Responsibility: CLI entrypoint for repostarter.

    repostarter <repo-name> [--public | --private] [options]

Exit codes:
- 0: repository created and pushed
- 1: usage shown (no name given) or any handled error

This module parses arguments and reports results; the stages themselves live
in `workflow.py` and the modules it calls.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from repostarter import __version__
from repostarter.config import VARIANTS, load_config
from repostarter.errors import InvalidInput, RepoStarterError
from repostarter.executor import CommandExecutor, SubprocessExecutor
from repostarter.validation import Visibility, validate_repo_name
from repostarter.workflow import CreateRequest, create_repository

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s: %(message)s"


class _ArgumentParser(argparse.ArgumentParser):
    # Bad flags are InvalidInput (exit 1), not argparse's exit 2.
    def error(self, message: str) -> NoReturn:
        raise InvalidInput(f"{message} (see `{self.prog} --help`)")


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="repostarter",
        description="Create a local git repository with starter files and publish it with the GitHub CLI",
        allow_abbrev=False,
    )
    p.add_argument("name", nargs="?", default=None, help="Repository name (letters, digits, '.', '_', '-')")

    vis = p.add_mutually_exclusive_group()
    vis.add_argument("--public", dest="visibility", action="store_const", const=Visibility.PUBLIC, help="Create a public repo")
    vis.add_argument("--private", dest="visibility", action="store_const", const=Visibility.PRIVATE, help="Create a private repo (default)")

    p.add_argument("--description", default="", help="Repository description (README and GitHub)")
    p.add_argument("--variant", default=None, choices=sorted(VARIANTS), help="Starter files to write (default: standard)")
    p.add_argument("--gitignore-template", default=None, help="Fetch a standard .gitignore template, e.g. Python")
    p.add_argument("--open-editor", action="store_true", help="Open the new repository in the configured editor")
    p.add_argument("--open-desktop", action="store_true", help="Open the new repository in the desktop companion app")
    p.add_argument(
        "--deterministic-git",
        action="store_true",
        default=None,
        help="Use fixed git author/commit metadata for the initial commit",
    )
    p.add_argument("--config", default=None, help="Path to a YAML config file")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for every command)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def create_cmd(args: argparse.Namespace, executor: CommandExecutor) -> int:
    config = load_config(args.config).with_overrides(
        variant=args.variant,
        gitignore_template=args.gitignore_template,
        deterministic_git=args.deterministic_git,
        open_editor=args.open_editor,
        open_desktop=args.open_desktop,
    )
    request = CreateRequest(
        name=args.name,
        visibility=args.visibility or config.visibility,
        description=args.description.strip(),
    )

    result = create_repository(request, executor=executor, config=config)

    print(f"Repository '{result.name}' created successfully!")
    print(f"  Local:  {result.workspace}")
    print(f"  Remote: {result.remote} ({request.visibility.value})")
    return 0


def main(argv: list[str] | None = None, *, executor: CommandExecutor | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
        if not args.name:
            parser.print_usage(sys.stdout)
            return 1
        _configure_logging(args.verbose)
        validate_repo_name(args.name)
        return create_cmd(args, executor or SubprocessExecutor())
    except RepoStarterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
