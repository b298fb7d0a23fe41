"""
repostarter package

This package bootstraps a new repository: local directory, starter files,
first commit, hosted remote, push.

Key responsibilities are split across modules:
- `validation.py`: repository name and visibility checks (no side effects)
- `preflight.py`: git/gh availability and gh login state
- `workspace.py` / `renderer.py`: target directory and starter files
- `git_driver.py`: git init, add, initial commit
- `publisher.py`: `gh repo create ... --push`
- `integrations.py`: best-effort editor / desktop launches
- `workflow.py`: runs the stages in order
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
