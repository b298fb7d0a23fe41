"""
renderer.py

Responsibility: Render the starter-file templates into a workspace.

Rules:
- Templates live in `repostarter/templates/<layer>/`; a variant is an ordered
  list of layers, each rendered in turn.
- Walk template files in sorted order so output is deterministic.
- A path component starting with `dot-` is written with a leading `.`
  (`dot-gitignore` -> `.gitignore`), so dotfiles survive packaging.
- UTF-8 files containing Jinja2 markers are rendered with the given context;
  everything else is copied byte-for-byte.

This module does not know about git, gh, or CLI parsing.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from repostarter.errors import RenderError

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DOT_PREFIX = "dot-"


@dataclass(frozen=True)
class RenderResult:
    files: tuple[Path, ...]
    rendered_files: int
    copied_files: int


def _is_binary_file(path: Path) -> bool:
    try:
        path.read_text(encoding="utf-8")
        return False
    except UnicodeDecodeError:
        return True


def _iter_template_files(template_dir: Path) -> list[Path]:
    files: list[Path] = []
    for root, _dirs, filenames in os.walk(template_dir):
        root_path = Path(root)
        for name in filenames:
            files.append(root_path / name)
    files.sort(key=lambda p: str(p.relative_to(template_dir)).replace(os.sep, "/"))
    return files


def destination_path(rel: Path) -> Path:
    """Map a template-relative path to its output path (`dot-x` -> `.x`)."""
    parts = ["." + part[len(DOT_PREFIX) :] if part.startswith(DOT_PREFIX) else part for part in rel.parts]
    return Path(*parts)


def _write_file(env: Environment, src_path: Path, dst_path: Path, context: dict[str, Any]) -> bool:
    """
    Render or copy one template file. Returns True when Jinja2 rendered it.
    """
    dst_path.parent.mkdir(parents=True, exist_ok=True)

    if _is_binary_file(src_path):
        shutil.copy2(src_path, dst_path)
        return False

    text = src_path.read_text(encoding="utf-8")
    if ("{{" in text) or ("{%" in text) or ("{#" in text):
        out = env.from_string(text).render(**context)
        dst_path.write_text(out, encoding="utf-8", newline="\n")
        shutil.copymode(src_path, dst_path)
        return True

    # Exact copy for non-templated files.
    shutil.copy2(src_path, dst_path)
    return False


def render_layers(
    *,
    layers: tuple[str, ...],
    destination_dir: str | Path,
    context: dict[str, Any],
    templates_dir: str | Path = TEMPLATES_DIR,
) -> RenderResult:
    """
    Render each layer under `templates_dir` into `destination_dir`.

    Later layers overwrite files written by earlier ones. Returns the
    written paths relative to `destination_dir`, in write order.
    """
    root = Path(templates_dir).resolve()
    dst_dir = Path(destination_dir).resolve()

    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )

    written: list[Path] = []
    rendered = 0
    copied = 0

    for layer in layers:
        tpl_dir = root / layer
        if not tpl_dir.is_dir():
            raise RenderError(f"Template layer not found: {tpl_dir}")

        for src_path in _iter_template_files(tpl_dir):
            rel = destination_path(src_path.relative_to(tpl_dir))
            try:
                if _write_file(env, src_path, dst_dir / rel, context):
                    rendered += 1
                else:
                    copied += 1
            except TemplateError as e:
                raise RenderError(f"Failed rendering template file: {layer}/{rel}") from e
            except OSError as e:
                raise RenderError(f"Cannot write {rel}: {e.strerror or e}") from e

            if rel not in written:
                written.append(rel)

    return RenderResult(files=tuple(written), rendered_files=rendered, copied_files=copied)
