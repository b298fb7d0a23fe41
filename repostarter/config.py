"""
config.py

Responsibility: Load the optional YAML configuration file into a typed model.

Lookup order:
- an explicit path (`--config`), which must exist
- `$REPOSTARTER_CONFIG`, which must exist when set
- `$XDG_CONFIG_HOME/repostarter/config.yaml` (or `~/.config/...`), optional

CLI flags override whatever the file sets; see `Config.with_overrides`.
"""

from __future__ import annotations

import logging
import os
import re
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from repostarter.errors import ConfigError
from repostarter.validation import Visibility

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "REPOSTARTER_CONFIG"

# Layers of starter templates rendered for each variant, in order.
VARIANTS: dict[str, tuple[str, ...]] = {
    "minimal": ("base",),
    "standard": ("base", "gitignore"),
    "ci": ("base", "gitignore", "ci"),
}
DEFAULT_VARIANT = "standard"

_REF_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._/-]*")
_TOP_LEVEL_KEYS = {
    "variant",
    "visibility",
    "primary_branch",
    "remote",
    "owner",
    "gitignore_template",
    "deterministic_git",
    "integrations",
}
_INTEGRATION_KEYS = {"editor", "desktop", "open_editor", "open_desktop"}


@dataclass(frozen=True)
class IntegrationConfig:
    """Launch commands for the post-create integrations."""

    editor: tuple[str, ...] = ("code", ".")
    desktop: tuple[str, ...] = ("github", ".")
    open_editor: bool = False
    open_desktop: bool = False


@dataclass(frozen=True)
class Config:
    """Settings shared by every stage of a run."""

    variant: str = DEFAULT_VARIANT
    visibility: Visibility = Visibility.PRIVATE
    primary_branch: str = "main"
    remote: str = "origin"
    owner: str | None = None
    gitignore_template: str | None = None
    deterministic_git: bool = False
    integrations: IntegrationConfig = field(default_factory=IntegrationConfig)

    @property
    def layers(self) -> tuple[str, ...]:
        return VARIANTS[self.variant]

    def with_overrides(
        self,
        *,
        variant: str | None = None,
        gitignore_template: str | None = None,
        deterministic_git: bool | None = None,
        open_editor: bool | None = None,
        open_desktop: bool | None = None,
    ) -> "Config":
        """Return a copy with CLI-provided values applied (None means "not given")."""
        updated = self
        if variant is not None:
            updated = replace(updated, variant=_check_variant(variant))
        if gitignore_template is not None:
            updated = replace(updated, gitignore_template=gitignore_template.strip() or None)
        if deterministic_git is not None:
            updated = replace(updated, deterministic_git=deterministic_git)
        integrations = updated.integrations
        if open_editor:
            integrations = replace(integrations, open_editor=True)
        if open_desktop:
            integrations = replace(integrations, open_desktop=True)
        return replace(updated, integrations=integrations)


def _check_variant(value: str) -> str:
    if value not in VARIANTS:
        raise ConfigError(f"Unknown variant {value!r} (expected one of: {', '.join(sorted(VARIANTS))})")
    return value


def _check_ref_name(key: str, value: Any) -> str:
    text = str(value or "").strip()
    if not _REF_NAME_RE.fullmatch(text) or ".." in text or text.endswith((".", "/", ".lock")):
        raise ConfigError(f"`{key}` is not a valid git name: {value!r}")
    return text


def _check_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"`{key}` must be true or false, got {value!r}")
    return value


def _parse_command(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(p, str) for p in value):
        parts = list(value)
    else:
        raise ConfigError(f"`{key}` must be a command string or a list of strings")
    if not parts:
        raise ConfigError(f"`{key}` must not be empty")
    return tuple(parts)


def _optional_str(key: str, value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"`{key}` must be a string when provided")
    return value.strip() or None


def _parse_integrations(raw: Any) -> IntegrationConfig:
    if raw is None:
        return IntegrationConfig()
    if not isinstance(raw, dict):
        raise ConfigError("`integrations` must be an object/mapping when provided.")
    unknown = set(raw) - _INTEGRATION_KEYS
    if unknown:
        raise ConfigError(f"Unknown `integrations` keys: {', '.join(sorted(map(str, unknown)))}")

    defaults = IntegrationConfig()
    return IntegrationConfig(
        editor=_parse_command("integrations.editor", raw["editor"]) if "editor" in raw else defaults.editor,
        desktop=_parse_command("integrations.desktop", raw["desktop"]) if "desktop" in raw else defaults.desktop,
        open_editor=_check_bool("integrations.open_editor", raw.get("open_editor", False)),
        open_desktop=_check_bool("integrations.open_desktop", raw.get("open_desktop", False)),
    )


def parse_config(data: dict[str, Any]) -> Config:
    """
    Build a `Config` from an already-loaded mapping.

    Recognised keys: variant, visibility, primary_branch, remote, owner,
    gitignore_template, deterministic_git, integrations.{editor, desktop,
    open_editor, open_desktop}. Anything else is rejected.
    """
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}")

    visibility_raw = data.get("visibility")
    if visibility_raw is not None and not isinstance(visibility_raw, str):
        raise ConfigError(f"`visibility` must be a string, got {visibility_raw!r}")
    if visibility_raw is not None and not Visibility.is_token(visibility_raw):
        logger.warning("Unknown visibility %r in config; using private", visibility_raw)

    return Config(
        variant=_check_variant(str(data.get("variant") or DEFAULT_VARIANT)),
        visibility=Visibility.from_token(visibility_raw),
        primary_branch=_check_ref_name("primary_branch", data.get("primary_branch", "main")),
        remote=_check_ref_name("remote", data.get("remote", "origin")),
        owner=_optional_str("owner", data.get("owner")),
        gitignore_template=_optional_str("gitignore_template", data.get("gitignore_template")),
        deterministic_git=_check_bool("deterministic_git", data.get("deterministic_git", False)),
        integrations=_parse_integrations(data.get("integrations")),
    )


def default_config_path(env: Mapping[str, str]) -> Path:
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "repostarter" / "config.yaml"


def load_config(path: str | Path | None = None, *, env: Mapping[str, str] | None = None) -> Config:
    """
    Locate and parse the config file. Returns defaults when no file is
    configured and the default location does not exist.
    """
    env = os.environ if env is None else env

    if path is not None:
        config_path = Path(path)
        required = True
    elif env.get(ENV_CONFIG_PATH):
        config_path = Path(env[ENV_CONFIG_PATH])
        required = True
    else:
        config_path = default_config_path(env)
        required = False

    if not config_path.exists():
        if required:
            raise ConfigError(f"Config file does not exist: {config_path}")
        return Config()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e.strerror or e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    return parse_config(data)
