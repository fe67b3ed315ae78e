"""Shared path utilities for configuration, state, and log locations.

Policy (portable by default):
- Config: repository-root ``<repo_root>/config/config.toml``
- State (dirty marker): repository-root ``<repo_root>/.data`` unless
  overridden by ``MP3REPAIR_STATE_DIR``.
- Logs: repository-root ``<repo_root>/logs/mp3repair.log``
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

ENV_STATE_DIR: Final[str] = "MP3REPAIR_STATE_DIR"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a path honoring explicit and environment overrides, in that order."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for markers like ``pyproject.toml`` or ``.git``.

    Args:
        start: Starting path. Defaults to this file's directory.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path(__file__).resolve()).parent
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path.cwd()


def default_config_path() -> Path:
    """Get the default path to the TOML config file."""

    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_state_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the directory holding application state such as the dirty marker."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_STATE_DIR,
        default_factory=lambda: _detect_repo_root() / ".data",
    )


def default_log_dir() -> Path:
    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    return (default_log_dir() / "mp3repair.log").resolve()


__all__ = [
    "ENV_STATE_DIR",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "default_state_dir",
    "resolve_overridable_path",
]
