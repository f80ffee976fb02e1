"""App-data paths for persisted bindings."""

from __future__ import annotations

import sys
from pathlib import Path

from rebind.runtime.config import RebindConfig, get_rebind_config


def resolve_app_root() -> Path:
    """Frozen executable directory, else the working directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path.cwd()


def resolve_app_data_root(config: RebindConfig | None = None) -> Path:
    """App-data root; relative overrides resolve against the app root."""
    cfg = config if config is not None else get_rebind_config()
    configured = cfg.paths.app_data_dir.strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_app_root() / candidate
    return resolve_app_root() / "appdata"


def resolve_saves_dir(config: RebindConfig | None = None) -> Path:
    return resolve_app_data_root(config) / "saves"


def resolve_save_path(config: RebindConfig | None = None) -> Path:
    """Binding save file; an absolute ``save_file`` is used as-is."""
    cfg = config if config is not None else get_rebind_config()
    candidate = Path(cfg.paths.save_file)
    if candidate.is_absolute():
        return candidate
    return resolve_saves_dir(cfg) / candidate


__all__ = ["resolve_app_data_root", "resolve_app_root", "resolve_save_path", "resolve_saves_dir"]
