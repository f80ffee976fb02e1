from __future__ import annotations

import sys

from rebind.runtime.config import load_rebind_config
from rebind.runtime.paths import (
    resolve_app_data_root,
    resolve_app_root,
    resolve_save_path,
    resolve_saves_dir,
)


def test_default_save_path_lives_under_appdata(monkeypatch, tmp_path) -> None:
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    cfg = load_rebind_config(env={})

    assert resolve_app_root() == root
    assert resolve_saves_dir(cfg) == root / "appdata" / "saves"
    assert resolve_save_path(cfg) == root / "appdata" / "saves" / "bindings.sav"


def test_app_data_override(monkeypatch, tmp_path) -> None:
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    absolute = root / "elsewhere"

    absolute_cfg = load_rebind_config(env={"REBIND_APP_DATA_DIR": str(absolute)})
    relative_cfg = load_rebind_config(env={"REBIND_APP_DATA_DIR": "data"})

    assert resolve_app_data_root(absolute_cfg) == absolute
    assert resolve_app_data_root(relative_cfg) == root / "data"


def test_absolute_save_file_is_used_as_is(tmp_path) -> None:
    target = tmp_path / "custom.sav"
    cfg = load_rebind_config(env={"REBIND_SAVE_FILE": str(target)})
    assert resolve_save_path(cfg) == target


def test_frozen_app_root_uses_executable_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(tmp_path / "game.exe"))
    assert resolve_app_root() == tmp_path.resolve()
