"""Centralized runtime configuration for binding sessions."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from rebind.api.capture import CancelPolicy

MIN_MAX_PLAYERS = 4
MAX_MAX_PLAYERS = 16
DEFAULT_MAX_PLAYERS = 4
DEFAULT_HISTORY_LENGTH = 10
DEFAULT_AXIS_THRESHOLD = 0.5
DEFAULT_SAVE_FILE = "bindings.sav"


@dataclass(frozen=True, slots=True)
class RebindSessionConfig:
    max_players: int
    history_length: int
    axis_threshold: float


@dataclass(frozen=True, slots=True)
class RebindCaptureConfig:
    cancel_policy: CancelPolicy
    same_input_unbinds: bool


@dataclass(frozen=True, slots=True)
class RebindPathsConfig:
    app_data_dir: str
    save_file: str


@dataclass(frozen=True, slots=True)
class RebindDiagnosticsConfig:
    trace_frames: bool


@dataclass(frozen=True, slots=True)
class RebindConfig:
    session: RebindSessionConfig
    capture: RebindCaptureConfig
    paths: RebindPathsConfig
    diagnostics: RebindDiagnosticsConfig


_REBIND_CONFIG: ContextVar[RebindConfig | None] = ContextVar("rebind_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Parsed value, or ``default`` when unparsable or outside the bounds."""
    raw = _raw(name, env=env)
    if raw is None:
        return int(default)
    try:
        value = int(raw.strip())
    except ValueError:
        return int(default)
    if minimum is not None and value < minimum:
        return int(default)
    if maximum is not None and value > maximum:
        return int(default)
    return value


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _cancel_policy(raw: str) -> CancelPolicy:
    value = str(raw).strip().lower()
    if value in {"unbind", "clear", "none"}:
        return CancelPolicy.UNBIND
    return CancelPolicy.KEEP


def load_rebind_config(*, env: Mapping[str, str] | None = None) -> RebindConfig:
    scope_env = env
    return RebindConfig(
        session=RebindSessionConfig(
            max_players=_int(
                "REBIND_MAX_PLAYERS",
                DEFAULT_MAX_PLAYERS,
                minimum=MIN_MAX_PLAYERS,
                maximum=MAX_MAX_PLAYERS,
                env=scope_env,
            ),
            history_length=_int(
                "REBIND_HISTORY_LENGTH", DEFAULT_HISTORY_LENGTH, minimum=1, env=scope_env
            ),
            axis_threshold=_float(
                "REBIND_AXIS_THRESHOLD", DEFAULT_AXIS_THRESHOLD, minimum=0.0, env=scope_env
            ),
        ),
        capture=RebindCaptureConfig(
            cancel_policy=_cancel_policy(_text("REBIND_CANCEL_POLICY", "keep", env=scope_env)),
            same_input_unbinds=_flag("REBIND_SAME_INPUT_UNBINDS", False, env=scope_env),
        ),
        paths=RebindPathsConfig(
            app_data_dir=_text("REBIND_APP_DATA_DIR", "", env=scope_env),
            save_file=_text("REBIND_SAVE_FILE", DEFAULT_SAVE_FILE, env=scope_env),
        ),
        diagnostics=RebindDiagnosticsConfig(
            trace_frames=_flag("REBIND_TRACE_FRAMES", False, env=scope_env),
        ),
    )


def initialize_rebind_config(*, env: Mapping[str, str] | None = None) -> RebindConfig:
    config = load_rebind_config(env=env)
    _REBIND_CONFIG.set(config)
    return config


def set_rebind_config(config: RebindConfig) -> RebindConfig:
    _REBIND_CONFIG.set(config)
    return config


def get_rebind_config() -> RebindConfig:
    config = _REBIND_CONFIG.get()
    if config is not None:
        return config
    return initialize_rebind_config()


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Log level with the package-prefixed override taking precedence."""
    value = _raw("REBIND_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = default
    return value.strip().upper()


__all__ = [
    "DEFAULT_AXIS_THRESHOLD",
    "DEFAULT_HISTORY_LENGTH",
    "DEFAULT_MAX_PLAYERS",
    "DEFAULT_SAVE_FILE",
    "MAX_MAX_PLAYERS",
    "MIN_MAX_PLAYERS",
    "RebindCaptureConfig",
    "RebindConfig",
    "RebindDiagnosticsConfig",
    "RebindPathsConfig",
    "RebindSessionConfig",
    "get_rebind_config",
    "initialize_rebind_config",
    "load_rebind_config",
    "resolve_log_level_name",
    "set_rebind_config",
]
