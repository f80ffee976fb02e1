"""Ambient runtime helpers: configuration, logging and error policy."""

from rebind.runtime.config import (
    RebindConfig,
    get_rebind_config,
    initialize_rebind_config,
    load_rebind_config,
    set_rebind_config,
)
from rebind.runtime.errors import log_recoverable
from rebind.runtime.logging import configure_logging, setup_logging

__all__ = [
    "RebindConfig",
    "configure_logging",
    "get_rebind_config",
    "initialize_rebind_config",
    "load_rebind_config",
    "log_recoverable",
    "set_rebind_config",
    "setup_logging",
]
