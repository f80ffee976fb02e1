"""Keybind registry and built-in actions."""

from rebind.keybinds.builtins import BUILTIN_IDS, BUILTIN_SPECS, PAUSE_ID
from rebind.keybinds.registry import RuntimeKeybindRegistry

__all__ = ["BUILTIN_IDS", "BUILTIN_SPECS", "PAUSE_ID", "RuntimeKeybindRegistry"]
