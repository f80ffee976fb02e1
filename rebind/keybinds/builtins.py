"""Built-in keybinds registered ahead of any mod."""

from __future__ import annotations

from dataclasses import dataclass

from rebind.api.controls import UNBOUND, ControlRef, button, key
from rebind.api.devices import ButtonSlot
from rebind.api.keybinds import Direction
from rebind.devices.families import CANONICAL_INDEX

BUILTIN_MOD = "Built-in"


@dataclass(frozen=True, slots=True)
class BuiltinSpec:
    keybind_id: str
    name: str
    keyboard: ControlRef
    gamepad: ControlRef
    gamepad_alt: ControlRef | None = None
    direction: Direction | None = None


def _slot(slot: ButtonSlot) -> ControlRef:
    return button(CANONICAL_INDEX[slot])


# Order is part of the public contract: consumers address built-ins by index.
# Xbox-style pads open the pause menu from View rather than Menu.
BUILTIN_SPECS: tuple[BuiltinSpec, ...] = (
    BuiltinSpec(
        "builtin:pause",
        "Pause",
        key("Escape"),
        _slot(ButtonSlot.START),
        _slot(ButtonSlot.SELECT),
    ),
    BuiltinSpec(
        "builtin:map",
        "Map",
        key("Space"),
        _slot(ButtonSlot.SHOULDER_RIGHT),
        _slot(ButtonSlot.SHOULDER_RIGHT),
    ),
    BuiltinSpec(
        "builtin:grab",
        "Grab",
        key("LeftShift"),
        _slot(ButtonSlot.FACE_WEST),
        _slot(ButtonSlot.FACE_WEST),
    ),
    BuiltinSpec(
        "builtin:jump",
        "Jump",
        key("Z"),
        _slot(ButtonSlot.FACE_SOUTH),
        _slot(ButtonSlot.FACE_SOUTH),
    ),
    BuiltinSpec(
        "builtin:throw",
        "Throw",
        key("X"),
        _slot(ButtonSlot.FACE_EAST),
        _slot(ButtonSlot.FACE_EAST),
    ),
    BuiltinSpec("builtin:up", "Up", key("UpArrow"), UNBOUND, direction=Direction.UP),
    BuiltinSpec("builtin:left", "Left", key("LeftArrow"), UNBOUND, direction=Direction.LEFT),
    BuiltinSpec("builtin:down", "Down", key("DownArrow"), UNBOUND, direction=Direction.DOWN),
    BuiltinSpec("builtin:right", "Right", key("RightArrow"), UNBOUND, direction=Direction.RIGHT),
)

PAUSE_ID = "builtin:pause"
BUILTIN_IDS: tuple[str, ...] = tuple(spec.keybind_id for spec in BUILTIN_SPECS)


__all__ = ["BUILTIN_IDS", "BUILTIN_MOD", "BUILTIN_SPECS", "PAUSE_ID", "BuiltinSpec"]
