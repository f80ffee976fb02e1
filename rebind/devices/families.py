"""Immutable per-family layout tables.

Stored gamepad references use canonical ordinals: the position of a
``ButtonSlot`` in declaration order. Ordinals from ``RAW_BUTTON_BASE`` upward
encode ``RawButton(ordinal - RAW_BUTTON_BASE)`` for buttons no table names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from rebind.api.devices import AxisRule, ButtonSlot, ControllerFamily, Rgba

CANONICAL_SLOTS: tuple[ButtonSlot, ...] = tuple(ButtonSlot)
CANONICAL_INDEX: Mapping[ButtonSlot, int] = MappingProxyType(
    {slot: index for index, slot in enumerate(CANONICAL_SLOTS)}
)
RAW_BUTTON_BASE = len(CANONICAL_SLOTS)

NOT_AVAILABLE_LABEL = "< N / A >"


@dataclass(frozen=True, slots=True)
class FamilyLayout:
    """Everything the resolver knows about one family."""

    buttons: Mapping[int, ButtonSlot] = field(default_factory=dict)
    horizontal: AxisRule | None = None
    vertical: AxisRule | None = None
    labels: Mapping[ButtonSlot, str] = field(default_factory=dict)
    colors: Mapping[ButtonSlot, Rgba] = field(default_factory=dict)
    queryable: bool = True

    def ordinal_of(self, slot: ButtonSlot) -> int | None:
        for ordinal, named in self.buttons.items():
            if named is slot:
                return ordinal
        return None


_DPAD_LABELS: dict[ButtonSlot, str] = {
    ButtonSlot.DPAD_UP: "Up",
    ButtonSlot.DPAD_RIGHT: "Right",
    ButtonSlot.DPAD_DOWN: "Down",
    ButtonSlot.DPAD_LEFT: "Left",
}

# XInput ordering; triggers report as axes so they have no button ordinal.
_XBOX = FamilyLayout(
    buttons=MappingProxyType(
        {
            0: ButtonSlot.FACE_SOUTH,
            1: ButtonSlot.FACE_EAST,
            2: ButtonSlot.FACE_WEST,
            3: ButtonSlot.FACE_NORTH,
            4: ButtonSlot.SHOULDER_LEFT,
            5: ButtonSlot.SHOULDER_RIGHT,
            6: ButtonSlot.SELECT,
            7: ButtonSlot.START,
            8: ButtonSlot.STICK_LEFT,
            9: ButtonSlot.STICK_RIGHT,
            10: ButtonSlot.HOME,
            11: ButtonSlot.DPAD_UP,
            12: ButtonSlot.DPAD_RIGHT,
            13: ButtonSlot.DPAD_DOWN,
            14: ButtonSlot.DPAD_LEFT,
        }
    ),
    horizontal=AxisRule(positive_buttons=(12,), negative_buttons=(14,), analog_axis=0),
    vertical=AxisRule(positive_buttons=(11,), negative_buttons=(13,), analog_axis=1),
    labels=MappingProxyType(
        {
            ButtonSlot.FACE_SOUTH: "A",
            ButtonSlot.FACE_EAST: "B",
            ButtonSlot.FACE_WEST: "X",
            ButtonSlot.FACE_NORTH: "Y",
            ButtonSlot.SHOULDER_LEFT: "LB",
            ButtonSlot.SHOULDER_RIGHT: "RB",
            ButtonSlot.TRIGGER_LEFT: "LT",
            ButtonSlot.TRIGGER_RIGHT: "RT",
            ButtonSlot.SELECT: "View",
            ButtonSlot.START: "Menu",
            ButtonSlot.STICK_LEFT: "LSB",
            ButtonSlot.STICK_RIGHT: "RSB",
            ButtonSlot.HOME: "Xbox",
            **_DPAD_LABELS,
        }
    ),
    colors=MappingProxyType(
        {
            ButtonSlot.FACE_SOUTH: (60, 219, 78, 255),
            ButtonSlot.FACE_EAST: (208, 66, 66, 255),
            ButtonSlot.FACE_WEST: (64, 204, 208, 255),
            ButtonSlot.FACE_NORTH: (236, 219, 51, 255),
        }
    ),
)

# DirectInput ordering: the south face button is not ordinal 0 and the d-pad
# sits directly after the stick clicks.
_PLAYSTATION = FamilyLayout(
    buttons=MappingProxyType(
        {
            0: ButtonSlot.FACE_WEST,
            1: ButtonSlot.FACE_SOUTH,
            2: ButtonSlot.FACE_EAST,
            3: ButtonSlot.FACE_NORTH,
            4: ButtonSlot.SHOULDER_LEFT,
            5: ButtonSlot.SHOULDER_RIGHT,
            6: ButtonSlot.TRIGGER_LEFT,
            7: ButtonSlot.TRIGGER_RIGHT,
            8: ButtonSlot.SELECT,
            9: ButtonSlot.START,
            10: ButtonSlot.STICK_LEFT,
            11: ButtonSlot.STICK_RIGHT,
            12: ButtonSlot.DPAD_UP,
            13: ButtonSlot.DPAD_RIGHT,
            14: ButtonSlot.DPAD_DOWN,
            15: ButtonSlot.DPAD_LEFT,
            16: ButtonSlot.HOME,
            17: ButtonSlot.AUX,
        }
    ),
    horizontal=AxisRule(positive_buttons=(13,), negative_buttons=(15,), analog_axis=0),
    vertical=AxisRule(
        positive_buttons=(12,), negative_buttons=(14,), analog_axis=1, invert_analog=True
    ),
    labels=MappingProxyType(
        {
            ButtonSlot.FACE_SOUTH: "X",
            ButtonSlot.FACE_EAST: "O",
            ButtonSlot.FACE_WEST: "Square",
            ButtonSlot.FACE_NORTH: "Triangle",
            ButtonSlot.SHOULDER_LEFT: "L1",
            ButtonSlot.SHOULDER_RIGHT: "R1",
            ButtonSlot.TRIGGER_LEFT: "L2",
            ButtonSlot.TRIGGER_RIGHT: "R2",
            ButtonSlot.SELECT: "Share",
            ButtonSlot.START: "Options",
            ButtonSlot.STICK_LEFT: "L3",
            ButtonSlot.STICK_RIGHT: "R3",
            ButtonSlot.HOME: "PS",
            ButtonSlot.AUX: "Touchpad",
            **_DPAD_LABELS,
        }
    ),
    colors=MappingProxyType(
        {
            ButtonSlot.FACE_SOUTH: (155, 173, 228, 255),
            ButtonSlot.FACE_EAST: (240, 110, 108, 255),
            ButtonSlot.FACE_WEST: (213, 145, 189, 255),
            ButtonSlot.FACE_NORTH: (56, 222, 200, 255),
        }
    ),
)

# Physical ordinals 0-13 already follow canonical order; the d-pad is an
# eight-way hat reported as ordinals 128 (up) through 135 (up-left).
_SWITCH_PRO = FamilyLayout(
    buttons=MappingProxyType(
        {
            **{index: CANONICAL_SLOTS[index] for index in range(14)},
            128: ButtonSlot.DPAD_UP,
            130: ButtonSlot.DPAD_RIGHT,
            132: ButtonSlot.DPAD_DOWN,
            134: ButtonSlot.DPAD_LEFT,
        }
    ),
    horizontal=AxisRule(
        positive_buttons=(129, 130, 131), negative_buttons=(133, 134, 135), analog_axis=0
    ),
    vertical=AxisRule(
        positive_buttons=(129, 135, 128),
        negative_buttons=(131, 132, 133),
        analog_axis=1,
        invert_analog=True,
    ),
    labels=MappingProxyType(
        {
            ButtonSlot.FACE_SOUTH: "B",
            ButtonSlot.FACE_EAST: "A",
            ButtonSlot.FACE_WEST: "Y",
            ButtonSlot.FACE_NORTH: "X",
            ButtonSlot.SHOULDER_LEFT: "L",
            ButtonSlot.SHOULDER_RIGHT: "R",
            ButtonSlot.TRIGGER_LEFT: "ZL",
            ButtonSlot.TRIGGER_RIGHT: "ZR",
            ButtonSlot.SELECT: "-",
            ButtonSlot.START: "+",
            ButtonSlot.STICK_LEFT: "LSB",
            ButtonSlot.STICK_RIGHT: "RSB",
            ButtonSlot.HOME: "Home",
            ButtonSlot.AUX: "Capture",
            **_DPAD_LABELS,
        }
    ),
)

# Unbranded joysticks are read in the standard gamepad ordering.
_GENERIC = FamilyLayout(
    buttons=MappingProxyType({index: slot for index, slot in enumerate(CANONICAL_SLOTS)}),
    horizontal=AxisRule(positive_buttons=(), negative_buttons=(), analog_axis=0),
    vertical=AxisRule(positive_buttons=(), negative_buttons=(), analog_axis=1, invert_analog=True),
)

_NO_BUTTONS = FamilyLayout(queryable=False)

FAMILY_LAYOUTS: Mapping[ControllerFamily, FamilyLayout] = MappingProxyType(
    {
        ControllerFamily.KEYBOARD: _NO_BUTTONS,
        ControllerFamily.XBOX_STYLE: _XBOX,
        ControllerFamily.PLAYSTATION_STYLE: _PLAYSTATION,
        ControllerFamily.SWITCH_PRO_STYLE: _SWITCH_PRO,
        ControllerFamily.GENERIC_JOYSTICK: _GENERIC,
        ControllerFamily.UNKNOWN: _NO_BUTTONS,
    }
)

# USB vendor ids, lowercase hex.
VENDOR_FAMILIES: Mapping[str, ControllerFamily] = MappingProxyType(
    {
        "045e": ControllerFamily.XBOX_STYLE,
        "054c": ControllerFamily.PLAYSTATION_STYLE,
        "057e": ControllerFamily.SWITCH_PRO_STYLE,
    }
)

# Checked in order; first family with a matching token wins.
NAME_TOKENS: tuple[tuple[ControllerFamily, tuple[str, ...]], ...] = (
    (ControllerFamily.XBOX_STYLE, ("xbox", "xinput", "x-box")),
    (
        ControllerFamily.PLAYSTATION_STYLE,
        ("dualshock", "dualsense", "playstation", "ps3", "ps4", "ps5", "sony"),
    ),
    (ControllerFamily.SWITCH_PRO_STYLE, ("pro controller", "switch", "nintendo", "joy-con")),
)

GENERIC_TOKENS: tuple[str, ...] = ("joystick", "gamepad", "controller", "joypad")

KEYBOARD_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "Period": ".",
        "Comma": ",",
        "Slash": "/",
        "Backslash": "\\",
        "LeftBracket": "[",
        "RightBracket": "]",
        "Minus": "-",
        "Equals": "=",
        "Plus": "+",
        "BackQuote": "`",
        "Semicolon": ";",
        "Exclaim": "!",
        "Question": "?",
        "Dollar": "$",
    }
)


__all__ = [
    "CANONICAL_INDEX",
    "CANONICAL_SLOTS",
    "FAMILY_LAYOUTS",
    "GENERIC_TOKENS",
    "KEYBOARD_SYMBOLS",
    "NAME_TOKENS",
    "NOT_AVAILABLE_LABEL",
    "RAW_BUTTON_BASE",
    "VENDOR_FAMILIES",
    "FamilyLayout",
]
