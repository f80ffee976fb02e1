"""Family-agnostic control references stored in the binding table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BUTTON_PREFIX = "JoystickButton"
UNBOUND_TEXT = "None"


class ControlKind(StrEnum):
    """What a control reference points at."""

    NONE = "NONE"
    KEY = "KEY"
    BUTTON = "BUTTON"


class BindingSide(StrEnum):
    """Which half of a player's binding pair."""

    KEYBOARD = "KEYBOARD"
    GAMEPAD = "GAMEPAD"


@dataclass(frozen=True, slots=True)
class ControlRef:
    """Keyboard key by name, gamepad button by canonical ordinal, or unbound."""

    kind: ControlKind
    key: str = ""
    button: int = -1

    @property
    def is_unbound(self) -> bool:
        return self.kind is ControlKind.NONE

    @property
    def side(self) -> BindingSide | None:
        """Side this reference can be assigned to; ``None`` fits either."""
        if self.kind is ControlKind.KEY:
            return BindingSide.KEYBOARD
        if self.kind is ControlKind.BUTTON:
            return BindingSide.GAMEPAD
        return None

    def to_text(self) -> str:
        """Persisted text form, inverse of ``parse_control``."""
        if self.kind is ControlKind.KEY:
            return self.key
        if self.kind is ControlKind.BUTTON:
            return f"{BUTTON_PREFIX}{self.button}"
        return UNBOUND_TEXT

    def __str__(self) -> str:
        return self.to_text()


UNBOUND = ControlRef(ControlKind.NONE)


def key(name: str) -> ControlRef:
    """Build a keyboard key reference (``Z``, ``LeftShift``, ``Escape``)."""
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("key name must not be empty")
    if not cleaned.isalnum():
        raise ValueError(f"key name must be alphanumeric: {name!r}")
    if cleaned == UNBOUND_TEXT:
        return UNBOUND
    if cleaned.startswith(BUTTON_PREFIX):
        raise ValueError(f"key name collides with gamepad buttons: {name!r}")
    return ControlRef(ControlKind.KEY, key=cleaned)


def button(ordinal: int) -> ControlRef:
    """Build a gamepad button reference from a canonical ordinal."""
    if ordinal < 0:
        raise ValueError("button ordinal must be >= 0")
    return ControlRef(ControlKind.BUTTON, button=int(ordinal))


def parse_control(text: str) -> ControlRef:
    """Parse the persisted text form; raise ``ValueError`` when unparsable."""
    value = text.strip()
    if value == UNBOUND_TEXT:
        return UNBOUND
    if value.startswith(BUTTON_PREFIX):
        digits = value[len(BUTTON_PREFIX) :]
        if not digits.isdigit():
            raise ValueError(f"malformed gamepad button: {text!r}")
        return button(int(digits))
    return key(value)


def coerce_control(value: ControlRef | str | None) -> ControlRef:
    """Accept a reference, its text form, or ``None`` for unbound."""
    if value is None:
        return UNBOUND
    if isinstance(value, ControlRef):
        return value
    return parse_control(value)


__all__ = [
    "BUTTON_PREFIX",
    "UNBOUND",
    "UNBOUND_TEXT",
    "BindingSide",
    "ControlKind",
    "ControlRef",
    "button",
    "coerce_control",
    "key",
    "parse_control",
]
