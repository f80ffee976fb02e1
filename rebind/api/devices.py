"""Public device-family contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, TypeAlias

from rebind.api.controls import ControlRef


class ControllerFamily(StrEnum):
    """Class of physical controller sharing one button/axis layout."""

    KEYBOARD = "KEYBOARD"
    XBOX_STYLE = "XBOX_STYLE"
    PLAYSTATION_STYLE = "PLAYSTATION_STYLE"
    SWITCH_PRO_STYLE = "SWITCH_PRO_STYLE"
    GENERIC_JOYSTICK = "GENERIC_JOYSTICK"
    UNKNOWN = "UNKNOWN"

    @property
    def is_gamepad(self) -> bool:
        return self not in {ControllerFamily.KEYBOARD, ControllerFamily.UNKNOWN}


class ButtonSlot(StrEnum):
    """Family-independent semantic buttons, in canonical ordinal order."""

    FACE_SOUTH = "FACE_SOUTH"
    FACE_EAST = "FACE_EAST"
    FACE_WEST = "FACE_WEST"
    FACE_NORTH = "FACE_NORTH"
    SHOULDER_LEFT = "SHOULDER_LEFT"
    SHOULDER_RIGHT = "SHOULDER_RIGHT"
    TRIGGER_LEFT = "TRIGGER_LEFT"
    TRIGGER_RIGHT = "TRIGGER_RIGHT"
    SELECT = "SELECT"
    START = "START"
    STICK_LEFT = "STICK_LEFT"
    STICK_RIGHT = "STICK_RIGHT"
    HOME = "HOME"
    AUX = "AUX"
    DPAD_UP = "DPAD_UP"
    DPAD_RIGHT = "DPAD_RIGHT"
    DPAD_DOWN = "DPAD_DOWN"
    DPAD_LEFT = "DPAD_LEFT"


@dataclass(frozen=True, slots=True)
class RawButton:
    """Fallback slot for an ordinal the family table does not name."""

    ordinal: int

    def __str__(self) -> str:
        return f"RAW_BUTTON_{self.ordinal}"


SemanticSlot: TypeAlias = ButtonSlot | RawButton

Rgba: TypeAlias = tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class HardwareDescriptor:
    """Identifying strings reported for one attached device."""

    name: str
    vendor: str = ""
    is_keyboard: bool = False


@dataclass(frozen=True, slots=True)
class DisplayInfo:
    """Presentation label and optional color hint for one control."""

    label: str
    color: Rgba | None = None


@dataclass(frozen=True, slots=True)
class AxisRule:
    """Directional derivation for one axis of one family.

    Any ``positive_buttons`` down yields +1, else any ``negative_buttons`` down
    yields -1, else the analog axis value (negated when ``invert_analog``).
    """

    positive_buttons: tuple[int, ...]
    negative_buttons: tuple[int, ...]
    analog_axis: int
    invert_analog: bool = False


ButtonQuery = Callable[[int], bool]
AnalogQuery = Callable[[int], float]


class DeviceResolver(Protocol):
    """Classification and normalization across controller families."""

    def classify(self, descriptor: HardwareDescriptor | None) -> ControllerFamily:
        """Return the family for a device, ``UNKNOWN`` when unmatched."""

    def canonicalize(self, family: ControllerFamily, physical_ordinal: int) -> SemanticSlot:
        """Map a family-specific physical ordinal to its semantic slot."""

    def physical_ordinal(self, family: ControllerFamily, slot: SemanticSlot) -> int | None:
        """Map a semantic slot back to the family's physical ordinal."""

    def slot_for(self, control: ControlRef) -> SemanticSlot | None:
        """Semantic slot of a stored gamepad reference."""

    def control_for(self, family: ControllerFamily, physical_ordinal: int) -> ControlRef:
        """Stored (canonical) reference for a physical button press."""

    def resolve_axis(
        self,
        family: ControllerFamily,
        horizontal: bool,
        button_query: ButtonQuery,
        analog_query: AnalogQuery,
    ) -> float:
        """Directional value for one axis; buttons win over the analog stick."""

    def display_info(self, family: ControllerFamily, slot: SemanticSlot) -> DisplayInfo:
        """Label and color hint for a semantic slot on a family."""

    def control_label(self, family: ControllerFamily, control: ControlRef) -> str:
        """Label for any stored control reference."""


def create_device_resolver() -> DeviceResolver:
    """Create default device-resolver implementation."""
    from rebind.devices.resolver import RuntimeDeviceResolver

    return RuntimeDeviceResolver()


__all__ = [
    "AnalogQuery",
    "AxisRule",
    "ButtonQuery",
    "ButtonSlot",
    "ControllerFamily",
    "DeviceResolver",
    "DisplayInfo",
    "HardwareDescriptor",
    "RawButton",
    "Rgba",
    "SemanticSlot",
    "create_device_resolver",
]
