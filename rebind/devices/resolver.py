"""Table-driven device classification and normalization."""

from __future__ import annotations

import logging

from rebind.api.controls import UNBOUND_TEXT, ControlKind, ControlRef, button
from rebind.api.devices import (
    AnalogQuery,
    ButtonQuery,
    ControllerFamily,
    DisplayInfo,
    HardwareDescriptor,
    RawButton,
    SemanticSlot,
)
from rebind.devices.families import (
    CANONICAL_INDEX,
    CANONICAL_SLOTS,
    FAMILY_LAYOUTS,
    GENERIC_TOKENS,
    KEYBOARD_SYMBOLS,
    NAME_TOKENS,
    NOT_AVAILABLE_LABEL,
    RAW_BUTTON_BASE,
    VENDOR_FAMILIES,
)

logger = logging.getLogger(__name__)


def classify_descriptor(descriptor: HardwareDescriptor | None) -> ControllerFamily:
    """Pure classification over the descriptor strings."""
    if descriptor is None:
        return ControllerFamily.UNKNOWN
    name = descriptor.name.strip().lower()
    if descriptor.is_keyboard or "keyboard" in name:
        return ControllerFamily.KEYBOARD
    for family, tokens in NAME_TOKENS:
        if any(token in name for token in tokens):
            return family
    vendor = descriptor.vendor.strip().lower().removeprefix("0x")
    if vendor in VENDOR_FAMILIES:
        return VENDOR_FAMILIES[vendor]
    if any(token in name for token in GENERIC_TOKENS):
        return ControllerFamily.GENERIC_JOYSTICK
    return ControllerFamily.UNKNOWN


def slot_from_canonical(ordinal: int) -> SemanticSlot:
    if 0 <= ordinal < RAW_BUTTON_BASE:
        return CANONICAL_SLOTS[ordinal]
    return RawButton(ordinal - RAW_BUTTON_BASE)


def canonical_ordinal(slot: SemanticSlot) -> int:
    if isinstance(slot, RawButton):
        return RAW_BUTTON_BASE + slot.ordinal
    return CANONICAL_INDEX[slot]


def short_key_name(name: str) -> str:
    """Compact keyboard label: ``Period`` -> ``.``, ``LeftShift`` -> ``LShift``."""
    symbol = KEYBOARD_SYMBOLS.get(name)
    if symbol is not None:
        return symbol
    for prefix, short in (("Left", "L"), ("Right", "R")):
        if name.startswith(prefix) and len(name) > len(prefix):
            return short + name[len(prefix) :]
    return name


class RuntimeDeviceResolver:
    """Resolver backed by the immutable family tables."""

    def classify(self, descriptor: HardwareDescriptor | None) -> ControllerFamily:
        family = classify_descriptor(descriptor)
        if family is ControllerFamily.UNKNOWN and descriptor is not None:
            logger.debug(
                "device_unclassified name=%s vendor=%s", descriptor.name, descriptor.vendor
            )
        return family

    def canonicalize(self, family: ControllerFamily, physical_ordinal: int) -> SemanticSlot:
        slot = FAMILY_LAYOUTS[family].buttons.get(int(physical_ordinal))
        if slot is None:
            return RawButton(int(physical_ordinal))
        return slot

    def physical_ordinal(self, family: ControllerFamily, slot: SemanticSlot) -> int | None:
        layout = FAMILY_LAYOUTS[family]
        if not layout.queryable:
            return None
        if isinstance(slot, RawButton):
            # Raw ordinals are only meaningful where no table entry claims them.
            return None if slot.ordinal in layout.buttons else slot.ordinal
        return layout.ordinal_of(slot)

    def slot_for(self, control: ControlRef) -> SemanticSlot | None:
        if control.kind is not ControlKind.BUTTON:
            return None
        return slot_from_canonical(control.button)

    def control_for(self, family: ControllerFamily, physical_ordinal: int) -> ControlRef:
        return button(canonical_ordinal(self.canonicalize(family, physical_ordinal)))

    def resolve_axis(
        self,
        family: ControllerFamily,
        horizontal: bool,
        button_query: ButtonQuery,
        analog_query: AnalogQuery,
    ) -> float:
        layout = FAMILY_LAYOUTS[family]
        rule = layout.horizontal if horizontal else layout.vertical
        if rule is None:
            return 0.0
        if any(button_query(ordinal) for ordinal in rule.positive_buttons):
            return 1.0
        if any(button_query(ordinal) for ordinal in rule.negative_buttons):
            return -1.0
        value = float(analog_query(rule.analog_axis))
        return -value if rule.invert_analog else value

    def display_info(self, family: ControllerFamily, slot: SemanticSlot) -> DisplayInfo:
        if not family.is_gamepad:
            return DisplayInfo(label=NOT_AVAILABLE_LABEL)
        if isinstance(slot, RawButton):
            return DisplayInfo(label=f"Button {slot.ordinal}")
        layout = FAMILY_LAYOUTS[family]
        label = layout.labels.get(slot)
        if label is None:
            if family is ControllerFamily.GENERIC_JOYSTICK:
                label = f"Button {CANONICAL_INDEX[slot]}"
            else:
                return DisplayInfo(label=NOT_AVAILABLE_LABEL)
        return DisplayInfo(label=label, color=layout.colors.get(slot))

    def control_label(self, family: ControllerFamily, control: ControlRef) -> str:
        if control.kind is ControlKind.KEY:
            return short_key_name(control.key)
        if control.kind is ControlKind.BUTTON:
            return self.display_info(family, slot_from_canonical(control.button)).label
        return UNBOUND_TEXT


__all__ = [
    "RuntimeDeviceResolver",
    "canonical_ordinal",
    "classify_descriptor",
    "short_key_name",
    "slot_from_canonical",
]
