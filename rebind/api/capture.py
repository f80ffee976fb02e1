"""Binding-capture (listening mode) contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from rebind.api.controls import BindingSide, ControlRef
from rebind.api.keybinds import Keybind


class CancelPolicy(StrEnum):
    """What cancelling a capture does to the slot being listened on."""

    KEEP = "keep"
    UNBIND = "unbind"


class CaptureOutcome(StrEnum):
    """Result of offering one input to an active capture."""

    IDLE = "IDLE"
    COMMITTED = "COMMITTED"
    UNBOUND = "UNBOUND"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True, slots=True)
class CaptureTarget:
    """The single (keybind, player, side) currently listening."""

    keybind: Keybind
    player: int
    side: BindingSide


@dataclass(frozen=True, slots=True)
class CaptureResult:
    """Outcome plus the slot value after it was applied."""

    outcome: CaptureOutcome
    target: CaptureTarget | None = None
    control: ControlRef | None = None


__all__ = ["CancelPolicy", "CaptureOutcome", "CaptureResult", "CaptureTarget"]
