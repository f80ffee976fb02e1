"""Public conflict-detection contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from rebind.api.bindings import BindingTable
from rebind.api.controls import ControlRef
from rebind.api.host import DeviceContext
from rebind.api.keybinds import Keybind, KeybindRegistry


@dataclass(frozen=True, slots=True)
class Conflict:
    """Another (keybind, player) pair sharing the same physical control."""

    keybind: Keybind
    player: int
    visible: bool


class ConflictDetector(ABC):
    """Same-control detection across keybinds and players."""

    @abstractmethod
    def conflicts_with(self, a: Keybind, player_a: int, b: Keybind, player_b: int) -> bool:
        """Symmetric check that ignores opt-out predicates."""

    @abstractmethod
    def visible_conflict(self, a: Keybind, player_a: int, b: Keybind, player_b: int) -> bool:
        """``conflicts_with`` unless either side's ``hide_conflict`` opts out."""

    @abstractmethod
    def find_conflicts(self, keybind: Keybind, player: int) -> tuple[Conflict, ...]:
        """Every registered pair conflicting with ``(keybind, player)``."""

    @abstractmethod
    def count_uses(self, player: int, control: ControlRef, stop_at: Keybind | None = None) -> int:
        """How many keybinds of ``player`` currently use ``control``."""


def create_conflict_detector(
    registry: KeybindRegistry, table: BindingTable, devices: DeviceContext
) -> ConflictDetector:
    """Create default conflict-detector implementation."""
    from rebind.conflicts.detector import RuntimeConflictDetector

    return RuntimeConflictDetector(registry, table, devices)


__all__ = ["Conflict", "ConflictDetector", "create_conflict_detector"]
