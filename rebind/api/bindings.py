"""Public binding-table contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rebind.api.controls import BindingSide, ControlRef
from rebind.api.host import DeviceContext
from rebind.api.keybinds import Keybind, KeybindRegistry

SideColumns = tuple[tuple[ControlRef, ...], tuple[ControlRef, ...]]


class BindingTable(ABC):
    """Per keybind, per player keyboard and gamepad assignment."""

    @property
    @abstractmethod
    def player_count(self) -> int:
        """Player slots currently allocated."""

    @abstractmethod
    def current_binding(self, keybind: Keybind, player: int) -> ControlRef:
        """Side selected by the player's device preference."""

    @abstractmethod
    def binding(self, keybind: Keybind, player: int, side: BindingSide) -> ControlRef:
        """One side of a player's assignment."""

    @abstractmethod
    def assign(
        self, keybind: Keybind, player: int, side: BindingSide, control: ControlRef | str | None
    ) -> None:
        """Overwrite one side; conflicts are not checked."""

    @abstractmethod
    def is_bound(self, keybind: Keybind, player: int) -> bool:
        """Whether the current binding is not ``UNBOUND``."""

    @abstractmethod
    def ensure_capacity(self, player_count: int) -> None:
        """Grow to at least ``player_count`` players; idempotent."""

    @abstractmethod
    def reset_to_defaults(self, keybind: Keybind, player: int) -> None:
        """Restore both sides of one player to the keybind defaults."""

    @abstractmethod
    def columns(self, keybind: Keybind) -> SideColumns:
        """Keyboard and gamepad assignments across all players."""

    @abstractmethod
    def blank(self) -> BindingTable:
        """Fresh table of equal capacity holding only defaults."""

    @abstractmethod
    def detach(self) -> None:
        """Stop following registry growth."""


def create_binding_table(
    registry: KeybindRegistry, devices: DeviceContext, player_count: int
) -> BindingTable:
    """Create default binding-table implementation."""
    from rebind.bindings.table import RuntimeBindingTable

    return RuntimeBindingTable(registry, devices, player_count)


__all__ = ["BindingTable", "SideColumns", "create_binding_table"]
