"""Same-physical-control conflict detection."""

from __future__ import annotations

import logging

from rebind.api.bindings import BindingTable
from rebind.api.conflicts import Conflict, ConflictDetector
from rebind.api.controls import BindingSide, ControlKind, ControlRef
from rebind.api.devices import DeviceResolver
from rebind.api.errors import check_player
from rebind.api.host import DeviceContext
from rebind.api.keybinds import Keybind, KeybindRegistry
from rebind.runtime.errors import log_recoverable

logger = logging.getLogger(__name__)


def same_control(resolver: DeviceResolver, first: ControlRef, second: ControlRef) -> bool:
    """Whether two bound references name one physical control."""
    if first.is_unbound or second.is_unbound or first.kind is not second.kind:
        return False
    if first.kind is ControlKind.KEY:
        return first.key == second.key
    return resolver.slot_for(first) == resolver.slot_for(second)


class RuntimeConflictDetector(ConflictDetector):
    """Detector reading current bindings from the session's table."""

    def __init__(
        self, registry: KeybindRegistry, table: BindingTable, devices: DeviceContext
    ) -> None:
        self._registry = registry
        self._table = table
        self._devices = devices

    @property
    def table(self) -> BindingTable:
        return self._table

    @table.setter
    def table(self, table: BindingTable) -> None:
        self._table = table

    def conflicts_with(self, a: Keybind, player_a: int, b: Keybind, player_b: int) -> bool:
        check_player(player_a, self._table.player_count)
        check_player(player_b, self._table.player_count)
        if a is b and player_a == player_b:
            return False
        side = self._devices.preference(player_a)
        if side is not self._devices.preference(player_b):
            return False
        if side is BindingSide.GAMEPAD and self._controller_slot(player_a) != self._controller_slot(
            player_b
        ):
            return False
        return same_control(
            self._devices.resolver,
            self._table.current_binding(a, player_a),
            self._table.current_binding(b, player_b),
        )

    def visible_conflict(self, a: Keybind, player_a: int, b: Keybind, player_b: int) -> bool:
        if not self.conflicts_with(a, player_a, b, player_b):
            return False
        return not (_hides(a, b, player_b) or _hides(b, a, player_a))

    def find_conflicts(self, keybind: Keybind, player: int) -> tuple[Conflict, ...]:
        found: list[Conflict] = []
        for other_player in range(self._table.player_count):
            for other in self._registry.keybinds():
                if self.conflicts_with(keybind, player, other, other_player):
                    visible = not (
                        _hides(keybind, other, other_player) or _hides(other, keybind, player)
                    )
                    found.append(Conflict(keybind=other, player=other_player, visible=visible))
        return tuple(found)

    def count_uses(self, player: int, control: ControlRef, stop_at: Keybind | None = None) -> int:
        """Count keybinds in registry order, up to and including ``stop_at``."""
        check_player(player, self._table.player_count)
        resolver = self._devices.resolver
        count = 0
        for keybind in self._registry.keybinds():
            if same_control(resolver, self._table.current_binding(keybind, player), control):
                count += 1
            if keybind is stop_at:
                break
        return count

    def _controller_slot(self, player: int) -> int | None:
        handle = self._devices.controller(player)
        return None if handle is None else handle.slot


def _hides(keybind: Keybind, other: Keybind, other_player: int) -> bool:
    predicate = keybind.hide_conflict
    if predicate is None:
        return False
    try:
        return bool(predicate(other, other_player))
    except Exception:  # pylint: disable=broad-exception-caught
        log_recoverable(
            logger,
            "hide_conflict_predicate_failed keybind=%s other=%s",
            keybind.id,
            other.id,
            level=logging.WARNING,
        )
        return False


__all__ = ["RuntimeConflictDetector", "same_control"]
