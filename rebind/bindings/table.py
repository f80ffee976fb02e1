"""Grow-only per-player binding storage."""

from __future__ import annotations

import logging

from rebind.api.bindings import BindingTable, SideColumns
from rebind.api.controls import UNBOUND, BindingSide, ControlRef, coerce_control
from rebind.api.errors import ValidationError, check_player
from rebind.api.host import DeviceContext
from rebind.api.keybinds import Keybind, KeybindRegistry

logger = logging.getLogger(__name__)


class RuntimeBindingTable(BindingTable):
    """Rows indexed by keybind index, columns by player.

    The table subscribes to its registry so every registration appends a row
    filled with that keybind's defaults.
    """

    def __init__(
        self, registry: KeybindRegistry, devices: DeviceContext, player_count: int
    ) -> None:
        self._registry = registry
        self._devices = devices
        self._players = 0
        self._keyboard: list[list[ControlRef]] = []
        self._gamepad: list[list[ControlRef]] = []
        for keybind in registry.keybinds():
            self._append_row(keybind)
        self.ensure_capacity(player_count)
        self._unsubscribe = registry.subscribe(self._append_row)

    @property
    def player_count(self) -> int:
        return self._players

    def current_binding(self, keybind: Keybind, player: int) -> ControlRef:
        return self.binding(keybind, player, self._devices.preference(player))

    def binding(self, keybind: Keybind, player: int, side: BindingSide) -> ControlRef:
        row = self._row(keybind, side)
        check_player(player, self._players)
        return row[player]

    def assign(
        self, keybind: Keybind, player: int, side: BindingSide, control: ControlRef | str | None
    ) -> None:
        value = coerce_control(control)
        if value.side not in {None, side}:
            raise ValidationError(f"{value} cannot be assigned to the {side.value.lower()} side")
        row = self._row(keybind, side)
        check_player(player, self._players)
        row[player] = value

    def is_bound(self, keybind: Keybind, player: int) -> bool:
        return not self.current_binding(keybind, player).is_unbound

    def ensure_capacity(self, player_count: int) -> None:
        if player_count <= self._players:
            return
        new_players = range(self._players, player_count)
        for keybind in self._registry.keybinds()[: len(self._keyboard)]:
            self._keyboard[keybind.index].extend(keybind.default_keyboard for _ in new_players)
            self._gamepad[keybind.index].extend(
                self._gamepad_default(keybind, player) for player in new_players
            )
        logger.debug("binding_table_grown players=%s->%s", self._players, player_count)
        self._players = player_count

    def reset_to_defaults(self, keybind: Keybind, player: int) -> None:
        check_player(player, self._players)
        self._row(keybind, BindingSide.KEYBOARD)[player] = keybind.default_keyboard
        self._row(keybind, BindingSide.GAMEPAD)[player] = self._gamepad_default(keybind, player)

    def columns(self, keybind: Keybind) -> SideColumns:
        return (
            tuple(self._row(keybind, BindingSide.KEYBOARD)),
            tuple(self._row(keybind, BindingSide.GAMEPAD)),
        )

    def blank(self) -> RuntimeBindingTable:
        return RuntimeBindingTable(self._registry, self._devices, self._players)

    def detach(self) -> None:
        self._unsubscribe()

    def _append_row(self, keybind: Keybind) -> None:
        if keybind.index != len(self._keyboard):
            raise ValidationError(f"keybind index {keybind.index} out of order")
        players = range(self._players)
        self._keyboard.append([keybind.default_keyboard for _ in players])
        self._gamepad.append([self._gamepad_default(keybind, player) for player in players])

    def _gamepad_default(self, keybind: Keybind, player: int) -> ControlRef:
        if keybind.is_directional:
            return UNBOUND
        return keybind.gamepad_default_for(self._devices.controller_family(player))

    def _row(self, keybind: Keybind, side: BindingSide) -> list[ControlRef]:
        rows = self._keyboard if side is BindingSide.KEYBOARD else self._gamepad
        if not 0 <= keybind.index < len(rows) or self._registry.get(keybind.id) is not keybind:
            raise ValidationError(f"keybind {keybind.id!r} is not registered with this table")
        return rows[keybind.index]


__all__ = ["RuntimeBindingTable"]
