"""Per-tick raw and effective snapshot construction."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

from rebind.api.bindings import BindingTable
from rebind.api.controls import BindingSide, ControlKind
from rebind.api.devices import ControllerFamily
from rebind.api.errors import check_player
from rebind.api.frames import BoolArray, InputSnapshot, PlayerFrame
from rebind.api.host import ControllerPort, DeviceContext, InputHostPort, PlayerConditions
from rebind.api.keybinds import Keybind, KeybindRegistry

logger = logging.getLogger(__name__)

ListeningTarget = Callable[[], tuple[Keybind, int] | None]


def suppression_mask(keybinds: Sequence[Keybind], conditions: PlayerConditions) -> BoolArray:
    """True where a keybind must read inactive under ``conditions``."""
    size = len(keybinds)
    if conditions.incapacitated:
        return np.ones(size, dtype=np.bool_)
    mask = np.zeros(size, dtype=np.bool_)
    if conditions.viewing_map and not conditions.coop_map_override:
        mask |= np.fromiter((k.map_suppressed for k in keybinds), dtype=np.bool_, count=size)
    if conditions.sleeping:
        mask |= np.fromiter((k.sleep_suppressed for k in keybinds), dtype=np.bool_, count=size)
    return mask


class FrameSnapshotEngine:
    """Reads hardware through the host port and applies suppression."""

    def __init__(
        self,
        registry: KeybindRegistry,
        table: BindingTable,
        host: InputHostPort,
        devices: DeviceContext,
        *,
        axis_threshold: float = 0.5,
        listening: ListeningTarget | None = None,
        trace: bool = False,
    ) -> None:
        self._registry = registry
        self._table = table
        self._host = host
        self._devices = devices
        self._axis_threshold = float(axis_threshold)
        self._listening = listening
        self._trace = trace

    @property
    def table(self) -> BindingTable:
        return self._table

    @table.setter
    def table(self, table: BindingTable) -> None:
        self._table = table

    def build(self, player: int, frame_index: int) -> PlayerFrame:
        check_player(player, self._table.player_count)
        keybinds = self._registry.keybinds()
        family = self._devices.family(player)
        raw = self._read_raw(player, family, keybinds)
        effective = raw & ~suppression_mask(keybinds, self._host.player_conditions(player))
        target = self._listening() if self._listening is not None else None
        if target is not None and target[1] == player:
            effective[target[0].index] = False
        frame = PlayerFrame(
            player=player,
            frame_index=frame_index,
            family=family,
            raw=InputSnapshot(raw),
            effective=InputSnapshot(effective),
        )
        if self._trace:
            logger.debug(
                "frame_built player=%s frame=%s family=%s raw=%s effective=%s",
                player,
                frame_index,
                family,
                np.flatnonzero(raw).tolist(),
                np.flatnonzero(effective).tolist(),
            )
        return frame

    def tick(self, frame_index: int) -> tuple[PlayerFrame, ...]:
        return tuple(
            self.build(player, frame_index) for player in range(self._table.player_count)
        )

    def _read_raw(
        self, player: int, family: ControllerFamily, keybinds: Sequence[Keybind]
    ) -> BoolArray:
        raw = np.zeros(len(keybinds), dtype=np.bool_)
        if family is ControllerFamily.KEYBOARD:
            for keybind in keybinds:
                control = self._table.binding(keybind, player, BindingSide.KEYBOARD)
                if control.kind is ControlKind.KEY:
                    raw[keybind.index] = bool(self._host.key_down(control.key))
            return raw
        if not family.is_gamepad:
            return raw
        handle = self._devices.controller(player)
        if handle is None:
            return raw
        axes = self._axes(family, handle.port)
        resolver = self._devices.resolver
        for keybind in keybinds:
            direction = keybind.direction
            if direction is not None:
                value = axes[0] if direction.horizontal else axes[1]
                raw[keybind.index] = value * direction.sign >= self._axis_threshold
                continue
            slot = resolver.slot_for(self._table.binding(keybind, player, BindingSide.GAMEPAD))
            if slot is None:
                continue
            physical = resolver.physical_ordinal(family, slot)
            if physical is not None:
                raw[keybind.index] = bool(handle.port.button_down(physical))
        return raw

    def _axes(self, family: ControllerFamily, port: ControllerPort) -> tuple[float, float]:
        resolver = self._devices.resolver
        return (
            resolver.resolve_axis(family, True, port.button_down, port.axis_raw),
            resolver.resolve_axis(family, False, port.button_down, port.axis_raw),
        )


__all__ = ["FrameSnapshotEngine", "ListeningTarget", "suppression_mask"]
