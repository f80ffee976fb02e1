"""Per-player rolling snapshot history."""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from rebind.api.errors import StateError, check_player
from rebind.api.frames import BoolArray, HistoryBuffer, InputSnapshot, PlayerFrame
from rebind.api.keybinds import Keybind

logger = logging.getLogger(__name__)

_Entry = tuple[InputSnapshot, InputSnapshot]
_EMPTY = InputSnapshot.empty()


class RuntimeHistoryBuffer(HistoryBuffer):
    """Deque per player holding ``(raw, effective)`` pairs, newest at the left."""

    def __init__(self, player_count: int, depth: int = 10) -> None:
        if depth < 1:
            raise StateError("history depth must be >= 1")
        self._depth = int(depth)
        self._locked = False
        self._players: list[deque[_Entry]] = []
        self.ensure_players(player_count)

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def player_count(self) -> int:
        return len(self._players)

    def set_depth(self, depth: int) -> None:
        if self._locked:
            raise StateError("history depth is locked after the first push")
        if depth < self._depth:
            raise StateError(f"history depth can only grow ({self._depth} -> {depth})")
        if depth == self._depth:
            return
        self._depth = int(depth)
        self._players = [self._filled(entries) for entries in self._players]
        logger.debug("history_depth_set depth=%s", depth)

    def lock(self) -> None:
        self._locked = True

    def ensure_players(self, player_count: int) -> None:
        while len(self._players) < player_count:
            self._players.append(self._filled(()))

    def push(self, frame: PlayerFrame) -> None:
        entries = self._entries(frame.player)
        self._locked = True
        entries.appendleft((frame.raw, frame.effective))

    def effective(self, player: int, age: int = 0) -> InputSnapshot:
        return self._at(player, age)[1]

    def raw(self, player: int, age: int = 0) -> InputSnapshot:
        return self._at(player, age)[0]

    def history(self, player: int) -> tuple[InputSnapshot, ...]:
        return tuple(effective for _, effective in self._entries(player))

    def raw_history(self, player: int) -> tuple[InputSnapshot, ...]:
        return tuple(raw for raw, _ in self._entries(player))

    def is_active(self, player: int, keybind: Keybind) -> bool:
        return self.effective(player)[keybind]

    def just_activated(self, player: int, keybind: Keybind) -> bool:
        current = self.effective(player)[keybind]
        if self._depth == 1:
            return current
        return current and not self.effective(player, 1)[keybind]

    def just_released(self, player: int, keybind: Keybind) -> bool:
        if self._depth == 1:
            return False
        return not self.effective(player)[keybind] and self.effective(player, 1)[keybind]

    def held_ticks(self, player: int, keybind: Keybind) -> int:
        count = 0
        for _, effective in self._entries(player):
            if not effective[keybind]:
                break
            count += 1
        return count

    def any_active(self, player: int) -> bool:
        return self.effective(player).any()

    def as_matrix(self, player: int, *, raw: bool = False) -> BoolArray:
        snapshots = self.raw_history(player) if raw else self.history(player)
        width = max(len(snapshot) for snapshot in snapshots)
        return np.stack([snapshot.padded(width) for snapshot in snapshots])

    def _entries(self, player: int) -> deque[_Entry]:
        check_player(player, len(self._players))
        return self._players[player]

    def _at(self, player: int, age: int) -> _Entry:
        entries = self._entries(player)
        if not 0 <= age < self._depth:
            raise IndexError(f"history age {age} outside depth {self._depth}")
        return entries[age]

    def _filled(self, entries: deque[_Entry] | tuple[()]) -> deque[_Entry]:
        filled: deque[_Entry] = deque(entries, maxlen=self._depth)
        while len(filled) < self._depth:
            filled.append((_EMPTY, _EMPTY))
        return filled


__all__ = ["RuntimeHistoryBuffer"]
