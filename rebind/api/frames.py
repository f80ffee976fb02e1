"""Immutable per-tick activity snapshots and history contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from rebind.api.devices import ControllerFamily
from rebind.api.keybinds import Keybind

BoolArray = npt.NDArray[np.bool_]


class InputSnapshot:
    """Boolean activity per keybind index for one player and one tick."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[bool] | BoolArray) -> None:
        if isinstance(values, np.ndarray):
            array = values.astype(np.bool_, copy=True).reshape(-1)
        else:
            array = np.array(list(values), dtype=np.bool_).reshape(-1)
        array.setflags(write=False)
        self._values = array

    @classmethod
    def empty(cls, size: int = 0) -> InputSnapshot:
        return cls(np.zeros(max(0, int(size)), dtype=np.bool_))

    def __getitem__(self, keybind: Keybind | int) -> bool:
        index = keybind if isinstance(keybind, int) else keybind.index
        if not 0 <= index < self._values.shape[0]:
            return False
        return bool(self._values[index])

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def any(self) -> bool:
        return bool(self._values.any())

    def as_array(self) -> BoolArray:
        """Read-only backing array."""
        return self._values

    def padded(self, size: int) -> BoolArray:
        out = np.zeros(max(size, len(self)), dtype=np.bool_)
        out[: len(self)] = self._values
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InputSnapshot):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        active = [int(index) for index in np.flatnonzero(self._values)]
        return f"InputSnapshot(size={len(self)}, active={active})"


@dataclass(frozen=True, slots=True)
class PlayerFrame:
    """Raw and effective snapshots produced for one player on one tick."""

    player: int
    frame_index: int
    family: ControllerFamily
    raw: InputSnapshot
    effective: InputSnapshot


class HistoryBuffer(ABC):
    """Fixed-depth rolling window of frames per player; index 0 is newest."""

    @property
    @abstractmethod
    def depth(self) -> int: ...

    @property
    @abstractmethod
    def locked(self) -> bool: ...

    @abstractmethod
    def set_depth(self, depth: int) -> None:
        """Grow the depth; only allowed before the first push."""

    @abstractmethod
    def ensure_players(self, player_count: int) -> None:
        """Allocate pre-filled history for additional players."""

    @abstractmethod
    def push(self, frame: PlayerFrame) -> None:
        """Age entries and insert ``frame`` at index 0."""

    @abstractmethod
    def effective(self, player: int, age: int = 0) -> InputSnapshot: ...

    @abstractmethod
    def raw(self, player: int, age: int = 0) -> InputSnapshot: ...

    @abstractmethod
    def history(self, player: int) -> tuple[InputSnapshot, ...]: ...

    @abstractmethod
    def raw_history(self, player: int) -> tuple[InputSnapshot, ...]: ...

    @abstractmethod
    def is_active(self, player: int, keybind: Keybind) -> bool: ...

    @abstractmethod
    def just_activated(self, player: int, keybind: Keybind) -> bool: ...

    @abstractmethod
    def just_released(self, player: int, keybind: Keybind) -> bool: ...

    @abstractmethod
    def held_ticks(self, player: int, keybind: Keybind) -> int: ...

    @abstractmethod
    def any_active(self, player: int) -> bool: ...

    @abstractmethod
    def as_matrix(self, player: int, *, raw: bool = False) -> BoolArray:
        """Depth x keybind matrix, newest row first."""


def create_history_buffer(player_count: int, depth: int = 10) -> HistoryBuffer:
    """Create default history-buffer implementation."""
    from rebind.frames.history import RuntimeHistoryBuffer

    return RuntimeHistoryBuffer(player_count, depth)


__all__ = [
    "BoolArray",
    "HistoryBuffer",
    "InputSnapshot",
    "PlayerFrame",
    "create_history_buffer",
]
