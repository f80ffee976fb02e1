from __future__ import annotations

import numpy as np
import pytest

from rebind.api.devices import ControllerFamily
from rebind.api.errors import RangeError, StateError
from rebind.api.frames import InputSnapshot, PlayerFrame
from rebind.frames.history import RuntimeHistoryBuffer
from rebind.keybinds.registry import RuntimeKeybindRegistry


def _frame(player: int, *active: int, size: int = 9, raw: tuple[int, ...] | None = None) -> PlayerFrame:
    effective = np.zeros(size, dtype=np.bool_)
    effective[list(active)] = True
    raw_values = np.zeros(size, dtype=np.bool_)
    raw_values[list(active if raw is None else raw)] = True
    return PlayerFrame(
        player=player,
        frame_index=0,
        family=ControllerFamily.KEYBOARD,
        raw=InputSnapshot(raw_values),
        effective=InputSnapshot(effective),
    )


def test_fresh_history_is_all_inactive(registry: RuntimeKeybindRegistry) -> None:
    history = RuntimeHistoryBuffer(4, depth=3)
    jump = registry.get("builtin:jump")

    assert len(history.history(2)) == 3
    assert not history.is_active(2, jump)
    assert not history.just_activated(2, jump)
    assert not history.just_released(2, jump)
    assert history.held_ticks(2, jump) == 0
    assert not history.any_active(2)


def test_push_ages_entries_and_drops_oldest() -> None:
    history = RuntimeHistoryBuffer(1, depth=2)
    history.push(_frame(0, 1))
    history.push(_frame(0, 2))
    history.push(_frame(0, 3))

    assert history.effective(0)[3]
    assert history.effective(0, 1)[2]
    assert len(history.history(0)) == 2
    with pytest.raises(IndexError):
        history.effective(0, 2)


def test_edge_detection(registry: RuntimeKeybindRegistry) -> None:
    jump = registry.get("builtin:jump")
    history = RuntimeHistoryBuffer(1, depth=4)

    history.push(_frame(0, jump.index))
    assert history.just_activated(0, jump)
    assert history.held_ticks(0, jump) == 1

    history.push(_frame(0, jump.index))
    assert not history.just_activated(0, jump)
    assert history.held_ticks(0, jump) == 2

    history.push(_frame(0))
    assert history.just_released(0, jump)
    assert history.held_ticks(0, jump) == 0


def test_depth_one_has_no_previous_tick(registry: RuntimeKeybindRegistry) -> None:
    jump = registry.get("builtin:jump")
    history = RuntimeHistoryBuffer(1, depth=1)
    history.push(_frame(0, jump.index))
    history.push(_frame(0, jump.index))

    assert history.just_activated(0, jump)
    assert not history.just_released(0, jump)
    assert history.held_ticks(0, jump) == 1


def test_raw_history_keeps_suppressed_activity(registry: RuntimeKeybindRegistry) -> None:
    jump = registry.get("builtin:jump")
    history = RuntimeHistoryBuffer(1, depth=2)
    history.push(_frame(0, raw=(jump.index,)))

    assert history.raw(0)[jump]
    assert not history.effective(0)[jump]
    assert history.raw_history(0)[0][jump]


def test_depth_grows_only_before_first_push() -> None:
    history = RuntimeHistoryBuffer(2, depth=3)
    history.set_depth(5)
    assert history.depth == 5
    assert len(history.history(1)) == 5

    with pytest.raises(StateError):
        history.set_depth(4)

    history.push(_frame(0))
    assert history.locked
    with pytest.raises(StateError):
        history.set_depth(8)


def test_ensure_players_and_range_checks() -> None:
    history = RuntimeHistoryBuffer(2, depth=2)
    with pytest.raises(RangeError):
        history.history(2)

    history.ensure_players(3)
    assert history.player_count == 3
    assert not history.any_active(2)


def test_matrix_pads_shorter_rows() -> None:
    history = RuntimeHistoryBuffer(1, depth=3)
    history.push(_frame(0, 0, size=2))
    history.push(_frame(0, 4, size=9))

    matrix = history.as_matrix(0)

    assert matrix.shape == (3, 9)
    assert matrix[0, 4] and matrix[1, 0]
    assert not matrix[2].any()
