from __future__ import annotations

import numpy as np
import pytest

from rebind.api.frames import InputSnapshot
from rebind.keybinds.registry import RuntimeKeybindRegistry


def test_snapshot_copies_and_freezes_input() -> None:
    source = np.array([True, False, True])
    snapshot = InputSnapshot(source)
    source[1] = True

    assert snapshot[1] is False
    assert snapshot.as_array().tolist() == [True, False, True]
    with pytest.raises(ValueError):
        snapshot.as_array()[0] = False


def test_lookup_by_index_or_keybind(registry: RuntimeKeybindRegistry) -> None:
    snapshot = InputSnapshot([False, False, False, True])

    assert snapshot[3] is True
    assert snapshot[registry.get("builtin:jump")] is True
    assert snapshot[registry.get("builtin:pause")] is False


def test_out_of_range_lookup_reads_inactive(registry: RuntimeKeybindRegistry) -> None:
    snapshot = InputSnapshot.empty()

    assert len(snapshot) == 0
    assert snapshot[registry.get("builtin:right")] is False
    assert snapshot[-1] is False
    assert not snapshot.any()


def test_equality_and_padding() -> None:
    first = InputSnapshot([True, False])
    second = InputSnapshot(np.array([1, 0]))

    assert first == second
    assert hash(first) == hash(second)
    assert first != InputSnapshot([True, False, False])
    assert first.padded(4).tolist() == [True, False, False, False]
    assert repr(first) == "InputSnapshot(size=2, active=[0])"
