"""Per-tick snapshots and rolling history."""

from rebind.frames.history import RuntimeHistoryBuffer
from rebind.frames.snapshot_engine import FrameSnapshotEngine, suppression_mask

__all__ = ["FrameSnapshotEngine", "RuntimeHistoryBuffer", "suppression_mask"]
