"""Binding conflict detection."""

from rebind.conflicts.detector import RuntimeConflictDetector, same_control

__all__ = ["RuntimeConflictDetector", "same_control"]
