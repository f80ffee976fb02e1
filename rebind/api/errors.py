"""Public error taxonomy."""

from __future__ import annotations


class RebindError(Exception):
    """Base class for every error raised by the binding engine."""


class ValidationError(RebindError, ValueError):
    """Registration input is empty, malformed, or reserved."""


class DuplicateIdError(ValidationError):
    """A keybind with the same id is already registered."""

    def __init__(self, keybind_id: str) -> None:
        super().__init__(f"a keybind with the id {keybind_id!r} has already been registered")
        self.keybind_id = keybind_id


class RangeError(RebindError, IndexError):
    """Player index outside the configured range."""

    def __init__(self, player: int, max_players: int) -> None:
        super().__init__(f"player number {player} is not valid (max_players={max_players})")
        self.player = player
        self.max_players = max_players


class StateError(RebindError, RuntimeError):
    """Configuration or lifecycle change rejected in the current state."""


class ParseWarning(RebindError, UserWarning):
    """One persisted record could not be decoded and was skipped."""

    def __init__(self, record_index: int, record: str, reason: str) -> None:
        super().__init__(f"record {record_index} skipped: {reason}")
        self.record_index = record_index
        self.record = record
        self.reason = reason


def check_player(player: int, max_players: int) -> int:
    """Return ``player`` or raise ``RangeError`` when outside ``[0, max_players)``."""
    if not isinstance(player, int) or player < 0 or player >= max_players:
        raise RangeError(player, max_players)
    return player


__all__ = [
    "DuplicateIdError",
    "ParseWarning",
    "RangeError",
    "RebindError",
    "StateError",
    "ValidationError",
    "check_player",
]
