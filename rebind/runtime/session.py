"""Session-wide composition root with an explicit lifecycle.

A session is open for registration and configuration until the first
``tick``; from then on the registry, player count and history depth are
locked. ``close`` drops any listening state.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rebind.api.bindings import BindingTable, SideColumns
from rebind.api.capture import CaptureTarget
from rebind.api.controls import BindingSide, ControlRef
from rebind.api.devices import ControllerFamily, DeviceResolver, DisplayInfo, SemanticSlot
from rebind.api.errors import StateError, ValidationError, check_player
from rebind.api.frames import HistoryBuffer, InputSnapshot, PlayerFrame
from rebind.api.host import DeviceContext, InputHostPort
from rebind.api.keybinds import Keybind, KeybindRegistry
from rebind.api.persistence import DecodeResult
from rebind.bindings.table import RuntimeBindingTable
from rebind.capture.listener import BindingCapture
from rebind.conflicts.detector import RuntimeConflictDetector
from rebind.devices.context import PlayerDeviceContext
from rebind.frames.history import RuntimeHistoryBuffer
from rebind.frames.snapshot_engine import FrameSnapshotEngine
from rebind.keybinds.registry import RuntimeKeybindRegistry
from rebind.persistence.codec import apply_record, decode, encode, record_id
from rebind.persistence.store import BindingStore
from rebind.runtime.config import (
    MAX_MAX_PLAYERS,
    MIN_MAX_PLAYERS,
    RebindConfig,
    get_rebind_config,
)
from rebind.runtime.paths import resolve_save_path

logger = logging.getLogger(__name__)

KeybindRef = Keybind | str


class SessionSettings:
    """Player count and history depth, writable until the session locks."""

    def __init__(self, max_players: int, history_length: int) -> None:
        self._locked = False
        self._max_players = MIN_MAX_PLAYERS
        self._history_length = 1
        self.max_players = max_players
        self.history_length = history_length

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        self._locked = True

    @property
    def max_players(self) -> int:
        return self._max_players

    @max_players.setter
    def max_players(self, value: int) -> None:
        self._require_open("max_players")
        if not MIN_MAX_PLAYERS <= value <= MAX_MAX_PLAYERS:
            raise StateError(
                f"max_players must be between {MIN_MAX_PLAYERS} and {MAX_MAX_PLAYERS}, got {value}"
            )
        self._max_players = int(value)

    @property
    def history_length(self) -> int:
        return self._history_length

    @history_length.setter
    def history_length(self, value: int) -> None:
        self._require_open("history_length")
        if value < self._history_length:
            raise StateError(
                f"history_length can only grow ({self._history_length} -> {value})"
            )
        self._history_length = int(value)

    def _require_open(self, name: str) -> None:
        if self._locked:
            raise StateError(f"{name} cannot change after the session is locked")


class InputSession:
    """Owns registry, table, history, capture and conflicts for one host."""

    def __init__(
        self,
        host: InputHostPort,
        *,
        config: RebindConfig | None = None,
        resolver: DeviceResolver | None = None,
        store: BindingStore | None = None,
    ) -> None:
        self._config = config if config is not None else get_rebind_config()
        session_cfg = self._config.session
        self._settings = SessionSettings(session_cfg.max_players, session_cfg.history_length)
        self._host = host
        self._devices = PlayerDeviceContext(host, resolver)
        self._registry = RuntimeKeybindRegistry()
        self._table: BindingTable = RuntimeBindingTable(
            self._registry, self._devices, self._settings.max_players
        )
        self._history = RuntimeHistoryBuffer(
            self._settings.max_players, self._settings.history_length
        )
        self._capture = BindingCapture(
            self._table,
            self._devices.resolver,
            cancel_policy=self._config.capture.cancel_policy,
            same_input_unbinds=self._config.capture.same_input_unbinds,
        )
        self._engine = FrameSnapshotEngine(
            self._registry,
            self._table,
            host,
            self._devices,
            axis_threshold=session_cfg.axis_threshold,
            listening=self._capture.listening_pair,
            trace=self._config.diagnostics.trace_frames,
        )
        self._conflicts = RuntimeConflictDetector(self._registry, self._table, self._devices)
        self._store = store
        self._unknown_records: tuple[str, ...] = ()
        self._overflow: dict[str, SideColumns] = {}
        self._unsubscribe_pending = self._registry.subscribe(self._apply_pending)
        self._frame_index = -1
        self._closed = False

    # Lifecycle

    @property
    def locked(self) -> bool:
        return self._settings.locked

    @property
    def closed(self) -> bool:
        return self._closed

    def lock(self) -> None:
        if self._settings.locked:
            return
        self._registry.lock()
        self._settings.lock()
        self._history.lock()
        logger.info(
            "session_locked keybinds=%s max_players=%s history_length=%s",
            len(self._registry),
            self._settings.max_players,
            self._settings.history_length,
        )

    def close(self) -> None:
        self._capture.reset()
        self._closed = True
        logger.debug("session_closed frame=%s", self._frame_index)

    def __enter__(self) -> InputSession:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # Configuration

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def max_players(self) -> int:
        return self._settings.max_players

    @max_players.setter
    def max_players(self, value: int) -> None:
        self._settings.max_players = value
        previous = self._table.player_count
        self._table.ensure_capacity(value)
        self._history.ensure_players(value)
        self._restore_overflow(previous)

    @property
    def history_length(self) -> int:
        return self._settings.history_length

    @history_length.setter
    def history_length(self, value: int) -> None:
        self._settings.history_length = value
        self._history.set_depth(value)

    # Collaborators

    @property
    def registry(self) -> KeybindRegistry:
        return self._registry

    @property
    def table(self) -> BindingTable:
        return self._table

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    @property
    def devices(self) -> DeviceContext:
        return self._devices

    @property
    def capture(self) -> BindingCapture:
        return self._capture

    @property
    def conflicts(self) -> RuntimeConflictDetector:
        return self._conflicts

    @property
    def unknown_records(self) -> tuple[str, ...]:
        return self._unknown_records

    # Registration

    def register(
        self,
        keybind_id: str,
        mod: str,
        name: str,
        default_keyboard: ControlRef | str | None,
        default_gamepad: ControlRef | str | None,
        default_gamepad_alt: ControlRef | str | None = None,
    ) -> Keybind:
        return self._registry.register(
            keybind_id, mod, name, default_keyboard, default_gamepad, default_gamepad_alt
        )

    def keybind(self, ref: KeybindRef) -> Keybind:
        if isinstance(ref, Keybind):
            return ref
        keybind = self._registry.get(ref)
        if keybind is None:
            raise ValidationError(f"no keybind registered with id {ref!r}")
        return keybind

    # Tick

    def tick(self, frame_index: int | None = None) -> tuple[PlayerFrame, ...]:
        """Build and record one frame per player; the first call locks the session."""
        if self._closed:
            raise StateError("session is closed")
        self.lock()
        self._frame_index = self._frame_index + 1 if frame_index is None else int(frame_index)
        frames = tuple(
            self._engine.build(player, self._frame_index)
            for player in range(self._settings.max_players)
        )
        for frame in frames:
            self._history.push(frame)
        return frames

    # Queries

    def is_active(self, player: int, keybind: KeybindRef) -> bool:
        return self._history.is_active(self._player(player), self.keybind(keybind))

    def just_activated(self, player: int, keybind: KeybindRef) -> bool:
        return self._history.just_activated(self._player(player), self.keybind(keybind))

    def just_released(self, player: int, keybind: KeybindRef) -> bool:
        return self._history.just_released(self._player(player), self.keybind(keybind))

    def held_ticks(self, player: int, keybind: KeybindRef) -> int:
        return self._history.held_ticks(self._player(player), self.keybind(keybind))

    def any_active(self, player: int) -> bool:
        return self._history.any_active(self._player(player))

    def is_bound(self, player: int, keybind: KeybindRef) -> bool:
        return self._table.is_bound(self.keybind(keybind), self._player(player))

    def is_unbound(self, player: int, keybind: KeybindRef) -> bool:
        return not self.is_bound(player, keybind)

    def current_binding(self, keybind: KeybindRef, player: int) -> ControlRef:
        return self._table.current_binding(self.keybind(keybind), self._player(player))

    def input(self, player: int, age: int = 0) -> InputSnapshot:
        return self._history.effective(self._player(player), age)

    def raw_input(self, player: int, age: int = 0) -> InputSnapshot:
        return self._history.raw(self._player(player), age)

    def input_history(self, player: int) -> tuple[InputSnapshot, ...]:
        return self._history.history(self._player(player))

    def raw_input_history(self, player: int) -> tuple[InputSnapshot, ...]:
        return self._history.raw_history(self._player(player))

    # Remapping

    def assign(
        self, keybind: KeybindRef, player: int, side: BindingSide, control: ControlRef | str | None
    ) -> None:
        self._table.assign(self.keybind(keybind), self._player(player), side, control)

    def reset_to_defaults(self, keybind: KeybindRef, player: int) -> None:
        self._table.reset_to_defaults(self.keybind(keybind), self._player(player))

    def start_capture(self, keybind: KeybindRef, player: int, side: BindingSide) -> CaptureTarget:
        return self._capture.start(self.keybind(keybind), self._player(player), side)

    # Display

    def display_info(self, family: ControllerFamily, slot: SemanticSlot) -> DisplayInfo:
        return self._devices.resolver.display_info(family, slot)

    def control_label(self, family: ControllerFamily, control: ControlRef) -> str:
        return self._devices.resolver.control_label(family, control)

    def binding_label(self, keybind: KeybindRef, player: int) -> str:
        """Label of the player's current binding in the family they are using."""
        player = self._player(player)
        family = self._devices.family(player)
        return self.control_label(family, self.current_binding(keybind, player))

    # Persistence

    def export_text(self) -> str:
        return encode(self._table, self._registry, self._unknown_records, self._overflow)

    def import_text(self, text: str) -> DecodeResult:
        result = decode(text, self._registry, self._table)
        self._adopt(result)
        return result

    def load(self) -> DecodeResult:
        result = self._binding_store().load(self._registry, self._table)
        self._adopt(result)
        return result

    def save(self) -> Path:
        return self._binding_store().save(
            self._table, self._registry, self._unknown_records, self._overflow
        )

    def _adopt(self, result: DecodeResult) -> None:
        previous = self._table
        self._capture.reset()
        self._table = result.table
        self._engine.table = result.table
        self._capture.table = result.table
        self._conflicts.table = result.table
        self._unknown_records = result.unknown_records
        self._overflow = dict(result.overflow)
        previous.detach()
        # The new table subscribed during decode; pending records must land after its row.
        self._unsubscribe_pending()
        self._unsubscribe_pending = self._registry.subscribe(self._apply_pending)

    def _apply_pending(self, keybind: Keybind) -> None:
        """Apply a preserved record once a late registration claims its id."""
        pending = [r for r in self._unknown_records if record_id(r) == keybind.id]
        if not pending:
            return
        self._unknown_records = tuple(r for r in self._unknown_records if r not in pending)
        for record in pending:
            try:
                extra = apply_record(self._table, keybind, record)
            except ValueError as exc:
                logger.warning("pending_record_dropped id=%s reason=%s", keybind.id, exc)
                continue
            if extra is None:
                self._overflow.pop(keybind.id, None)
            else:
                self._overflow[keybind.id] = extra
            logger.info("pending_record_applied id=%s", keybind.id)

    def _restore_overflow(self, start: int) -> None:
        """Fill players added since the last load from their saved overflow entries."""
        for keybind_id, columns in self._overflow.items():
            keybind = self._registry.get(keybind_id)
            if keybind is None:
                continue
            for side, controls in zip((BindingSide.KEYBOARD, BindingSide.GAMEPAD), columns):
                for player in range(start, min(len(controls), self._table.player_count)):
                    self._table.assign(keybind, player, side, controls[player])

    def _binding_store(self) -> BindingStore:
        if self._store is None:
            self._store = BindingStore(resolve_save_path(self._config))
        return self._store

    def _player(self, player: int) -> int:
        return check_player(player, self._settings.max_players)


def create_input_session(
    host: InputHostPort,
    *,
    config: RebindConfig | None = None,
    resolver: DeviceResolver | None = None,
    store: BindingStore | None = None,
) -> InputSession:
    """Create a session wired with the default implementations."""
    return InputSession(host, config=config, resolver=resolver, store=store)


__all__ = ["InputSession", "KeybindRef", "SessionSettings", "create_input_session"]
