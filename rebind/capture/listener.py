"""Modal "press a key to rebind" state."""

from __future__ import annotations

import logging

from rebind.api.bindings import BindingTable
from rebind.api.capture import CancelPolicy, CaptureOutcome, CaptureResult, CaptureTarget
from rebind.api.controls import UNBOUND, BindingSide, ControlRef, coerce_control, key
from rebind.api.devices import ControllerFamily, DeviceResolver
from rebind.api.errors import StateError, ValidationError, check_player
from rebind.api.keybinds import Keybind
from rebind.keybinds.builtins import PAUSE_ID

logger = logging.getLogger(__name__)


class BindingCapture:
    """At most one (keybind, player, side) listens for its next input."""

    def __init__(
        self,
        table: BindingTable,
        resolver: DeviceResolver,
        *,
        cancel_policy: CancelPolicy = CancelPolicy.KEEP,
        same_input_unbinds: bool = False,
    ) -> None:
        self._table = table
        self._resolver = resolver
        self._cancel_policy = CancelPolicy(cancel_policy)
        self._same_input_unbinds = bool(same_input_unbinds)
        self._target: CaptureTarget | None = None

    @property
    def table(self) -> BindingTable:
        return self._table

    @table.setter
    def table(self, table: BindingTable) -> None:
        self._table = table

    @property
    def target(self) -> CaptureTarget | None:
        return self._target

    @property
    def listening(self) -> bool:
        return self._target is not None

    @property
    def cancel_policy(self) -> CancelPolicy:
        return self._cancel_policy

    def listening_pair(self) -> tuple[Keybind, int] | None:
        target = self._target
        return None if target is None else (target.keybind, target.player)

    def start(self, keybind: Keybind, player: int, side: BindingSide) -> CaptureTarget:
        check_player(player, self._table.player_count)
        side = BindingSide(side)
        if keybind.is_directional and side is BindingSide.GAMEPAD:
            raise ValidationError(f"{keybind.id!r} follows the controller axes on gamepad")
        target = CaptureTarget(keybind=keybind, player=player, side=side)
        if self._target is not None:
            if self._target == target:
                return target
            raise StateError(
                f"already listening for {self._target.keybind.id!r} player {self._target.player}"
            )
        self._target = target
        logger.debug("capture_started id=%s player=%s side=%s", keybind.id, player, side)
        return target

    def offer(self, control: ControlRef | str | None) -> CaptureResult:
        """Apply one observed input to the listening slot."""
        target = self._target
        if target is None:
            return CaptureResult(CaptureOutcome.IDLE)
        value = coerce_control(control)
        if value.side is not target.side:
            return CaptureResult(CaptureOutcome.REJECTED, target, value)
        current = self._table.binding(target.keybind, target.player, target.side)
        if self._same_input_unbinds and current == value and target.keybind.id != PAUSE_ID:
            self._table.assign(target.keybind, target.player, target.side, UNBOUND)
            self._target = None
            logger.info("capture_unbound id=%s player=%s", target.keybind.id, target.player)
            return CaptureResult(CaptureOutcome.UNBOUND, target, UNBOUND)
        self._table.assign(target.keybind, target.player, target.side, value)
        self._target = None
        logger.info(
            "capture_committed id=%s player=%s control=%s", target.keybind.id, target.player, value
        )
        return CaptureResult(CaptureOutcome.COMMITTED, target, value)

    def observe_key(self, name: str) -> CaptureResult:
        return self.offer(key(name))

    def observe_button(self, family: ControllerFamily, physical_ordinal: int) -> CaptureResult:
        """Offer a physical press, stored as its canonical reference."""
        return self.offer(self._resolver.control_for(family, physical_ordinal))

    def cancel(self) -> CaptureResult:
        target = self._target
        if target is None:
            return CaptureResult(CaptureOutcome.IDLE)
        self._target = None
        if self._cancel_policy is CancelPolicy.UNBIND and target.keybind.id != PAUSE_ID:
            self._table.assign(target.keybind, target.player, target.side, UNBOUND)
        control = self._table.binding(target.keybind, target.player, target.side)
        logger.debug(
            "capture_cancelled id=%s player=%s policy=%s",
            target.keybind.id,
            target.player,
            self._cancel_policy,
        )
        return CaptureResult(CaptureOutcome.CANCELLED, target, control)

    def reset(self) -> None:
        """Drop listening state without touching the table."""
        self._target = None


__all__ = ["BindingCapture"]
