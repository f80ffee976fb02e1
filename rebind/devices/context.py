"""Per-player device resolution over the host port."""

from __future__ import annotations

import logging

from rebind.api.controls import BindingSide
from rebind.api.devices import ControllerFamily, DeviceResolver
from rebind.api.host import ControllerHandle, InputHostPort
from rebind.devices.resolver import RuntimeDeviceResolver

logger = logging.getLogger(__name__)


class PlayerDeviceContext:
    """Answers which side, controller and family a player is using right now."""

    def __init__(self, host: InputHostPort, resolver: DeviceResolver | None = None) -> None:
        self._host = host
        self._resolver: DeviceResolver = resolver if resolver is not None else RuntimeDeviceResolver()

    @property
    def host(self) -> InputHostPort:
        return self._host

    @property
    def resolver(self) -> DeviceResolver:
        return self._resolver

    def preference(self, player: int) -> BindingSide:
        return BindingSide(self._host.device_preference(player))

    def controller(self, player: int) -> ControllerHandle | None:
        return self._host.active_controller(player)

    def controller_family(self, player: int) -> ControllerFamily:
        """Family of the attached controller, ignoring the side preference."""
        handle = self._host.active_controller(player)
        if handle is None:
            return ControllerFamily.UNKNOWN
        return self._resolver.classify(handle.descriptor)

    def family(self, player: int) -> ControllerFamily:
        """Family the snapshot engine reads this player through.

        Keyboard preference reads the keyboard. A gamepad preference with no
        controller, or one that cannot be classified, reads nothing in
        multiplayer and falls back to the keyboard otherwise.
        """
        if self.preference(player) is BindingSide.KEYBOARD:
            return ControllerFamily.KEYBOARD
        handle = self._host.active_controller(player)
        if handle is None:
            if self._host.is_multiplayer():
                logger.debug("player_controller_missing player=%s", player)
                return ControllerFamily.UNKNOWN
            return ControllerFamily.KEYBOARD
        family = self._resolver.classify(handle.descriptor)
        if family is ControllerFamily.UNKNOWN and not self._host.is_multiplayer():
            logger.debug("player_controller_unrecognized player=%s", player)
            return ControllerFamily.KEYBOARD
        return family


__all__ = ["PlayerDeviceContext"]
