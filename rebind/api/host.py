"""Host-side ports consumed by the binding engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rebind.api.controls import BindingSide
from rebind.api.devices import ControllerFamily, DeviceResolver, HardwareDescriptor


class ControllerPort(Protocol):
    """Live state of one attached controller."""

    def button_down(self, ordinal: int) -> bool:
        """Return whether the physical button ordinal is held."""

    def axis_raw(self, axis: int) -> float:
        """Return the unclamped analog value of one axis."""


@dataclass(frozen=True, slots=True)
class ControllerHandle:
    """Controller assigned to one player, as reported by the host."""

    slot: int
    descriptor: HardwareDescriptor
    port: ControllerPort


@dataclass(frozen=True, slots=True)
class PlayerConditions:
    """Per-tick player state that drives suppression."""

    viewing_map: bool = False
    coop_map_override: bool = False
    sleeping: bool = False
    stunned: bool = False
    dead: bool = False
    externally_controlled: bool = False

    @property
    def incapacitated(self) -> bool:
        return self.stunned or self.dead or self.externally_controlled


NEUTRAL_CONDITIONS = PlayerConditions()


class InputHostPort(Protocol):
    """Queries the engine makes into the host simulation."""

    def device_preference(self, player: int) -> BindingSide:
        """Side the player has chosen to play with."""

    def active_controller(self, player: int) -> ControllerHandle | None:
        """Controller currently assigned to the player, if any."""

    def key_down(self, key: str) -> bool:
        """Return whether a keyboard key is held."""

    def player_conditions(self, player: int) -> PlayerConditions:
        """Suppression-relevant state for the player this tick."""

    def is_multiplayer(self) -> bool:
        """Whether more than one player requires a controller."""


class DeviceContext(Protocol):
    """Per-player device view shared by table, frames and conflicts."""

    @property
    def resolver(self) -> DeviceResolver: ...

    def preference(self, player: int) -> BindingSide: ...

    def controller(self, player: int) -> ControllerHandle | None: ...

    def controller_family(self, player: int) -> ControllerFamily: ...

    def family(self, player: int) -> ControllerFamily: ...


def create_device_context(
    host: InputHostPort, resolver: DeviceResolver | None = None
) -> DeviceContext:
    """Create default per-player device context."""
    from rebind.devices.context import PlayerDeviceContext

    return PlayerDeviceContext(host, resolver)


__all__ = [
    "NEUTRAL_CONDITIONS",
    "ControllerHandle",
    "ControllerPort",
    "DeviceContext",
    "InputHostPort",
    "PlayerConditions",
    "create_device_context",
]
