from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from rebind.api.controls import BindingSide
from rebind.api.devices import HardwareDescriptor
from rebind.api.host import NEUTRAL_CONDITIONS, ControllerHandle, PlayerConditions
from rebind.devices.context import PlayerDeviceContext
from rebind.keybinds.registry import RuntimeKeybindRegistry
from rebind.persistence.store import BindingStore
from rebind.runtime.config import RebindConfig, load_rebind_config
from rebind.runtime.session import InputSession

XBOX_PAD = HardwareDescriptor(name="Xbox Wireless Controller", vendor="045e")
DUALSENSE_PAD = HardwareDescriptor(name="DualSense Wireless Controller", vendor="054c")
SWITCH_PAD = HardwareDescriptor(name="Pro Controller", vendor="057e")
GENERIC_PAD = HardwareDescriptor(name="USB Gamepad")


@dataclass(slots=True)
class FakeController:
    buttons: set[int] = field(default_factory=set)
    axes: dict[int, float] = field(default_factory=dict)
    queried: list[int] = field(default_factory=list)

    def button_down(self, ordinal: int) -> bool:
        self.queried.append(ordinal)
        return ordinal in self.buttons

    def axis_raw(self, axis: int) -> float:
        return self.axes.get(axis, 0.0)


class FakeHost:
    def __init__(self) -> None:
        self.preferences: dict[int, BindingSide] = {}
        self.controllers: dict[int, ControllerHandle] = {}
        self.keys: set[str] = set()
        self.conditions: dict[int, PlayerConditions] = {}
        self.multiplayer = False
        self.calls: list[tuple[str, int]] = []

    def device_preference(self, player: int) -> BindingSide:
        self.calls.append(("device_preference", player))
        return self.preferences.get(player, BindingSide.KEYBOARD)

    def active_controller(self, player: int) -> ControllerHandle | None:
        return self.controllers.get(player)

    def key_down(self, key: str) -> bool:
        return key in self.keys

    def player_conditions(self, player: int) -> PlayerConditions:
        return self.conditions.get(player, NEUTRAL_CONDITIONS)

    def is_multiplayer(self) -> bool:
        return self.multiplayer

    def attach(
        self,
        player: int,
        descriptor: HardwareDescriptor = XBOX_PAD,
        *,
        slot: int | None = None,
        prefer_gamepad: bool = True,
    ) -> FakeController:
        controller = FakeController()
        self.controllers[player] = ControllerHandle(
            slot=player if slot is None else slot, descriptor=descriptor, port=controller
        )
        if prefer_gamepad:
            self.preferences[player] = BindingSide.GAMEPAD
        return controller


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def config() -> RebindConfig:
    return load_rebind_config(env={})


@pytest.fixture
def devices(host: FakeHost) -> PlayerDeviceContext:
    return PlayerDeviceContext(host)


@pytest.fixture
def registry() -> RuntimeKeybindRegistry:
    return RuntimeKeybindRegistry()


@pytest.fixture
def save_path(tmp_path: Path) -> Path:
    return tmp_path / "saves" / "bindings.sav"


@pytest.fixture
def session(host: FakeHost, config: RebindConfig, save_path: Path) -> InputSession:
    return InputSession(host, config=config, store=BindingStore(save_path))
