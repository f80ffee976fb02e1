"""Public keybind and registry contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from enum import StrEnum

from rebind.api.controls import ControlRef
from rebind.api.devices import ControllerFamily

RESERVED_DELIMITERS: tuple[str, ...] = ("<optA>", "<optB>")


class Direction(StrEnum):
    """Movement direction carried by the directional built-ins."""

    UP = "UP"
    LEFT = "LEFT"
    DOWN = "DOWN"
    RIGHT = "RIGHT"

    @property
    def horizontal(self) -> bool:
        return self in {Direction.LEFT, Direction.RIGHT}

    @property
    def sign(self) -> int:
        return 1 if self in {Direction.UP, Direction.RIGHT} else -1


class Keybind:
    """Logical input action.

    Identity and defaults are fixed at registration. The suppression and
    visibility flags stay writable for the owning mod.
    """

    __slots__ = (
        "_id",
        "_mod",
        "_name",
        "_index",
        "_default_keyboard",
        "_default_gamepad",
        "_default_gamepad_alt",
        "_direction",
        "map_suppressed",
        "sleep_suppressed",
        "hide_from_config",
        "hide_conflict",
    )

    def __init__(
        self,
        *,
        keybind_id: str,
        mod: str,
        name: str,
        index: int,
        default_keyboard: ControlRef,
        default_gamepad: ControlRef,
        default_gamepad_alt: ControlRef | None = None,
        direction: Direction | None = None,
    ) -> None:
        self._id = keybind_id
        self._mod = mod
        self._name = name
        self._index = index
        self._default_keyboard = default_keyboard
        self._default_gamepad = default_gamepad
        self._default_gamepad_alt = default_gamepad_alt
        self._direction = direction
        self.map_suppressed = True
        self.sleep_suppressed = True
        self.hide_from_config = False
        self.hide_conflict: HideConflict | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def mod(self) -> str:
        return self._mod

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> int:
        return self._index

    @property
    def default_keyboard(self) -> ControlRef:
        return self._default_keyboard

    @property
    def default_gamepad(self) -> ControlRef:
        return self._default_gamepad

    @property
    def default_gamepad_alt(self) -> ControlRef | None:
        return self._default_gamepad_alt

    @property
    def direction(self) -> Direction | None:
        return self._direction

    @property
    def is_directional(self) -> bool:
        return self._direction is not None

    def gamepad_default_for(self, family: ControllerFamily) -> ControlRef:
        """Gamepad default for a new slot; the alternate applies to Xbox-style only."""
        alt = self._default_gamepad_alt
        if family is ControllerFamily.XBOX_STYLE and alt is not None and not alt.is_unbound:
            return alt
        return self._default_gamepad

    def __repr__(self) -> str:
        return f"Keybind(id={self._id!r}, index={self._index})"


HideConflict = Callable[[Keybind, int], bool]
RegistrationListener = Callable[[Keybind], None]


class KeybindRegistry(ABC):
    """Ordered, append-only collection of keybinds."""

    @abstractmethod
    def register(
        self,
        keybind_id: str,
        mod: str,
        name: str,
        default_keyboard: ControlRef | str | None,
        default_gamepad: ControlRef | str | None,
        default_gamepad_alt: ControlRef | str | None = None,
    ) -> Keybind:
        """Validate and append a keybind, then notify listeners."""

    @abstractmethod
    def get(self, keybind_id: str) -> Keybind | None:
        """Return keybind by id, ``None`` when absent."""

    @abstractmethod
    def keybinds(self) -> tuple[Keybind, ...]:
        """All keybinds in registration order."""

    @abstractmethod
    def configurable(self) -> tuple[Keybind, ...]:
        """Keybinds shown in a configuration screen."""

    @abstractmethod
    def subscribe(self, listener: RegistrationListener) -> Callable[[], None]:
        """Call ``listener`` after each registration; returns an unsubscribe callable."""

    @abstractmethod
    def lock(self) -> None:
        """Reject all later registrations."""

    @property
    @abstractmethod
    def locked(self) -> bool:
        """Whether registration is closed."""

    @abstractmethod
    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[Keybind]:
        return iter(self.keybinds())


def create_keybind_registry(*, include_builtins: bool = True) -> KeybindRegistry:
    """Create default registry, seeded with the built-in keybinds."""
    from rebind.keybinds.registry import RuntimeKeybindRegistry

    return RuntimeKeybindRegistry(include_builtins=include_builtins)


__all__ = [
    "RESERVED_DELIMITERS",
    "Direction",
    "HideConflict",
    "Keybind",
    "KeybindRegistry",
    "RegistrationListener",
    "create_keybind_registry",
]
