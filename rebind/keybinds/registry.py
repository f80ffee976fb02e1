"""Append-only keybind registry."""

from __future__ import annotations

import logging
from collections.abc import Callable

from rebind.api.controls import BindingSide, ControlRef, coerce_control
from rebind.api.errors import DuplicateIdError, StateError, ValidationError
from rebind.api.keybinds import (
    RESERVED_DELIMITERS,
    Direction,
    Keybind,
    KeybindRegistry,
    RegistrationListener,
)
from rebind.keybinds.builtins import BUILTIN_MOD, BUILTIN_SPECS

logger = logging.getLogger(__name__)


def _required_text(field_name: str, value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value


def _default_control(field_name: str, value: ControlRef | str | None, side: BindingSide) -> ControlRef:
    try:
        control = coerce_control(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name}: {exc}") from exc
    if control.side not in {None, side}:
        raise ValidationError(f"{field_name} must be a {side.value.lower()} control: {control}")
    return control


class RuntimeKeybindRegistry(KeybindRegistry):
    """Registry with validated-then-committed registration."""

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._keybinds: list[Keybind] = []
        self._by_id: dict[str, Keybind] = {}
        self._listeners: list[RegistrationListener] = []
        self._locked = False
        if include_builtins:
            for spec in BUILTIN_SPECS:
                self._register(
                    spec.keybind_id,
                    BUILTIN_MOD,
                    spec.name,
                    spec.keyboard,
                    spec.gamepad,
                    spec.gamepad_alt,
                    direction=spec.direction,
                )

    def register(
        self,
        keybind_id: str,
        mod: str,
        name: str,
        default_keyboard: ControlRef | str | None,
        default_gamepad: ControlRef | str | None,
        default_gamepad_alt: ControlRef | str | None = None,
    ) -> Keybind:
        return self._register(
            keybind_id, mod, name, default_keyboard, default_gamepad, default_gamepad_alt
        )

    def _register(
        self,
        keybind_id: str,
        mod: str,
        name: str,
        default_keyboard: ControlRef | str | None,
        default_gamepad: ControlRef | str | None,
        default_gamepad_alt: ControlRef | str | None,
        *,
        direction: Direction | None = None,
    ) -> Keybind:
        if self._locked:
            raise StateError(f"registry is locked; cannot register {keybind_id!r}")
        _required_text("id", keybind_id)
        _required_text("mod", mod)
        _required_text("name", name)
        for delimiter in RESERVED_DELIMITERS:
            if delimiter in keybind_id:
                raise ValidationError(f"id must not contain {delimiter!r}: {keybind_id!r}")
        if keybind_id in self._by_id:
            raise DuplicateIdError(keybind_id)
        keyboard = _default_control("default_keyboard", default_keyboard, BindingSide.KEYBOARD)
        gamepad = _default_control("default_gamepad", default_gamepad, BindingSide.GAMEPAD)
        gamepad_alt = (
            None
            if default_gamepad_alt is None
            else _default_control("default_gamepad_alt", default_gamepad_alt, BindingSide.GAMEPAD)
        )

        keybind = Keybind(
            keybind_id=keybind_id,
            mod=mod,
            name=name,
            index=len(self._keybinds),
            default_keyboard=keyboard,
            default_gamepad=gamepad,
            default_gamepad_alt=gamepad_alt,
            direction=direction,
        )
        self._keybinds.append(keybind)
        self._by_id[keybind_id] = keybind
        logger.debug("keybind_registered id=%s index=%s mod=%s", keybind_id, keybind.index, mod)
        for listener in tuple(self._listeners):
            listener(keybind)
        return keybind

    def get(self, keybind_id: str) -> Keybind | None:
        return self._by_id.get(keybind_id)

    def keybinds(self) -> tuple[Keybind, ...]:
        return tuple(self._keybinds)

    def configurable(self) -> tuple[Keybind, ...]:
        return tuple(keybind for keybind in self._keybinds if not keybind.hide_from_config)

    def subscribe(self, listener: RegistrationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def lock(self) -> None:
        if not self._locked:
            logger.info("keybind_registry_locked count=%s", len(self._keybinds))
        self._locked = True

    @property
    def locked(self) -> bool:
        return self._locked

    def __len__(self) -> int:
        return len(self._keybinds)


__all__ = ["RuntimeKeybindRegistry"]
