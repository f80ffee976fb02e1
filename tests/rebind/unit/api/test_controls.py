from __future__ import annotations

import pytest

from rebind.api.controls import (
    UNBOUND,
    BindingSide,
    ControlKind,
    button,
    coerce_control,
    key,
    parse_control,
)
from rebind.api.errors import (
    DuplicateIdError,
    ParseWarning,
    RangeError,
    RebindError,
    StateError,
    ValidationError,
    check_player,
)


def test_parse_control_reads_every_text_form() -> None:
    assert parse_control("None") is UNBOUND
    assert parse_control("LeftShift") == key("LeftShift")
    assert parse_control("JoystickButton12") == button(12)
    assert parse_control(" Z ").kind is ControlKind.KEY


def test_control_text_form_is_lossless() -> None:
    for control in (UNBOUND, key("Escape"), key("Period"), button(0), button(31)):
        assert parse_control(control.to_text()) == control
        assert str(control) == control.to_text()


@pytest.mark.parametrize("text", ["JoystickButton", "JoystickButtonX", "Left Shift", "", "a,b"])
def test_parse_control_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ValueError):
        parse_control(text)


def test_button_rejects_negative_ordinal() -> None:
    with pytest.raises(ValueError):
        button(-1)


def test_control_side_follows_kind() -> None:
    assert key("Z").side is BindingSide.KEYBOARD
    assert button(3).side is BindingSide.GAMEPAD
    assert UNBOUND.side is None
    assert UNBOUND.is_unbound


def test_coerce_control_accepts_none_text_and_refs() -> None:
    assert coerce_control(None) is UNBOUND
    assert coerce_control("JoystickButton4") == button(4)
    ref = key("Tab")
    assert coerce_control(ref) is ref


def test_error_taxonomy_subclasses_matching_builtins() -> None:
    assert issubclass(ValidationError, ValueError)
    assert issubclass(DuplicateIdError, ValidationError)
    assert issubclass(RangeError, IndexError)
    assert issubclass(StateError, RuntimeError)
    assert issubclass(ParseWarning, UserWarning)
    for error_type in (ValidationError, RangeError, StateError, ParseWarning):
        assert issubclass(error_type, RebindError)


def test_check_player_bounds() -> None:
    assert check_player(0, 4) == 0
    assert check_player(3, 4) == 3
    with pytest.raises(RangeError) as info:
        check_player(4, 4)
    assert info.value.player == 4
    assert info.value.max_players == 4
    with pytest.raises(RangeError):
        check_player(-1, 4)
