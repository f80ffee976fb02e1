from __future__ import annotations

from pathlib import Path

import pytest

from rebind import create_session
from rebind.api.controls import BindingSide, button, key
from rebind.api.devices import ButtonSlot, ControllerFamily
from rebind.api.errors import RangeError, StateError, ValidationError
from rebind.api.host import PlayerConditions
from rebind.persistence.store import BindingStore
from rebind.runtime.config import load_rebind_config, set_rebind_config
from rebind.runtime.session import InputSession, create_input_session
from tests.rebind.conftest import DUALSENSE_PAD, XBOX_PAD, FakeHost


def test_jump_edge_detection_over_two_ticks(host: FakeHost, session: InputSession) -> None:
    jump = session.register("mod:jump", "Mod", "Jump", "Z", None)
    session.assign("builtin:jump", 0, BindingSide.KEYBOARD, None)
    host.keys = {"Z"}

    session.tick()
    assert session.just_activated(0, jump)
    assert session.any_active(0)

    session.tick()
    assert not session.just_activated(0, "mod:jump")
    assert session.any_active(0)
    assert session.held_ticks(0, jump) == 2

    host.keys = set()
    session.tick()
    assert session.just_released(0, jump)
    assert not session.is_active(0, jump)


def test_map_suppression_keeps_raw_history(host: FakeHost, session: InputSession) -> None:
    grab = session.keybind("builtin:grab")
    host.keys = {"LeftShift"}
    host.conditions[0] = PlayerConditions(viewing_map=True)

    session.tick()

    assert not session.is_active(0, grab)
    assert session.raw_input(0)[grab]
    assert not session.input(0)[grab]
    assert session.raw_input_history(0)[0][grab]
    assert len(session.input_history(0)) == 10


def test_first_tick_locks_configuration(session: InputSession) -> None:
    assert not session.locked
    session.tick()
    assert session.locked

    with pytest.raises(StateError):
        session.register("mod:late", "Mod", "Late", "C", None)
    with pytest.raises(StateError):
        session.max_players = 8
    with pytest.raises(StateError):
        session.history_length = 20
    assert session.max_players == 4
    assert session.history.depth == 10


def test_max_players_is_validated_and_grows_storage(session: InputSession) -> None:
    with pytest.raises(StateError):
        session.max_players = 3
    with pytest.raises(StateError):
        session.max_players = 17

    session.max_players = 6
    assert session.table.player_count == 6
    session.assign("builtin:jump", 5, BindingSide.KEYBOARD, "C")

    frames = session.tick()
    assert [frame.player for frame in frames] == list(range(6))
    assert session.current_binding("builtin:jump", 5) == key("C")


def test_history_length_can_only_grow(session: InputSession) -> None:
    session.history_length = 12
    assert session.history.depth == 12
    with pytest.raises(StateError):
        session.history_length = 11


def test_queries_validate_player_and_keybind(session: InputSession) -> None:
    session.tick()
    with pytest.raises(RangeError):
        session.is_active(4, "builtin:jump")
    with pytest.raises(ValidationError):
        session.is_active(0, "mod:missing")


def test_bound_queries_follow_device_preference(host: FakeHost, session: InputSession) -> None:
    host.attach(1, XBOX_PAD)

    assert session.is_bound(0, "builtin:up")
    assert session.is_unbound(1, "builtin:up")
    assert session.current_binding("builtin:pause", 1) == button(8)
    assert session.binding_label("builtin:jump", 1) == "A"
    assert session.binding_label("builtin:grab", 0) == "LShift"


def test_display_passthrough(session: InputSession) -> None:
    info = session.display_info(ControllerFamily.PLAYSTATION_STYLE, ButtonSlot.FACE_NORTH)
    assert info.label == "Triangle"
    assert session.control_label(ControllerFamily.XBOX_STYLE, button(5)) == "RB"


def test_capture_commits_from_gamepad_press(host: FakeHost, session: InputSession) -> None:
    pad = host.attach(0, DUALSENSE_PAD)
    jump = session.keybind("builtin:jump")
    session.start_capture(jump, 0, BindingSide.GAMEPAD)

    pad.buttons = {1}
    session.tick()
    assert not session.is_active(0, jump)
    assert session.raw_input(0)[jump]

    session.capture.observe_button(ControllerFamily.PLAYSTATION_STYLE, 3)
    assert session.current_binding(jump, 0) == button(3)

    pad.buttons = {3}
    session.tick()
    assert session.is_active(0, jump)


def test_reset_to_defaults(session: InputSession) -> None:
    session.assign("builtin:throw", 2, BindingSide.KEYBOARD, "Q")
    session.reset_to_defaults("builtin:throw", 2)
    assert session.current_binding("builtin:throw", 2) == key("X")


def test_save_and_load_restore_bindings(
    host: FakeHost, config, save_path: Path
) -> None:
    first = InputSession(host, config=config, store=BindingStore(save_path))
    first.register("mod:dash", "Mod", "Dash", "C", None)
    first.assign("mod:dash", 1, BindingSide.KEYBOARD, "V")
    first.assign("builtin:jump", 0, BindingSide.KEYBOARD, "J")
    first.save()

    second = InputSession(host, config=config, store=BindingStore(save_path))
    result = second.load()

    assert result.unknown_records and "mod:dash" in result.unknown_records[0]
    assert second.current_binding("builtin:jump", 0) == key("J")

    second.save()
    third = InputSession(host, config=config, store=BindingStore(save_path))
    third.register("mod:dash", "Mod", "Dash", "C", None)
    third.load()
    assert third.current_binding("mod:dash", 1) == key("V")
    assert third.unknown_records == ()


def test_loaded_table_drives_ticks_and_later_registrations(
    host: FakeHost, session: InputSession
) -> None:
    exported = session.export_text().replace("Z,Z,Z,Z", "J,Z,Z,Z")
    session.import_text(exported)
    dash = session.register("mod:dash", "Mod", "Dash", "D", None)
    host.keys = {"J", "D"}

    session.tick()

    assert session.is_active(0, "builtin:jump")
    assert session.is_active(0, dash)
    assert session.conflicts.table is session.table
    assert session.capture.table is session.table


def test_late_registration_claims_its_saved_record(session: InputSession) -> None:
    saved = "rebind:keybind<optB>1<optB>mod:dash<optB>F,F,F,F<optB>None,None,None,None"
    session.import_text(session.export_text() + saved + "<optA>")
    assert session.unknown_records == (saved,)

    session.register("mod:dash", "Mod", "Dash", "D", None)

    assert session.current_binding("mod:dash", 0) == key("F")
    assert session.unknown_records == ()

    session.assign("mod:dash", 0, BindingSide.KEYBOARD, "G")
    exported = session.export_text()
    assert exported.count("<optB>mod:dash<optB>") == 1

    session.import_text(exported)
    assert session.current_binding("mod:dash", 0) == key("G")


def test_growing_players_restores_saved_extra_players(session: InputSession) -> None:
    jump = session.keybind("builtin:jump")
    keyboard = ",".join(["Z"] * 6 + ["C", "Z"])
    gamepad = ",".join(["JoystickButton0"] * 8)
    saved = f"rebind:keybind<optB>1<optB>builtin:jump<optB>{keyboard}<optB>{gamepad}<optA>"
    session.import_text(saved)

    assert "builtin:jump<optB>Z,Z,Z,Z,Z,Z,C,Z<optB>" in session.export_text()

    session.max_players = 8

    assert session.table.binding(jump, 6, BindingSide.KEYBOARD) == key("C")
    assert session.table.binding(jump, 7, BindingSide.KEYBOARD) == key("Z")


def test_import_resets_listening_state(session: InputSession) -> None:
    session.start_capture("builtin:jump", 0, BindingSide.KEYBOARD)
    session.import_text(session.export_text())
    assert not session.capture.listening


def test_close_stops_ticks_and_listening(session: InputSession) -> None:
    session.start_capture("builtin:jump", 0, BindingSide.KEYBOARD)
    with session:
        pass

    assert session.closed
    assert not session.capture.listening
    with pytest.raises(StateError):
        session.tick()


def test_explicit_frame_index(session: InputSession) -> None:
    assert session.tick(41)[0].frame_index == 41
    assert session.tick()[0].frame_index == 42


def test_session_factories_use_context_config(host: FakeHost, tmp_path: Path) -> None:
    set_rebind_config(
        load_rebind_config(env={"REBIND_MAX_PLAYERS": "5", "REBIND_APP_DATA_DIR": str(tmp_path)})
    )
    try:
        session = create_session(host)
        assert session.max_players == 5
        assert create_input_session(host).max_players == 5
        assert session.save() == tmp_path / "saves" / "bindings.sav"
    finally:
        set_rebind_config(load_rebind_config(env={}))
