"""Tolerant text codec for binding tables.

One record per keybind::

    rebind:keybind<optB>1<optB>{id}<optB>{kb0,kb1,...}<optB>{gp0,gp1,...}<optA>

Records are appended to a larger host save blob. Records carrying another tag
belong to the host and are left alone; records for ids this session does not
know are handed back verbatim so the next save reproduces them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rebind.api.bindings import BindingTable, SideColumns
from rebind.api.controls import BindingSide, ControlRef, parse_control
from rebind.api.errors import ParseWarning
from rebind.api.keybinds import Keybind, KeybindRegistry
from rebind.api.persistence import (
    FIELD_SEPARATOR,
    LIST_SEPARATOR,
    RECORD_FIELD_COUNT,
    RECORD_SEPARATOR,
    RECORD_TAG,
    RECORD_VERSION,
    DecodeResult,
)

logger = logging.getLogger(__name__)


def encode_record(
    keybind_id: str, keyboard: Iterable[ControlRef], gamepad: Iterable[ControlRef]
) -> str:
    return FIELD_SEPARATOR.join(
        (
            RECORD_TAG,
            RECORD_VERSION,
            keybind_id,
            LIST_SEPARATOR.join(control.to_text() for control in keyboard),
            LIST_SEPARATOR.join(control.to_text() for control in gamepad),
        )
    )


def encode(
    table: BindingTable,
    registry: KeybindRegistry,
    unknown_records: Iterable[str] = (),
    overflow: Mapping[str, SideColumns] | None = None,
) -> str:
    """Known keybinds in registry order, then preserved unknown records.

    ``overflow`` holds decoded entries for players past ``table.player_count``;
    they are written back after the table's own columns.
    """
    overflow = overflow or {}
    records: list[str] = []
    for keybind in registry.keybinds():
        keyboard, gamepad = table.columns(keybind)
        if keybind.id in overflow:
            extra_keyboard, extra_gamepad = overflow[keybind.id]
            keyboard += extra_keyboard[len(keyboard) :]
            gamepad += extra_gamepad[len(gamepad) :]
        records.append(encode_record(keybind.id, keyboard, gamepad))
    for record in unknown_records:
        keybind_id = record_id(record)
        if keybind_id is None or registry.get(keybind_id) is None:
            records.append(record)
    return "".join(record + RECORD_SEPARATOR for record in records)


def record_id(record: str) -> str | None:
    """Keybind id of a well-formed record, ``None`` for anything else."""
    fields = record.split(FIELD_SEPARATOR)
    if len(fields) != RECORD_FIELD_COUNT or fields[0].strip() != RECORD_TAG:
        return None
    return fields[2]


def apply_record(table: BindingTable, keybind: Keybind, record: str) -> SideColumns | None:
    """Assign one record's entries to ``table``.

    Both lists are parsed before anything is assigned. Returns the full
    columns when the record carries more players than the table holds.
    """
    _, version, _, keyboard_field, gamepad_field = record.split(FIELD_SEPARATOR)
    if version != RECORD_VERSION:
        raise ValueError(f"unsupported version {version!r}")
    keyboard = _parse_list(keyboard_field, BindingSide.KEYBOARD)
    gamepad = _parse_list(gamepad_field, BindingSide.GAMEPAD)
    for side, controls in ((BindingSide.KEYBOARD, keyboard), (BindingSide.GAMEPAD, gamepad)):
        for player, control in enumerate(controls[: table.player_count]):
            table.assign(keybind, player, side, control)
    if max(len(keyboard), len(gamepad)) <= table.player_count:
        return None
    logger.debug(
        "binding_record_overflow id=%s players=%s kept=%s",
        keybind.id,
        max(len(keyboard), len(gamepad)),
        table.player_count,
    )
    return tuple(keyboard), tuple(gamepad)


def decode(text: str, registry: KeybindRegistry, base: BindingTable) -> DecodeResult:
    """Apply every well-formed record to a fresh ``base.blank()`` table.

    Records for unregistered ids are kept verbatim whatever their version.
    """
    table = base.blank()
    unknown: list[str] = []
    warnings: list[ParseWarning] = []
    overflow: dict[str, SideColumns] = {}
    applied = 0
    for index, record in enumerate(text.split(RECORD_SEPARATOR)):
        fields = record.split(FIELD_SEPARATOR)
        if fields[0].strip() != RECORD_TAG:
            continue
        if len(fields) != RECORD_FIELD_COUNT:
            warnings.append(
                _skip(index, record, f"expected {RECORD_FIELD_COUNT} fields, got {len(fields)}")
            )
            continue
        keybind = registry.get(fields[2])
        if keybind is None:
            unknown.append(record)
            continue
        try:
            extra = apply_record(table, keybind, record)
        except ValueError as exc:
            warnings.append(_skip(index, record, str(exc)))
            continue
        if extra is None:
            overflow.pop(keybind.id, None)
        else:
            overflow[keybind.id] = extra
        applied += 1
    logger.info(
        "bindings_decoded applied=%s unknown=%s skipped=%s",
        applied,
        len(unknown),
        len(warnings),
    )
    return DecodeResult(
        table=table,
        unknown_records=tuple(unknown),
        warnings=tuple(warnings),
        overflow=MappingProxyType(overflow),
    )


def splice(blob: str, encoded: str) -> str:
    """Replace this codec's records in a host save blob, keeping foreign ones."""
    kept = [
        record
        for record in blob.split(RECORD_SEPARATOR)
        if record.strip() and record.split(FIELD_SEPARATOR)[0].strip() != RECORD_TAG
    ]
    return "".join(record + RECORD_SEPARATOR for record in kept) + encoded


def _parse_list(field: str, side: BindingSide) -> list[ControlRef]:
    if not field.strip():
        return []
    controls = [parse_control(item) for item in field.split(LIST_SEPARATOR)]
    for control in controls:
        if control.side not in {None, side}:
            raise ValueError(f"{control} is not a {side.value.lower()} control")
    return controls


def _skip(index: int, record: str, reason: str) -> ParseWarning:
    warning = ParseWarning(index, record, reason)
    logger.warning("binding_record_skipped index=%s reason=%s", index, reason)
    return warning


__all__ = ["apply_record", "decode", "encode", "encode_record", "record_id", "splice"]
