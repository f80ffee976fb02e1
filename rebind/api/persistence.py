"""Persisted record format and decode result contracts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rebind.api.bindings import BindingTable, SideColumns
from rebind.api.errors import ParseWarning

RECORD_TAG = "rebind:keybind"
RECORD_VERSION = "1"
RECORD_SEPARATOR = "<optA>"
FIELD_SEPARATOR = "<optB>"
LIST_SEPARATOR = ","
RECORD_FIELD_COUNT = 5


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Decoded table plus what decoding could not apply."""

    table: BindingTable
    unknown_records: tuple[str, ...] = ()
    warnings: tuple[ParseWarning, ...] = ()
    # Full columns for records that held more players than the table.
    overflow: Mapping[str, SideColumns] = field(default_factory=lambda: MappingProxyType({}))


__all__ = [
    "FIELD_SEPARATOR",
    "LIST_SEPARATOR",
    "RECORD_FIELD_COUNT",
    "RECORD_SEPARATOR",
    "RECORD_TAG",
    "RECORD_VERSION",
    "DecodeResult",
]
