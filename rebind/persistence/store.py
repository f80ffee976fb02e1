"""File-backed load/save of binding records inside a host save blob."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from rebind.api.bindings import BindingTable, SideColumns
from rebind.api.keybinds import KeybindRegistry
from rebind.api.persistence import DecodeResult
from rebind.persistence.codec import decode, encode, splice

logger = logging.getLogger(__name__)


class BindingStore:
    """Reads and rewrites one save file, preserving records it does not own."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_blob(self) -> str:
        if not self._path.exists():
            return ""
        return self._path.read_text(encoding="utf-8")

    def load(self, registry: KeybindRegistry, base: BindingTable) -> DecodeResult:
        """Decode the file; a missing file yields defaults."""
        blob = self.read_blob()
        if not blob:
            logger.info("bindings_load_empty path=%s", self._path)
            return DecodeResult(table=base.blank())
        return decode(blob, registry, base)

    def save(
        self,
        table: BindingTable,
        registry: KeybindRegistry,
        unknown_records: Iterable[str] = (),
        overflow: Mapping[str, SideColumns] | None = None,
    ) -> Path:
        encoded = encode(table, registry, unknown_records, overflow)
        blob = splice(self.read_blob(), encoded)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_name(self._path.name + ".tmp")
        staging.write_text(blob, encoding="utf-8")
        os.replace(staging, self._path)
        logger.info("bindings_saved path=%s keybinds=%s", self._path, len(registry))
        return self._path


__all__ = ["BindingStore"]
