"""Controller family tables, resolver and per-player device context."""

from rebind.devices.context import PlayerDeviceContext
from rebind.devices.resolver import (
    RuntimeDeviceResolver,
    canonical_ordinal,
    classify_descriptor,
    short_key_name,
    slot_from_canonical,
)

__all__ = [
    "PlayerDeviceContext",
    "RuntimeDeviceResolver",
    "canonical_ordinal",
    "classify_descriptor",
    "short_key_name",
    "slot_from_canonical",
]
