"""Public binding-engine API contracts."""

from rebind.api.bindings import BindingTable, create_binding_table
from rebind.api.capture import CancelPolicy, CaptureOutcome, CaptureResult, CaptureTarget
from rebind.api.conflicts import Conflict, ConflictDetector, create_conflict_detector
from rebind.api.controls import (
    UNBOUND,
    BindingSide,
    ControlKind,
    ControlRef,
    button,
    coerce_control,
    key,
    parse_control,
)
from rebind.api.devices import (
    AxisRule,
    ButtonSlot,
    ControllerFamily,
    DeviceResolver,
    DisplayInfo,
    HardwareDescriptor,
    RawButton,
    SemanticSlot,
    create_device_resolver,
)
from rebind.api.errors import (
    DuplicateIdError,
    ParseWarning,
    RangeError,
    RebindError,
    StateError,
    ValidationError,
)
from rebind.api.frames import HistoryBuffer, InputSnapshot, PlayerFrame, create_history_buffer
from rebind.api.host import (
    NEUTRAL_CONDITIONS,
    ControllerHandle,
    ControllerPort,
    DeviceContext,
    InputHostPort,
    PlayerConditions,
    create_device_context,
)
from rebind.api.keybinds import Direction, Keybind, KeybindRegistry, create_keybind_registry
from rebind.api.logging import LoggingConfig
from rebind.api.persistence import DecodeResult

__all__ = [
    "NEUTRAL_CONDITIONS",
    "UNBOUND",
    "AxisRule",
    "BindingSide",
    "BindingTable",
    "ButtonSlot",
    "CancelPolicy",
    "CaptureOutcome",
    "CaptureResult",
    "CaptureTarget",
    "Conflict",
    "ConflictDetector",
    "ControlKind",
    "ControlRef",
    "ControllerFamily",
    "ControllerHandle",
    "ControllerPort",
    "DecodeResult",
    "DeviceContext",
    "DeviceResolver",
    "Direction",
    "DisplayInfo",
    "DuplicateIdError",
    "HardwareDescriptor",
    "HistoryBuffer",
    "InputHostPort",
    "InputSnapshot",
    "Keybind",
    "KeybindRegistry",
    "LoggingConfig",
    "ParseWarning",
    "PlayerConditions",
    "PlayerFrame",
    "RangeError",
    "RawButton",
    "RebindError",
    "SemanticSlot",
    "StateError",
    "ValidationError",
    "button",
    "coerce_control",
    "create_binding_table",
    "create_conflict_detector",
    "create_device_context",
    "create_device_resolver",
    "create_history_buffer",
    "create_keybind_registry",
    "key",
    "parse_control",
]
