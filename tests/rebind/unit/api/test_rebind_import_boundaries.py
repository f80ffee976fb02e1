from __future__ import annotations

import ast
from pathlib import Path

from rebind.api.devices import create_device_resolver
from rebind.api.frames import create_history_buffer
from rebind.api.keybinds import create_keybind_registry
from rebind.devices.resolver import RuntimeDeviceResolver
from rebind.frames.history import RuntimeHistoryBuffer
from rebind.keybinds.registry import RuntimeKeybindRegistry

REPO_ROOT = Path(__file__).resolve().parents[4]


def _top_level_imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    targets: list[str] = []
    for node in tree.body:
        if isinstance(node, ast.Import):
            targets.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module is not None:
            targets.append(node.module)
    return targets


def test_api_modules_only_import_api_at_top_level() -> None:
    violations: list[str] = []
    for path in sorted((REPO_ROOT / "rebind" / "api").rglob("*.py")):
        for target in _top_level_imports(path):
            if target.startswith("rebind.") and not target.startswith("rebind.api"):
                violations.append(f"{path.relative_to(REPO_ROOT)} -> {target}")
    assert not violations, "API contracts must import implementations lazily:\n" + "\n".join(
        violations
    )


def test_api_factories_return_runtime_implementations() -> None:
    assert isinstance(create_device_resolver(), RuntimeDeviceResolver)
    assert isinstance(create_keybind_registry(), RuntimeKeybindRegistry)
    assert isinstance(create_history_buffer(4, 3), RuntimeHistoryBuffer)


def test_registry_factory_can_skip_builtins() -> None:
    assert len(create_keybind_registry(include_builtins=False)) == 0
