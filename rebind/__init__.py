"""Keybind binding resolution and conflict detection."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rebind.api.host import InputHostPort
    from rebind.runtime.session import InputSession


def create_session(host: "InputHostPort") -> "InputSession":
    """Create an input session from the environment configuration."""
    from rebind.runtime.session import create_input_session

    return create_input_session(host)


__all__ = ["create_session"]
