"""Binding capture (listening mode)."""

from rebind.capture.listener import BindingCapture

__all__ = ["BindingCapture"]
