"""Binding table implementation."""

from rebind.bindings.table import RuntimeBindingTable

__all__ = ["RuntimeBindingTable"]
