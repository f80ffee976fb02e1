"""Binding persistence: text codec and file store."""

from rebind.persistence.codec import decode, encode, encode_record, splice
from rebind.persistence.store import BindingStore

__all__ = ["BindingStore", "decode", "encode", "encode_record", "splice"]
