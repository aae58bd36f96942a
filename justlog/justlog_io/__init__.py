# justlog/justlog_io/__init__.py
# Package initialization & exports for Justlog I/O operations

from .generics import (
    write_json_safe,
    write_json_atomic,
    read_json_safe,
    ensure_parent,
)
from .kv_store import KeyValueStore, JsonFileStore, MemoryStore

__all__ = [
    # Generics
    "write_json_safe",
    "write_json_atomic",
    "read_json_safe",
    "ensure_parent",
    # Key-value stores
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
]
