# justlog/justlog_io/kv_store.py
# Local key-value stores backing session persistence (JSON file on disk & in-memory)
#
# * Whole-record writes: write_all() replaces every key in one atomic step
# * Read failures surface as StoreReadError, write failures as StoreWriteError

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable

from ..core.exceptions import JSONParsingError, StoreReadError, StoreWriteError
from .generics import read_json_safe, write_json_atomic


# * Synchronous local key-value storage
@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def keys(self) -> list[str]: ...

    def read_all(self) -> dict[str, Any]: ...

    def write_all(self, values: Mapping[str, Any]) -> None: ...

    def clear(self) -> None: ...

    def describe(self) -> str: ...


# * Key-value store kept as one JSON document; replaced atomically on every write
class JsonFileStore:

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def describe(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.exists()

    def read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = read_json_safe(self._path)
        except JSONParsingError as e:
            raise StoreReadError(str(e)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise StoreReadError(f"Could not read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreReadError(
                f"Expected a JSON object in {self._path}, got {type(data).__name__}"
            )
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.read_all().get(key, default)

    def keys(self) -> list[str]:
        return list(self.read_all().keys())

    def write_all(self, values: Mapping[str, Any]) -> None:
        # None values are dropped so optional keys are absent rather than null
        record = {k: v for k, v in values.items() if v is not None}
        try:
            write_json_atomic(record, self._path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreWriteError(
                f"Could not write {self._path}: {e}", keys=sorted(record)
            ) from e

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreWriteError(f"Could not remove {self._path}: {e}") from e


# * In-process store w/ the same encode semantics as JsonFileStore (values must be JSON-serializable)
class MemoryStore:

    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def describe(self) -> str:
        return "memory"

    def read_all(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def write_all(self, values: Mapping[str, Any]) -> None:
        record = {k: v for k, v in values.items() if v is not None}
        try:
            # round-trip through JSON so unserializable values fail here too
            self._data = json.loads(json.dumps(record))
        except (TypeError, ValueError) as e:
            raise StoreWriteError(f"Could not encode record: {e}", keys=sorted(record)) from e

    def clear(self) -> None:
        self._data = {}
