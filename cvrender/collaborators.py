"""
External collaborators of the editor.

The editor talks to storage, the clipboard, dictation and printing only
through these small protocols. ``JsonFileStore`` and ``MemoryStore`` are
the bundled store implementations.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .logging_utils import LOG
from .shared import StorageQuotaError

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
QUOTA_WARNING_RATIO = 0.8


class Store(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class Clipboard(Protocol):
    def copy_text(self, text: str) -> None: ...


class DictationSource(Protocol):
    def listen(self) -> str: ...


class PrintSink(Protocol):
    def submit(self, html: str) -> None: ...


def _encoded_size(data: Dict[str, Any]) -> int:
    return len(json.dumps(data, ensure_ascii=False).encode("utf-8"))


def check_quota(data: Dict[str, Any], quota_bytes: Optional[int]) -> int:
    """
    Return the serialized size of data.

    Logs a warning past 80% of the quota.

    Raises:
        StorageQuotaError: If the size exceeds the quota
    """
    size = _encoded_size(data)
    if quota_bytes is None:
        return size
    if size > quota_bytes:
        raise StorageQuotaError(f"storage quota exceeded ({size} of {quota_bytes} bytes)")
    if size > quota_bytes * QUOTA_WARNING_RATIO:
        LOG.warning("Storage is nearing capacity (%d of %d bytes).", size, quota_bytes)
    return size


class MemoryStore:
    """In-memory key/value store with an optional quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._data: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> None:
        candidate = dict(self._data)
        candidate[key] = copy.deepcopy(value)
        check_quota(candidate, self.quota_bytes)
        self._data = candidate

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class JsonFileStore:
    """
    Key/value store persisted as one UTF-8 JSON file.

    Writes go through a temporary file and an atomic replace, so a failed
    write leaves the previous contents intact.
    """

    def __init__(self, path: Path, quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES):
        self.path = Path(path)
        self.quota_bytes = quota_bytes
        self._data = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            LOG.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            LOG.warning("Ignoring store %s: top level is not an object", self.path)
            return {}
        return data

    def _flush(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._data.get(key, default))

    def set(self, key: str, value: Any) -> None:
        candidate = dict(self._data)
        candidate[key] = copy.deepcopy(value)
        check_quota(candidate, self.quota_bytes)
        self._flush(candidate)
        self._data = candidate

    def delete(self, key: str) -> None:
        if key not in self._data:
            return
        candidate = dict(self._data)
        del candidate[key]
        self._flush(candidate)
        self._data = candidate

    def keys(self):
        return list(self._data)
