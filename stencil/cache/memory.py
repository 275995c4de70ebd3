from __future__ import annotations

from typing import Dict, Optional


class MemoryCache:
    """Кэш скомпилированного кода в памяти процесса."""

    def __init__(self):
        self._entries: Dict[str, str] = {}

    def has(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, payload: str) -> None:
        self._entries[key] = payload

    def flush(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def keys(self):
        return list(self._entries.keys())


__all__ = ["MemoryCache"]
