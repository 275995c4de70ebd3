from __future__ import annotations

import hashlib
import json
import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CACHE_VERSION = 1
CACHE_DIR_NAME = ".stencil-cache"
_DISABLED_VALUES = {"0", "false", "no", "off", ""}


def _sha1_text(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class CacheSnapshot:
    enabled: bool
    path: Path
    exists: bool
    size_bytes: int
    entries: int


class FileCache:
    """
    Файловый кэш скомпилированных шаблонов.

    Каждая запись - JSON-файл с кодом модуля; файлы раскладываются
    по подкаталогам по префиксу sha1 от ключа. Любые ошибки
    ввода-вывода - best-effort (запись просто не попадает в кэш).
    Переменная окружения STENCIL_CACHE (0/false/no/off) отключает кэш.
    """

    def __init__(
        self,
        root: Path,
        *,
        enabled: Optional[bool] = None,
        directory: str = CACHE_DIR_NAME,
        tool_version: str = "0.0.0",
    ):
        env = os.environ.get("STENCIL_CACHE", None)
        if env is not None:
            self.enabled = env.strip().lower() not in _DISABLED_VALUES
        elif enabled is not None:
            self.enabled = bool(enabled)
        else:
            self.enabled = True
        self.tool_version = tool_version
        self.dir = Path(root) / directory
        if self.enabled:
            try:
                _ensure_dir(self.dir)
            except OSError as e:
                logger.warning(f"Cache directory {self.dir} is not writable, caching disabled: {e}")
                self.enabled = False

    # --------------------------- TemplateCache --------------------------- #

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[str]:
        data = self._load_json(self._entry_path(key))
        if not data or data.get("v") != CACHE_VERSION or data.get("key") != key:
            return None
        code = data.get("code")
        return code if isinstance(code, str) else None

    def set(self, key: str, payload: str) -> None:
        self._atom_write(self._entry_path(key), {
            "v": CACHE_VERSION,
            "key": key,
            "code": payload,
            "tool": self.tool_version,
            "created_at": _now(),
        })

    def flush(self, key: Optional[str] = None) -> None:
        if key is None:
            self.purge_all()
            return
        try:
            self._entry_path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.debug(f"Failed to remove cache entry {key}: {e}")

    # --------------------------- IO helpers --------------------------- #

    def _entry_path(self, key: str) -> Path:
        return self._bucket_path("compiled", _sha1_text(key))

    def _bucket_path(self, bucket: str, key: str) -> Path:
        d = self.dir / bucket / key[:2] / key[2:4]
        return d / f"{key}.json"

    def _load_json(self, path: Path) -> Optional[dict]:
        if not self.enabled:
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.debug(f"Unreadable cache entry {path}: {e}")
            return None

    def _atom_write(self, path: Path, data: dict) -> None:
        if not self.enabled:
            return
        try:
            _ensure_dir(path.parent)
            tmp = path.with_suffix(".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp.replace(path)
        except OSError as e:
            logger.debug(f"Failed to write cache entry {path}: {e}")

    # --------------------------- MAINTENANCE --------------------------- #

    def purge_all(self) -> bool:
        """Полная очистка содержимого кэша."""
        try:
            if self.dir.exists():
                shutil.rmtree(self.dir, ignore_errors=True)
            self.dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError:
            return False

    def snapshot(self) -> CacheSnapshot:
        """Собрать best-effort снимок состояния кэша."""
        size = 0
        entries = 0
        if self.dir.exists():
            for p in self.dir.rglob("*.json"):
                try:
                    if p.is_file():
                        entries += 1
                        size += p.stat().st_size
                except OSError:
                    # best-effort - пропускаем проблемные файлы
                    continue
        return CacheSnapshot(
            enabled=bool(self.enabled),
            path=self.dir,
            exists=self.dir.exists(),
            size_bytes=size,
            entries=entries,
        )

    def rebuild(self) -> CacheSnapshot:
        """Очистить и вернуть новый снимок."""
        self.purge_all()
        return self.snapshot()


__all__ = ["FileCache", "CacheSnapshot", "CACHE_VERSION", "CACHE_DIR_NAME"]
