"""
Тесты файлового и in-memory кэша скомпилированного кода.
"""

import json

from stencil.cache.fs_cache import CACHE_DIR_NAME, FileCache
from stencil.cache.memory import MemoryCache
from stencil.protocols import TemplateCache


class TestMemoryCache:

    def test_set_get_flush(self):
        cache = MemoryCache()
        assert not cache.has("a")
        cache.set("a", "code a")
        cache.set("b", "code b")
        assert cache.has("a")
        assert cache.get("a") == "code a"
        cache.flush("a")
        assert cache.get("a") is None
        assert cache.keys() == ["b"]
        cache.flush()
        assert cache.keys() == []

    def test_satisfies_protocol(self):
        assert isinstance(MemoryCache(), TemplateCache)
        assert isinstance(FileCache.__new__(FileCache), TemplateCache)


class TestFileCache:

    def test_roundtrip(self, tmpproj):
        cache = FileCache(tmpproj, tool_version="1.2.3")
        cache.set("tpl_key", "# code\n")
        assert cache.has("tpl_key")
        assert cache.get("tpl_key") == "# code\n"
        # новый экземпляр читает то же с диска
        assert FileCache(tmpproj).get("tpl_key") == "# code\n"

    def test_entry_layout(self, tmpproj):
        cache = FileCache(tmpproj, tool_version="1.2.3")
        cache.set("tpl_key", "code")
        files = list((tmpproj / CACHE_DIR_NAME / "compiled").rglob("*.json"))
        assert len(files) == 1
        data = json.loads(files[0].read_text(encoding="utf-8"))
        assert data["key"] == "tpl_key"
        assert data["code"] == "code"
        assert data["tool"] == "1.2.3"
        assert data["v"] == 1
        assert files[0].parent.parent.name == files[0].stem[:2]

    def test_missing_and_corrupt_entries(self, tmpproj):
        cache = FileCache(tmpproj)
        assert cache.get("absent") is None
        cache.set("broken", "code")
        path = next((tmpproj / CACHE_DIR_NAME).rglob("*.json"))
        path.write_text("{not json", encoding="utf-8")
        assert cache.get("broken") is None
        assert not cache.has("broken")

    def test_flush_single_and_all(self, tmpproj):
        cache = FileCache(tmpproj)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.flush("a")
        cache.flush("a")
        assert cache.get("a") is None
        assert cache.get("b") == "2"
        cache.flush()
        assert cache.get("b") is None
        assert (tmpproj / CACHE_DIR_NAME).is_dir()

    def test_disabled_by_argument(self, tmpproj):
        cache = FileCache(tmpproj, enabled=False)
        cache.set("a", "1")
        assert cache.get("a") is None
        assert not (tmpproj / CACHE_DIR_NAME).exists()

    def test_env_overrides_config(self, tmpproj, monkeypatch):
        monkeypatch.setenv("STENCIL_CACHE", "off")
        assert not FileCache(tmpproj, enabled=True).enabled
        monkeypatch.setenv("STENCIL_CACHE", "1")
        assert FileCache(tmpproj, enabled=False).enabled

    def test_custom_directory(self, tmpproj):
        cache = FileCache(tmpproj, directory="build/cache")
        cache.set("a", "1")
        assert (tmpproj / "build" / "cache" / "compiled").is_dir()

    def test_snapshot_and_rebuild(self, tmpproj):
        cache = FileCache(tmpproj)
        cache.set("a", "1")
        cache.set("b", "2")
        snap = cache.snapshot()
        assert snap.enabled
        assert snap.exists
        assert snap.entries == 2
        assert snap.size_bytes > 0
        assert snap.path == tmpproj / CACHE_DIR_NAME

        rebuilt = cache.rebuild()
        assert rebuilt.entries == 0
        assert rebuilt.exists
