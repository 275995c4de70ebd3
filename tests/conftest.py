from pathlib import Path

import pytest

from stencil.cache.memory import MemoryCache
from stencil.helpers.resolver import HelperResolver
from stencil.rendering.context import RenderingContext

from tests.infrastructure.helper_stubs import TEST_ROOT, make_registry


@pytest.fixture(autouse=True)
def _no_cache_env(monkeypatch):
    # переменная окружения пользователя не должна влиять на тесты файлового кэша
    monkeypatch.delenv("STENCIL_CACHE", raising=False)


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def resolver() -> HelperResolver:
    """Резолвер с общим реестром (встроенные хелперы)."""
    return HelperResolver()


@pytest.fixture
def isolated_resolver() -> HelperResolver:
    """Резолвер с изолированным реестром тестовых хелперов под алиасом t."""
    r = HelperResolver(registry=make_registry())
    r.add_namespace("t", [TEST_ROOT])
    return r


@pytest.fixture
def ctx(cache: MemoryCache) -> RenderingContext:
    """Контекст рендеринга с кэшем в памяти."""
    return RenderingContext(cache=cache)


@pytest.fixture
def uncached_ctx() -> RenderingContext:
    """Контекст рендеринга без кэша: шаблоны только интерпретируются."""
    return RenderingContext()


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Пустой проект во временном каталоге."""
    return tmp_path


@pytest.fixture
def isolated_ctx(cache: MemoryCache, isolated_resolver: HelperResolver) -> RenderingContext:
    """Контекст рендеринга с кэшем в памяти и тестовыми хелперами под алиасом t."""
    return RenderingContext(cache=cache, helper_resolver=isolated_resolver)
