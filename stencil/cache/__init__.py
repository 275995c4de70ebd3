from .fs_cache import CacheSnapshot, FileCache
from .memory import MemoryCache
from .warmup import CacheWarmer, CacheWarmupResult, FailedCompilingState

__all__ = [
    "MemoryCache",
    "FileCache",
    "CacheSnapshot",
    "CacheWarmer",
    "CacheWarmupResult",
    "FailedCompilingState",
]
