# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation.

Constructing a store bootstraps its schema, so this is called once at
process start (see filevault.api.rpc.init_module), never per request.
"""

from __future__ import annotations

from filevault.cache.base_cache_store import BaseCacheStore
from filevault.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to Settings().

    Returns:
        Configured BaseCacheStore implementation.
    """
    settings = settings or Settings()
    backend = settings.cache_backend

    if backend == "sqlite":
        from filevault.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=settings.sqlite_path)

    if backend == "json":
        from filevault.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=settings.cache_root)

    if backend == "redis":
        from filevault.cache.redis_store import RedisCacheStore
        if not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    if backend == "postgres":
        from filevault.cache.postgres_store import PostgresCacheStore
        if not settings.cache_postgres_dsn:
            raise ValueError(
                "CACHE_POSTGRES_DSN must be set when CACHE_BACKEND=postgres"
            )
        return PostgresCacheStore(
            dsn=settings.cache_postgres_dsn,
            pool_size=settings.cache_postgres_pool_size,
        )

    raise ValueError(f"Unsupported cache backend: {backend!r}")
