"""Storage backends for persisted form documents"""

import logging

from form_designer.backends.key_value_store import InMemoryStore, KeyValueStore

logger = logging.getLogger(__name__)


def create_store(settings: dict) -> KeyValueStore:
    """
    Build the store named by the storage_backend setting.

    Backend modules are imported lazily so that the in-memory default does
    not open network or database connections.
    """
    backend = settings.get("storage_backend", "memory")

    if backend == "redis":
        from form_designer.backends.redis_store import RedisStore, create_redis_client

        logger.info("Using Redis document store")
        return RedisStore(create_redis_client(settings["redis_url"]))

    if backend == "database":
        from form_designer.backends.database_store import (
            DatabaseStore,
            create_database_engine,
        )

        logger.info("Using database document store")
        return DatabaseStore(create_database_engine(settings["database_url"]))

    if backend != "memory":
        logger.warning(f"Unknown storage backend '{backend}', using in-memory store")
    return InMemoryStore()


__all__ = ["InMemoryStore", "KeyValueStore", "create_store"]
