"""Storage backend factory."""

import logging

from adaptive_ux.infrastructure.kv_store import InMemoryKeyValueStore
from adaptive_ux.infrastructure.redis import RedisKeyValueStore
from adaptive_ux.infrastructure.storage.base import StorageBackend
from adaptive_ux.infrastructure.storage.key_value import KeyValueStorageBackend
from adaptive_ux.settings import AdaptiveSettings

logger = logging.getLogger(__name__)


def create_storage_backend(config: AdaptiveSettings) -> StorageBackend:
    """Build the storage backend selected by settings.

    Args:
        config: Settings carrying ``storage_backend``, ``redis_url`` and ``key_prefix``

    Returns:
        A key/value storage backend over Redis or an in-memory dict
    """
    if config.storage_backend == "redis":
        logger.info("Using Redis storage backend", extra={"key_prefix": config.key_prefix})
        store = RedisKeyValueStore(config.redis_url)
    else:
        store = InMemoryKeyValueStore()
    return KeyValueStorageBackend(store, key_prefix=config.key_prefix)
