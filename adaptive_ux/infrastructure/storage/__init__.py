"""Storage backends."""

from adaptive_ux.infrastructure.storage.base import StorageBackend
from adaptive_ux.infrastructure.storage.factory import create_storage_backend
from adaptive_ux.infrastructure.storage.key_value import KeyValueStorageBackend

__all__ = ["StorageBackend", "KeyValueStorageBackend", "create_storage_backend"]
