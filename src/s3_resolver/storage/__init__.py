# Storage adapters and the shared client handle

from .base import StorageClient, StorageClientError, StoredObject
from .shared import SharedStorageClient

__all__ = ["StorageClient", "StorageClientError", "StoredObject", "SharedStorageClient"]
