"""
Once-initialized shared storage client.

The storage client is expensive to build and safe for concurrent read-only
use, so one instance is shared by every resolver in the process. The handle
is passed explicitly to resolvers rather than kept in module state.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..settings import Settings
from .base import StorageClient

__all__ = ["SharedStorageClient"]

logger = logging.getLogger(__name__)


class SharedStorageClient:
    """
    Lazily constructs exactly one StorageClient.
    
    Concurrent first callers of get() converge on a single client: the
    factory runs under a lock and the client is published only after it is
    fully built. There is no teardown or refresh; configuration changes
    require a process restart.
    """
    
    def __init__(self, factory: Callable[[], StorageClient]) -> None:
        self._factory = factory
        self._client: Optional[StorageClient] = None
        self._lock = threading.Lock()
    
    @classmethod
    def from_settings(cls, settings: Settings) -> SharedStorageClient:
        """Shared handle whose client is the boto3 S3 client built from settings."""
        from .s3 import S3StorageClient
        
        return cls(lambda: S3StorageClient(settings=settings))
    
    @classmethod
    def of(cls, client: StorageClient) -> SharedStorageClient:
        """Wrap an already constructed client."""
        shared = cls(lambda: client)
        shared._client = client
        return shared
    
    @property
    def initialized(self) -> bool:
        return self._client is not None
    
    def get(self) -> StorageClient:
        """Return the shared client, building it on first use."""
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                logger.debug("Constructing shared storage client")
                self._client = self._factory()
            return self._client
