"""
Storage interfaces for the S3 resolver.

These protocols define the boundary between the resolver and storage
implementations, enabling clean dependency injection and testing with fakes.
"""
from __future__ import annotations

from typing import IO, Optional, Protocol, runtime_checkable

__all__ = ["StorageClientError", "StoredObject", "StorageClient"]


class StorageClientError(Exception):
    """
    Neutral storage failure raised by StorageClient implementations.
    
    Adapters translate SDK-specific exceptions into this type, preserving the
    service error code and HTTP status so the resolver can classify them
    without importing the SDK. The SDK exception is chained as ``__cause__``.
    """
    
    def __init__(self, message: str, *, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.status = status


@runtime_checkable
class StoredObject(Protocol):
    """
    Handle to a fetched remote object.
    
    Invariants:
    - Metadata is available without reading the body
    - close() releases the underlying connection and is idempotent
    - Whoever holds the handle must close it, or close every stream opened from it
    """
    
    @property
    def content_type(self) -> Optional[str]:
        """Content-Type reported by storage, or None if absent."""
        ...
    
    @property
    def content_length(self) -> Optional[int]:
        """Size in bytes reported by storage, or None if absent."""
        ...
    
    def open(self) -> IO[bytes]:
        """
        Open the object's byte stream.
        
        Returns:
            Readable binary stream; closing it releases the connection
        """
        ...
    
    def close(self) -> None:
        """Release the handle and any open stream."""
        ...


@runtime_checkable
class StorageClient(Protocol):
    """Protocol for read access to an object store."""
    
    def get_object(self, bucket: str, key: str) -> StoredObject:
        """
        Fetch an object handle.
        
        Args:
            bucket: Bucket name
            key: Object key within the bucket
            
        Returns:
            Handle with metadata and a lazily opened body
            
        Raises:
            StorageClientError: For any service or transport failure
        """
        ...
