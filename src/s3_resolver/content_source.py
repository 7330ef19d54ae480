"""
Content source handed to stream consumers.
"""
from __future__ import annotations

from typing import IO, Optional

from .errors import StorageIOError
from .storage.base import StoredObject

__all__ = ["ContentSource"]


class ContentSource:
    """
    Thin handle over a fetched object.
    
    Exposes the object's metadata and opens its byte stream on demand. One
    remote object backs one source; nothing is buffered or retried. The
    consumer owns cleanup: close the stream it opened and the source itself
    (using the source as a context manager does the latter).
    """
    
    def __init__(self, obj: StoredObject) -> None:
        self._object = obj
        self._stream: Optional[IO[bytes]] = None
        self._closed = False
    
    @property
    def content_type(self) -> Optional[str]:
        return self._object.content_type
    
    @property
    def content_length(self) -> Optional[int]:
        return self._object.content_length
    
    @property
    def closed(self) -> bool:
        return self._closed
    
    def new_stream(self) -> IO[bytes]:
        """
        Open the remote read channel and return it.
        
        Raises:
            StorageIOError: If the source is closed or the channel cannot be opened
        """
        if self._closed:
            raise StorageIOError("Content source is closed")
        if self._stream is None:
            try:
                self._stream = self._object.open()
            except Exception as e:
                raise StorageIOError(f"Cannot open content stream: {e}") from e
        return self._stream
    
    def read(self) -> bytes:
        """Read the whole object. Convenience for small objects."""
        return self.new_stream().read()
    
    def close(self) -> None:
        self._closed = True
        self._object.close()
    
    def __enter__(self) -> ContentSource:
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.close()
