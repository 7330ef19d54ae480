"""
Object resolver.

Resolves an identifier to an object in S3-compatible storage and answers the
questions an image pipeline asks about it: is it accessible, what format is
it, and give me its bytes.

A resolver instance serves one request. It memoizes the resolved location,
the inferred format and, deliberately, the first failure: once a fetch has
failed, every later call on the same instance raises that same error without
contacting storage again. Retrying means creating a new resolver.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .content_source import ContentSource
from .delegate import Delegate
from .errors import (
    ExternalSubsystemError,
    ResolverError,
    StorageIOError,
    classify_error_code,
    error_for_kind,
)
from .formats import Format, MediaType, infer_format
from .resolver_types import Identifier, RequestContext, ResolvedLocation
from .settings import Settings
from .storage.base import StorageClient, StorageClientError, StoredObject
from .storage.shared import SharedStorageClient
from .strategies import LookupStrategy, strategy_for

__all__ = ["ObjectResolver"]

logger = logging.getLogger(__name__)


class ObjectResolver:
    """
    Maps one identifier to a stored object.
    
    Not thread-safe: each request owns its own instance. Only the shared
    storage client is used across instances.
    """
    
    def __init__(
        self,
        identifier: Union[Identifier, str],
        *,
        settings: Settings,
        storage: Union[SharedStorageClient, StorageClient],
        strategy: Optional[LookupStrategy] = None,
        delegate: Optional[Delegate] = None,
        context: Optional[RequestContext] = None,
    ) -> None:
        """
        Initialize a resolver.
        
        Args:
            identifier: Identifier to resolve
            settings: Settings used to select the lookup strategy
            storage: Shared client handle (or a client, e.g. a fake in tests)
            strategy: Lookup strategy override; selected from settings on
                first use if omitted, so misconfiguration surfaces as
                InvalidConfiguration from the resolver operations
            delegate: Delegate for the dynamic strategy when it is selected
                from settings; loaded from settings if omitted
            context: Ambient request context passed to the delegate
        """
        self._identifier = Identifier.of(identifier)
        self._settings = settings
        self._storage = storage if isinstance(storage, SharedStorageClient) else SharedStorageClient.of(storage)
        self._strategy = strategy
        self._delegate = delegate
        self._context: Mapping[str, Any] = dict(context or {})
        self._location: Optional[ResolvedLocation] = None
        self._format: Optional[Format] = None
        self._cached_failure: Optional[ResolverError] = None
    
    @property
    def identifier(self) -> Identifier:
        return self._identifier
    
    @property
    def cached_failure(self) -> Optional[ResolverError]:
        """The memoized failure, if any operation on this instance has failed."""
        return self._cached_failure
    
    def location(self) -> ResolvedLocation:
        """
        Resolve (once) the bucket and key backing the identifier.
        
        Raises:
            ResolverError: The cached failure, or a new strategy failure
                (which is then cached). Unexpected exceptions from the
                strategy surface as ExternalSubsystemError.
        """
        if self._cached_failure is not None:
            raise self._cached_failure
        if self._location is None:
            try:
                if self._strategy is None:
                    self._strategy = strategy_for(self._settings, self._delegate)
                self._location = self._strategy.resolve(self._identifier, self._context)
            except ResolverError as e:
                self._cached_failure = e
                raise
            except Exception as e:
                error = ExternalSubsystemError(f"Lookup failed for {self._identifier}: {e}")
                self._cached_failure = error
                raise error from e
            logger.debug(f"Resolved {self._identifier} to s3://{self._location}")
        return self._location
    
    def _fetch_object(self) -> StoredObject:
        """
        Fetch the object handle.
        
        The caller must close the returned handle, or every stream opened
        from it.
        
        Raises:
            ObjectNotFound: If no object exists at the resolved location
            AccessDenied: If the object is not readable
            StorageIOError: For any other failure
            InvalidConfiguration: If the lookup strategy is misconfigured
        """
        if self._cached_failure is not None:
            raise self._cached_failure
        location = self.location()
        try:
            client = self._storage.get()
            logger.info(f"Requesting {location.key} from bucket {location.bucket}")
            return client.get_object(location.bucket, location.key)
        except StorageClientError as e:
            kind = classify_error_code(e.code, e.status)
            error = error_for_kind(kind, f"{location}: {e}")
            self._cached_failure = error
            raise error from e
        except Exception as e:
            error = StorageIOError(f"{location}: {e}")
            self._cached_failure = error
            raise error from e
    
    def check_access(self) -> None:
        """
        Verify the object exists and is readable.
        
        Raises:
            ResolverError: Same classified errors as any other operation
        """
        self._fetch_object().close()
    
    def resolve_format(self) -> Format:
        """
        Determine the object's format (computed once per instance).
        
        Order of precedence:
        1. Content-Type reported by storage
        2. Extension of the identifier
        3. Extension of the resolved key
        4. Format.UNKNOWN
        
        Raises:
            ResolverError: If the object cannot be fetched
        """
        if self._format is not None:
            return self._format
        
        obj = self._fetch_object()
        try:
            content_type = obj.content_type
        finally:
            obj.close()
        
        fmt = Format.UNKNOWN
        if content_type:
            try:
                fmt = MediaType.parse(content_type).to_format()
            except ValueError:
                logger.debug(f"Ignoring unparseable Content-Type {content_type!r} for {self._identifier}")
        if fmt is Format.UNKNOWN:
            fmt = infer_format(str(self._identifier))
        if fmt is Format.UNKNOWN:
            fmt = infer_format(self.location().key)
        
        self._format = fmt
        return fmt
    
    def open_stream(self) -> ContentSource:
        """
        Fetch the object and wrap it for streaming.
        
        Returns:
            ContentSource the caller must close
            
        Raises:
            ResolverError: If the object cannot be fetched
        """
        return ContentSource(self._fetch_object())
