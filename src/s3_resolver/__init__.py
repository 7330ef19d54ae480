"""
S3 Resolver.

Resolves opaque identifiers to objects in S3-compatible storage, classifies
storage failures, and infers source formats for an image-serving pipeline.
"""
from .content_source import ContentSource
from .errors import (
    AccessDenied,
    ErrorKind,
    ExternalSubsystemError,
    InvalidConfiguration,
    InvalidDelegateResult,
    ObjectNotFound,
    ResolverError,
    StorageIOError,
)
from .formats import Format, MediaType, infer_format
from .resolver import ObjectResolver
from .resolver_types import Identifier, ResolvedLocation
from .settings import Settings, create_settings_from_env
from .storage.shared import SharedStorageClient
from .strategies import DirectLookupStrategy, DynamicLookupStrategy, strategy_for

__all__ = [
    "ObjectResolver",
    "ContentSource",
    "Identifier",
    "ResolvedLocation",
    "Format",
    "MediaType",
    "infer_format",
    "Settings",
    "create_settings_from_env",
    "SharedStorageClient",
    "DirectLookupStrategy",
    "DynamicLookupStrategy",
    "strategy_for",
    "ErrorKind",
    "ResolverError",
    "ObjectNotFound",
    "AccessDenied",
    "StorageIOError",
    "InvalidDelegateResult",
    "ExternalSubsystemError",
    "InvalidConfiguration",
]
