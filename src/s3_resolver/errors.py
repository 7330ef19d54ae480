"""
Resolver error classes.

Provides a clear taxonomy of errors that can occur while resolving an
identifier to a stored object. Storage SDK failures are mapped onto these
kinds so callers see the same error interface regardless of the backend.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Enumerated failure kinds surfaced by a resolver."""
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    STORAGE_IO = "storage_io"
    INVALID_DELEGATE_RESULT = "invalid_delegate_result"
    INVALID_CONFIGURATION = "invalid_configuration"
    EXTERNAL_SUBSYSTEM = "external_subsystem"


class ResolverError(Exception):
    """
    Base class for all resolver errors.
    
    Every subclass carries a ``kind`` so callers can branch on the failure
    category without importing the concrete classes.
    """
    kind: ErrorKind = ErrorKind.STORAGE_IO


class ObjectNotFound(ResolverError):
    """
    No object exists at the resolved location.
    
    Raised when:
    - Storage reports NoSuchKey / HTTP 404
    - The delegate declined to produce a key (returned None)
    """
    kind = ErrorKind.NOT_FOUND


class AccessDenied(ResolverError):
    """
    Object exists but is not readable with the current credentials.
    
    Raised when:
    - Storage reports AccessDenied / HTTP 403
    - Credentials are rejected (invalid key id, bad signature)
    """
    kind = ErrorKind.ACCESS_DENIED


class StorageIOError(ResolverError):
    """
    Any other storage-layer failure (network, throttling, malformed response).
    """
    kind = ErrorKind.STORAGE_IO


class InvalidDelegateResult(StorageIOError):
    """
    Delegate returned a value that is neither a key nor a bucket+key mapping.
    """
    kind = ErrorKind.INVALID_DELEGATE_RESULT


class ExternalSubsystemError(StorageIOError):
    """
    Delegate raised an exception, could not be loaded, or is disabled.
    """
    kind = ErrorKind.EXTERNAL_SUBSYSTEM


class InvalidConfiguration(ResolverError):
    """
    Resolver configuration is unusable.
    
    Raised when:
    - The lookup strategy selector is unset or unrecognized
    - No bucket is configured and the strategy does not supply one
    """
    kind = ErrorKind.INVALID_CONFIGURATION


_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})
_ACCESS_DENIED_CODES = frozenset({
    "AccessDenied",
    "Forbidden",
    "403",
    "AllAccessDisabled",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
})

_ERROR_CLASSES = {
    ErrorKind.NOT_FOUND: ObjectNotFound,
    ErrorKind.ACCESS_DENIED: AccessDenied,
    ErrorKind.STORAGE_IO: StorageIOError,
    ErrorKind.INVALID_DELEGATE_RESULT: InvalidDelegateResult,
    ErrorKind.INVALID_CONFIGURATION: InvalidConfiguration,
    ErrorKind.EXTERNAL_SUBSYSTEM: ExternalSubsystemError,
}


def classify_error_code(code: Optional[str], status: Optional[int] = None) -> ErrorKind:
    """
    Map a low-level storage error code to an error kind.
    
    Pure function: no I/O, no exceptions. Only NOT_FOUND, ACCESS_DENIED and
    STORAGE_IO are ever returned; a code that is not recognized is never
    treated as "missing".
    
    Args:
        code: Service error code (e.g. "NoSuchKey"), may be None
        status: HTTP status code of the failed response, if known
        
    Returns:
        ErrorKind for the failure
        
    Examples:
        >>> classify_error_code("NoSuchKey")
        <ErrorKind.NOT_FOUND: 'not_found'>
        
        >>> classify_error_code("SlowDown", 503)
        <ErrorKind.STORAGE_IO: 'storage_io'>
    """
    code = code or ""
    if code in _NOT_FOUND_CODES:
        return ErrorKind.NOT_FOUND
    if code in _ACCESS_DENIED_CODES:
        return ErrorKind.ACCESS_DENIED
    # HEAD-style responses carry no code, only a status
    if not code and status == 404:
        return ErrorKind.NOT_FOUND
    if not code and status == 403:
        return ErrorKind.ACCESS_DENIED
    return ErrorKind.STORAGE_IO


def error_for_kind(kind: ErrorKind, message: str) -> ResolverError:
    """Build the exception instance matching ``kind``."""
    return _ERROR_CLASSES[kind](message)


__all__ = [
    "ErrorKind",
    "ResolverError",
    "ObjectNotFound",
    "AccessDenied",
    "StorageIOError",
    "InvalidDelegateResult",
    "ExternalSubsystemError",
    "InvalidConfiguration",
    "classify_error_code",
    "error_for_kind",
]
