"""
Lookup strategies.

A lookup strategy maps an identifier (plus ambient request context) to the
bucket and key of the object that backs it. Two strategies exist:

- Direct: the identifier is literally the storage key
- Dynamic: a delegate function decides the key, optionally the bucket too
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from .delegate import (
    GET_OBJECT_KEY,
    Delegate,
    DelegateDisabledError,
    load_delegate,
    parse_delegate_result,
)
from .errors import ExternalSubsystemError, InvalidConfiguration, ObjectNotFound
from .resolver_types import (
    DelegateAbsent,
    DelegateLocation,
    Identifier,
    RequestContext,
    ResolvedLocation,
)
from .settings import Settings

__all__ = [
    "LookupStrategy",
    "DirectLookupStrategy",
    "DynamicLookupStrategy",
    "strategy_for",
    "STRATEGY_NAMES",
]

logger = logging.getLogger(__name__)


class LookupStrategy(Protocol):
    """Protocol for identifier -> location resolution."""
    
    def resolve(self, identifier: Identifier, context: RequestContext) -> ResolvedLocation:
        """
        Resolve an identifier to a storage location.
        
        Raises:
            ResolverError: Subclass describing why no location is available
        """
        ...


def _require_bucket(bucket: Optional[str]) -> str:
    if not bucket:
        raise InvalidConfiguration("bucket_name is not set and the lookup strategy supplied no bucket")
    return bucket


class DirectLookupStrategy(LookupStrategy):
    """Uses the identifier verbatim as the key in the default bucket. No I/O."""
    
    def __init__(self, *, default_bucket: Optional[str]) -> None:
        self._default_bucket = default_bucket
    
    def resolve(self, identifier: Identifier, context: RequestContext) -> ResolvedLocation:
        return ResolvedLocation(bucket=_require_bucket(self._default_bucket), key=str(identifier))


class DynamicLookupStrategy(LookupStrategy):
    """
    Asks a delegate for the key (and optionally the bucket).
    
    The delegate is authoritative on existence: a None answer means the
    object does not exist. A delegate that raises or is disabled is reported
    as ExternalSubsystemError, distinct from storage failures.
    """
    
    def __init__(self, *, delegate: Delegate, default_bucket: Optional[str]) -> None:
        self._delegate = delegate
        self._default_bucket = default_bucket
    
    def resolve(self, identifier: Identifier, context: RequestContext) -> ResolvedLocation:
        raw_id = str(identifier)
        logger.debug(f"Invoking {GET_OBJECT_KEY} for {raw_id}")
        try:
            raw = self._delegate(raw_id, dict(context))
        except DelegateDisabledError as e:
            logger.error(str(e))
            raise ExternalSubsystemError(str(e)) from e
        except Exception as e:
            logger.error(f"{GET_OBJECT_KEY} failed for {raw_id}: {e}", exc_info=True)
            raise ExternalSubsystemError(f"{GET_OBJECT_KEY} failed for {raw_id}: {e}") from e
        
        result = parse_delegate_result(raw, raw_id)
        if isinstance(result, DelegateAbsent):
            raise ObjectNotFound(f"{GET_OBJECT_KEY} returned nil for {raw_id}")
        if isinstance(result, DelegateLocation):
            return ResolvedLocation(bucket=result.bucket, key=result.key)
        return ResolvedLocation(bucket=_require_bucket(self._default_bucket), key=result.key)


# Normalized selector -> canonical strategy name
STRATEGY_NAMES = {
    "direct": "Direct",
    "basiclookupstrategy": "Direct",
    "dynamic": "Dynamic",
    "scriptlookupstrategy": "Dynamic",
}


def strategy_for(settings: Settings, delegate: Optional[Delegate] = None) -> LookupStrategy:
    """
    Create the lookup strategy selected by settings.
    
    Args:
        settings: Settings with lookup_strategy and bucket_name
        delegate: Delegate for the dynamic strategy; loaded from settings if omitted
        
    Returns:
        Lookup strategy instance
        
    Raises:
        InvalidConfiguration: If lookup_strategy is unset or unrecognized
    """
    selector = (settings.lookup_strategy or "").strip()
    name = STRATEGY_NAMES.get(selector.lower())
    
    if name == "Direct":
        return DirectLookupStrategy(default_bucket=settings.bucket_name)
    elif name == "Dynamic":
        if delegate is None:
            delegate = load_delegate(settings)
        return DynamicLookupStrategy(delegate=delegate, default_bucket=settings.bucket_name)
    else:
        raise InvalidConfiguration(
            f"lookup_strategy is invalid or not set: {settings.lookup_strategy!r}. "
            f"Supported values: Direct, Dynamic"
        )
