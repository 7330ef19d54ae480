"""
Dynamic lookup delegate.

The delegate is an externally supplied function that decides which object
backs an identifier. Its execution environment is opaque to the resolver:
it is loaded from settings as ``package.module:function`` and called as
``get_object_key(identifier, context)``.

This module also validates the delegate's loosely typed answer into the
KeyOrLocation variant so strategies never inspect raw results.
"""
from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidDelegateResult
from .resolver_types import (
    DelegateAbsent,
    DelegateKey,
    DelegateLocation,
    KeyOrLocation,
    RequestContext,
)
from .settings import Settings

__all__ = [
    "GET_OBJECT_KEY",
    "Delegate",
    "DelegateDisabledError",
    "DelegateLoadError",
    "DisabledDelegate",
    "load_delegate",
    "parse_delegate_result",
]

logger = logging.getLogger(__name__)

# Name used in log and error messages for the delegate call
GET_OBJECT_KEY = "S3Resolver::get_object_key"

Delegate = Callable[[str, RequestContext], Any]


class DelegateDisabledError(Exception):
    """Raised when the delegate is invoked while delegates are disabled."""


class DelegateLoadError(Exception):
    """Raised when the configured delegate target cannot be imported."""


class DisabledDelegate:
    """Delegate stand-in used when delegates are disabled in settings."""
    
    def __call__(self, identifier: str, context: RequestContext) -> Any:
        raise DelegateDisabledError(f"{GET_OBJECT_KEY} invoked but delegates are disabled")


class _UnloadableDelegate:
    """Defers an import failure until the delegate is actually invoked."""
    
    def __init__(self, target: str, cause: Exception) -> None:
        self._target = target
        self._cause = cause
    
    def __call__(self, identifier: str, context: RequestContext) -> Any:
        raise DelegateLoadError(f"Cannot load delegate {self._target}: {self._cause}") from self._cause


class _LocationResult(BaseModel):
    """Shape of a mapping answer: both fields required, scalars coerced to str."""
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")
    
    bucket: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)


def load_delegate(settings: Settings) -> Delegate:
    """
    Build the delegate described by settings.
    
    Args:
        settings: Settings with delegate_enabled and delegate_target
        
    Returns:
        Callable delegate. When delegates are disabled or no target is set,
        the returned delegate raises DelegateDisabledError when called. An
        import failure is likewise deferred to call time as DelegateLoadError,
        so only resolvers that actually use the dynamic strategy fail.
    """
    if not settings.delegate_enabled or not settings.delegate_target:
        logger.debug("Delegate disabled")
        return DisabledDelegate()
    
    target = settings.delegate_target
    module_name, _, attr_path = target.partition(":")
    try:
        obj: Any = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except Exception as e:
        logger.error(f"Failed to load delegate {target}: {e}")
        return _UnloadableDelegate(target, e)
    
    if not callable(obj):
        return _UnloadableDelegate(target, TypeError(f"{target} is not callable"))
    
    logger.debug(f"Loaded delegate {target}")
    return obj


def parse_delegate_result(result: Any, identifier: Optional[str] = None) -> KeyOrLocation:
    """
    Validate a raw delegate answer.
    
    Accepted shapes:
    - None -> DelegateAbsent
    - non-empty str -> DelegateKey
    - mapping with "bucket" and "key" -> DelegateLocation
    
    Args:
        result: Raw value returned by the delegate
        identifier: Identifier being resolved, for error messages
        
    Returns:
        Validated KeyOrLocation variant
        
    Raises:
        InvalidDelegateResult: For any other shape, a mapping missing either
            field, or an empty key
    """
    if result is None:
        return DelegateAbsent()
    
    if isinstance(result, str):
        if not result:
            raise InvalidDelegateResult(f"{GET_OBJECT_KEY} returned an empty key for {identifier}")
        return DelegateKey(key=result)
    
    if isinstance(result, Mapping):
        try:
            location = _LocationResult.model_validate(dict(result))
        except ValidationError as e:
            logger.error(f"{GET_OBJECT_KEY} result does not include bucket and key: {result!r}")
            raise InvalidDelegateResult(
                f"{GET_OBJECT_KEY} returned a mapping without a usable bucket and key for {identifier}"
            ) from e
        return DelegateLocation(bucket=location.bucket, key=location.key)
    
    raise InvalidDelegateResult(
        f"{GET_OBJECT_KEY} returned unsupported type {type(result).__name__} for {identifier}"
    )
