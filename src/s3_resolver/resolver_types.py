"""
Value types shared by strategies and the resolver.

These types describe what is being resolved (Identifier), where it lives
(ResolvedLocation), and the validated shape of a delegate's answer
(KeyOrLocation).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

__all__ = [
    "Identifier",
    "ResolvedLocation",
    "DelegateKey",
    "DelegateLocation",
    "DelegateAbsent",
    "KeyOrLocation",
    "RequestContext",
]

# Ambient request context passed through to the delegate (client IP, headers, ...)
RequestContext = Mapping[str, Any]


@dataclass(frozen=True)
class Identifier:
    """
    Opaque, externally supplied name of a requested resource.
    
    Compares by value. ``str(identifier)`` yields the raw value, which the
    direct lookup strategy uses verbatim as the storage key.
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError(f"Identifier value must be a string, got {type(self.value).__name__}")

    @classmethod
    def of(cls, value: Union["Identifier", str]) -> "Identifier":
        return value if isinstance(value, Identifier) else cls(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResolvedLocation:
    """Concrete bucket and key of a stored object."""
    bucket: str
    key: str

    def __str__(self) -> str:
        return f"{self.bucket}/{self.key}"


@dataclass(frozen=True)
class DelegateKey:
    """Delegate answered with a key; bucket stays at the configured default."""
    key: str


@dataclass(frozen=True)
class DelegateLocation:
    """Delegate answered with both bucket and key."""
    bucket: str
    key: str


@dataclass(frozen=True)
class DelegateAbsent:
    """Delegate declined to produce a key: the object does not exist."""


KeyOrLocation = Union[DelegateKey, DelegateLocation, DelegateAbsent]
