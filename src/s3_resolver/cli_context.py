"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like settings, the
shared storage client and the delegate, avoiding global state and enabling
proper dependency injection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .delegate import Delegate, load_delegate
from .resolver import ObjectResolver
from .resolver_types import RequestContext
from .settings import Settings, create_settings_from_env
from .storage.shared import SharedStorageClient
from .strategies import STRATEGY_NAMES


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.
    
    Holds the dependencies that live longer than a single resolution: the
    settings, the shared storage client handle, and the loaded delegate.
    Resolvers are created per identifier from this context.
    """
    settings: Settings
    storage: Optional[SharedStorageClient] = None
    _delegate: Optional[Delegate] = field(default=None, repr=False)
    
    def __post_init__(self) -> None:
        if self.storage is None:
            self.storage = SharedStorageClient.from_settings(self.settings)
    
    @classmethod
    def from_env(cls) -> CLIContext:
        """
        Create CLI context from environment variables.
        
        Returns:
            CLIContext with settings loaded from environment
        """
        settings = create_settings_from_env()
        return cls(settings=settings)
    
    @property
    def delegate(self) -> Delegate:
        """Get or load the delegate (lazy initialization)."""
        if self._delegate is None:
            self._delegate = load_delegate(self.settings)
        return self._delegate
    
    def resolver_for(self, identifier: str, context: Optional[RequestContext] = None) -> ObjectResolver:
        """
        Create a resolver for one identifier.
        
        Strategy selection is left to the resolver so that configuration
        and delegate failures are reported and cached by it. The delegate is
        only loaded when the dynamic strategy is selected.
        """
        delegate = None
        if STRATEGY_NAMES.get((self.settings.lookup_strategy or "").strip().lower()) == "Dynamic":
            delegate = self.delegate
        return ObjectResolver(
            identifier,
            settings=self.settings,
            storage=self.storage,
            delegate=delegate,
            context=context,
        )
