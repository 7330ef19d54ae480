"""
Settings and configuration for the S3 resolver.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables at client construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

__all__ = ["Settings", "create_settings_from_env"]


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for the S3 resolver.
    
    Lookup Settings:
        lookup_strategy: "Direct" or "Dynamic" (legacy: BasicLookupStrategy,
            ScriptLookupStrategy). Validated lazily by the resolver so that an
            unset or unknown value surfaces as InvalidConfiguration.
        bucket_name: Default bucket, used unless the delegate overrides it
        
    Storage Settings:
        bucket_region: AWS region of the bucket
        access_key_id: Access key id (optional, falls back to the boto3 chain)
        secret_key: Secret access key (required together with access_key_id)
        endpoint_url: Custom endpoint for S3-compatible services (MinIO etc.)
        connect_timeout_s: Connection timeout in seconds
        read_timeout_s: Read timeout in seconds
        
    Delegate Settings:
        delegate_enabled: Whether the dynamic lookup delegate may be invoked
        delegate_target: Delegate callable as "package.module:function"
    """
    # Lookup settings
    lookup_strategy: Optional[str] = None
    bucket_name: Optional[str] = None
    
    # Storage settings
    bucket_region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    connect_timeout_s: float = 10.0
    read_timeout_s: float = 60.0
    
    # Delegate settings
    delegate_enabled: bool = False
    delegate_target: Optional[str] = None
    
    def __post_init__(self):
        """Validate settings on construction."""
        # Credentials must be complete if given at all
        if self.access_key_id and not self.secret_key:
            raise ValueError("access_key_id specified but secret_key is missing")
        if self.secret_key and not self.access_key_id:
            raise ValueError("secret_key specified but access_key_id is missing")
        
        # Validate timeouts are positive
        if self.connect_timeout_s <= 0:
            raise ValueError(f"connect_timeout_s must be positive, got {self.connect_timeout_s}")
        
        if self.read_timeout_s <= 0:
            raise ValueError(f"read_timeout_s must be positive, got {self.read_timeout_s}")
        
        if self.endpoint_url:
            url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
            if not re.match(url_pattern, self.endpoint_url):
                raise ValueError(f"Invalid endpoint_url format: {self.endpoint_url}")
        
        if self.delegate_target:
            target_pattern = r"^[A-Za-z_][\w.]*:[A-Za-z_][\w.]*$"
            if not re.match(target_pattern, self.delegate_target):
                raise ValueError(
                    f"Invalid delegate_target format: {self.delegate_target}. "
                    f"Expected 'package.module:function'."
                )
    
    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_key)


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.
    
    Environment Variables:
        Lookup:
        - S3RESOLVER_LOOKUP_STRATEGY (Direct | Dynamic)
        - S3RESOLVER_BUCKET_NAME
        
        Storage:
        - S3RESOLVER_BUCKET_REGION (optional)
        - S3RESOLVER_ACCESS_KEY_ID (optional)
        - S3RESOLVER_SECRET_KEY (optional)
        - S3RESOLVER_ENDPOINT (optional, for MinIO/custom endpoints)
        - S3RESOLVER_CONNECT_TIMEOUT (default: 10.0)
        - S3RESOLVER_READ_TIMEOUT (default: 60.0)
        
        Delegate:
        - S3RESOLVER_DELEGATE_ENABLED (default: false)
        - S3RESOLVER_DELEGATE (optional, "package.module:function")
    
    Returns:
        Settings object with validated configuration
        
    Raises:
        ValueError: If configuration is invalid
        
    Note:
        Creates a fresh Settings instance every time (no caching).
        The storage client built from it lives for the process lifetime, so
        changes made after that point require a restart.
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')
    
    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        return float(value) if value else default
    
    # Empty strings count as unset
    def get_str(key: str) -> Optional[str]:
        value = os.getenv(key)
        return value or None
    
    return Settings(
        lookup_strategy=get_str("S3RESOLVER_LOOKUP_STRATEGY"),
        bucket_name=get_str("S3RESOLVER_BUCKET_NAME"),
        bucket_region=get_str("S3RESOLVER_BUCKET_REGION"),
        access_key_id=get_str("S3RESOLVER_ACCESS_KEY_ID"),
        secret_key=get_str("S3RESOLVER_SECRET_KEY"),
        endpoint_url=get_str("S3RESOLVER_ENDPOINT"),
        connect_timeout_s=get_float("S3RESOLVER_CONNECT_TIMEOUT", 10.0),
        read_timeout_s=get_float("S3RESOLVER_READ_TIMEOUT", 60.0),
        delegate_enabled=str_to_bool(os.getenv("S3RESOLVER_DELEGATE_ENABLED", "false")),
        delegate_target=get_str("S3RESOLVER_DELEGATE"),
    )
