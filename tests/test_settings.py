"""
Tests for settings module.

Tests settings validation and environment variable loading.
"""
from __future__ import annotations

import pytest

from s3_resolver.settings import Settings, create_settings_from_env


class TestSettings:
    """Test Settings dataclass validation."""
    
    def test_defaults(self):
        """Test creating settings with no values."""
        settings = Settings()
        assert settings.lookup_strategy is None
        assert settings.bucket_name is None
        assert settings.connect_timeout_s == 10.0
        assert settings.read_timeout_s == 60.0
        assert settings.delegate_enabled is False
        assert settings.has_credentials is False
    
    def test_full_settings(self):
        """Test settings with all values."""
        settings = Settings(
            lookup_strategy="Dynamic",
            bucket_name="images",
            bucket_region="us-east-2",
            access_key_id="AKIAEXAMPLE",
            secret_key="secret",
            endpoint_url="http://localhost:9000",
            connect_timeout_s=2.0,
            read_timeout_s=5.0,
            delegate_enabled=True,
            delegate_target="mydelegates.s3:get_object_key",
        )
        assert settings.has_credentials is True
        assert settings.endpoint_url == "http://localhost:9000"
        assert settings.delegate_target == "mydelegates.s3:get_object_key"
    
    def test_unknown_strategy_not_rejected_here(self):
        """The selector is validated by the resolver, not by Settings."""
        assert Settings(lookup_strategy="Nope").lookup_strategy == "Nope"
    
    def test_access_key_without_secret_raises(self):
        with pytest.raises(ValueError, match="secret_key is missing"):
            Settings(access_key_id="AKIAEXAMPLE")
    
    def test_secret_without_access_key_raises(self):
        with pytest.raises(ValueError, match="access_key_id is missing"):
            Settings(secret_key="secret")
    
    @pytest.mark.parametrize("field", ["connect_timeout_s", "read_timeout_s"])
    def test_non_positive_timeouts_raise(self, field):
        with pytest.raises(ValueError, match=f"{field} must be positive"):
            Settings(**{field: 0})
    
    @pytest.mark.parametrize("url", ["localhost:9000", "ftp://host", "http://"])
    def test_invalid_endpoint_raises(self, url):
        with pytest.raises(ValueError, match="Invalid endpoint_url format"):
            Settings(endpoint_url=url)
    
    @pytest.mark.parametrize("target", ["module", "module:", ":func", "mod-ule:func"])
    def test_invalid_delegate_target_raises(self, target):
        with pytest.raises(ValueError, match="Invalid delegate_target format"):
            Settings(delegate_target=target)


class TestCreateSettingsFromEnv:
    """Test environment loading."""
    
    def test_empty_environment(self):
        """With nothing set, everything is at its default."""
        assert create_settings_from_env() == Settings()
    
    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("S3RESOLVER_LOOKUP_STRATEGY", "Direct")
        monkeypatch.setenv("S3RESOLVER_BUCKET_NAME", "images")
        monkeypatch.setenv("S3RESOLVER_BUCKET_REGION", "eu-west-1")
        monkeypatch.setenv("S3RESOLVER_ACCESS_KEY_ID", "AKIAEXAMPLE")
        monkeypatch.setenv("S3RESOLVER_SECRET_KEY", "secret")
        monkeypatch.setenv("S3RESOLVER_ENDPOINT", "https://minio.internal:9000")
        monkeypatch.setenv("S3RESOLVER_CONNECT_TIMEOUT", "3.5")
        monkeypatch.setenv("S3RESOLVER_READ_TIMEOUT", "30")
        monkeypatch.setenv("S3RESOLVER_DELEGATE_ENABLED", "yes")
        monkeypatch.setenv("S3RESOLVER_DELEGATE", "pkg.delegates:get_object_key")
        
        settings = create_settings_from_env()
        
        assert settings == Settings(
            lookup_strategy="Direct",
            bucket_name="images",
            bucket_region="eu-west-1",
            access_key_id="AKIAEXAMPLE",
            secret_key="secret",
            endpoint_url="https://minio.internal:9000",
            connect_timeout_s=3.5,
            read_timeout_s=30.0,
            delegate_enabled=True,
            delegate_target="pkg.delegates:get_object_key",
        )
    
    def test_empty_strings_are_unset(self, monkeypatch):
        monkeypatch.setenv("S3RESOLVER_LOOKUP_STRATEGY", "")
        monkeypatch.setenv("S3RESOLVER_ACCESS_KEY_ID", "")
        assert create_settings_from_env().lookup_strategy is None
    
    def test_invalid_environment_raises(self, monkeypatch):
        monkeypatch.setenv("S3RESOLVER_ACCESS_KEY_ID", "AKIAEXAMPLE")
        with pytest.raises(ValueError, match="secret_key is missing"):
            create_settings_from_env()
