"""Root pytest configuration for s3-resolver tests."""
import pytest

from s3_resolver.settings import Settings
from s3_resolver.storage.shared import SharedStorageClient
from .storage.fakes.fake_storage import FakeStorageClient


# Keep the developer's environment from leaking into settings tests
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically clear resolver environment variables."""
    for name in (
        "S3RESOLVER_LOOKUP_STRATEGY",
        "S3RESOLVER_BUCKET_NAME",
        "S3RESOLVER_BUCKET_REGION",
        "S3RESOLVER_ACCESS_KEY_ID",
        "S3RESOLVER_SECRET_KEY",
        "S3RESOLVER_ENDPOINT",
        "S3RESOLVER_CONNECT_TIMEOUT",
        "S3RESOLVER_READ_TIMEOUT",
        "S3RESOLVER_DELEGATE_ENABLED",
        "S3RESOLVER_DELEGATE",
    ):
        monkeypatch.delenv(name, raising=False)


# Standardized test fixtures
@pytest.fixture
def settings():
    """Standard test settings (direct lookup, default bucket)."""
    return Settings(lookup_strategy="Direct", bucket_name="images")


@pytest.fixture
def storage():
    """Standard fake storage client for testing."""
    return FakeStorageClient()


@pytest.fixture
def shared_storage(storage):
    """Shared handle wrapping the fake storage client."""
    return SharedStorageClient.of(storage)
