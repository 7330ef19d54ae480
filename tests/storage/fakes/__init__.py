# Fake implementations for testing

from .fake_storage import FakeStorageClient, FakeStoredObject

__all__ = ["FakeStorageClient", "FakeStoredObject"]
