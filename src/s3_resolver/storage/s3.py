"""
S3 storage adapter.

Implements the StorageClient protocol with boto3. Works against AWS S3 and
S3-compatible services (MinIO, SeaweedFS) via a custom endpoint URL.
"""
from __future__ import annotations

import logging
from typing import IO, Any, Mapping, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..settings import Settings
from .base import StorageClient, StorageClientError, StoredObject

__all__ = ["S3StorageClient", "S3Object", "translate_client_error"]

logger = logging.getLogger(__name__)


def translate_client_error(exc: ClientError, bucket: str, key: str) -> StorageClientError:
    """Convert a botocore ClientError into a StorageClientError."""
    response = getattr(exc, 'response', {}) or {}
    code = str((response.get('Error') or {}).get('Code') or '') or None
    status = (response.get('ResponseMetadata') or {}).get('HTTPStatusCode')
    return StorageClientError(f"S3 get_object failed for s3://{bucket}/{key}: {exc}", code=code, status=status)


class S3Object(StoredObject):
    """Handle over a boto3 get_object response."""
    
    def __init__(self, bucket: str, key: str, response: Mapping[str, Any]) -> None:
        self.bucket = bucket
        self.key = key
        self._response = response
        self._body = response.get('Body')
        self._closed = False
    
    @property
    def content_type(self) -> Optional[str]:
        return self._response.get('ContentType')
    
    @property
    def content_length(self) -> Optional[int]:
        return self._response.get('ContentLength')
    
    @property
    def etag(self) -> Optional[str]:
        return (self._response.get('ETag') or '').strip('"') or None
    
    def open(self) -> IO[bytes]:
        if self._closed:
            raise ValueError(f"S3 object s3://{self.bucket}/{self.key} is closed")
        return self._body
    
    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._body is not None:
            self._body.close()
    
    def __enter__(self) -> S3Object:
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.close()


class S3StorageClient(StorageClient):
    """
    StorageClient backed by a boto3 S3 client.
    
    The boto3 client is built once at construction; SDK retries are disabled
    so that a failed request surfaces once and is classified by the resolver.
    """
    
    def __init__(self, *, settings: Settings, client: Any = None) -> None:
        """
        Initialize the adapter.
        
        Args:
            settings: Settings containing region, credentials and endpoint
            client: Pre-built boto3 S3 client (tests use a stubbed one)
        """
        self._settings = settings
        self._client = client if client is not None else self._build_client(settings)
    
    @staticmethod
    def _build_client(settings: Settings):
        client_kwargs = {
            'config': Config(
                signature_version='s3v4',
                connect_timeout=settings.connect_timeout_s,
                read_timeout=settings.read_timeout_s,
                retries={'total_max_attempts': 1, 'mode': 'standard'},
            ),
        }
        if settings.bucket_region:
            client_kwargs['region_name'] = settings.bucket_region
        if settings.endpoint_url:
            client_kwargs['endpoint_url'] = settings.endpoint_url
        if settings.has_credentials:
            client_kwargs['aws_access_key_id'] = settings.access_key_id
            client_kwargs['aws_secret_access_key'] = settings.secret_key
        
        # Log configuration (without secrets)
        if settings.has_credentials:
            logger.debug(f"S3 client using configured access key in region {settings.bucket_region or 'default'}")
        else:
            logger.debug("S3 client using default boto3 credential chain")
        if settings.endpoint_url:
            logger.debug(f"S3 client using custom endpoint: {settings.endpoint_url}")
        
        return boto3.client('s3', **client_kwargs)
    
    def get_object(self, bucket: str, key: str) -> S3Object:
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as e:
            raise translate_client_error(e, bucket, key) from e
        except BotoCoreError as e:
            raise StorageClientError(
                f"S3 request failed for s3://{bucket}/{key}: {e}",
                code=type(e).__name__,
            ) from e
        return S3Object(bucket, key, response)
