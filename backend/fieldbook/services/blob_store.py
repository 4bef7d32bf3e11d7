"""Blob storage for uploaded photo and document bytes"""

import logging
import re
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from fieldbook.services.exceptions import BlobNotFoundError, BlobStoreError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_name(suggested_name: str) -> str:
    """Reduce a client supplied file name to a safe single path segment"""
    name = Path(suggested_name or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name[:200] or "upload"


class BlobStore(Protocol):
    """Opaque byte storage keyed by generated locators"""

    def store(self, data: bytes, suggested_name: str) -> str:
        ...

    def retrieve(self, locator: str) -> bytes:
        ...

    def delete(self, locator: str) -> None:
        ...

    def check(self) -> str:
        ...


class LocalBlobStore:
    """Blob store backed by a directory on the local filesystem"""

    def __init__(self, upload_dir: str):
        self.root = Path(upload_dir).resolve()

    def _path(self, locator: str) -> Path:
        path = (self.root / locator).resolve()
        if path.parent != self.root:
            raise BlobNotFoundError(locator)
        return path

    def store(self, data: bytes, suggested_name: str) -> str:
        """
        Write bytes under a new unique locator.

        Locators look like ``{epoch_ms}-{random}-{name}`` so repeated uploads
        of the same file name never collide.
        """
        locator = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}-{safe_name(suggested_name)}"
        path = self.root / locator
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with open(path, "xb") as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Failed to write blob {locator}: {e}")
            raise BlobStoreError(f"Failed to store blob: {e}")

        logger.info(f"Stored blob {locator} ({len(data)} bytes)")
        return locator

    def retrieve(self, locator: str) -> bytes:
        path = self._path(locator)
        if not path.is_file():
            raise BlobNotFoundError(locator)
        return path.read_bytes()

    def delete(self, locator: str) -> None:
        try:
            self._path(locator).unlink(missing_ok=True)
        except BlobNotFoundError:
            return
        except OSError as e:
            raise BlobStoreError(f"Failed to delete blob {locator}: {e}")

    def check(self) -> str:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return f"unavailable: {e}"
        return "available"


class S3BlobStore:
    """Blob store backed by an S3 (or MinIO) bucket"""

    KEY_PREFIX = "uploads"

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        access_key_id: str = None,
        secret_access_key: str = None,
        endpoint_url: str = None,
    ):
        """Initialize S3 client with retry configuration"""
        self.bucket = bucket

        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if access_key_id and secret_access_key:
            client_kwargs["aws_access_key_id"] = access_key_id
            client_kwargs["aws_secret_access_key"] = secret_access_key

        # Use custom endpoint for local development (MinIO)
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {bucket}")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise BlobStoreError(f"Failed to initialize S3 client: {e}")

    def generate_key(self, suggested_name: str) -> str:
        """
        Generate an object key following the structure:
        uploads/{year}/{month}/{day}/{uuid}-{name}
        """
        now = datetime.now(timezone.utc)
        return (
            f"{self.KEY_PREFIX}/{now:%Y}/{now:%m}/{now:%d}/"
            f"{uuid.uuid4().hex}-{safe_name(suggested_name)}"
        )

    def store(self, data: bytes, suggested_name: str) -> str:
        key = self.generate_key(suggested_name)
        try:
            self.s3_client.put_object(Bucket=self.bucket, Key=key, Body=data)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 ClientError storing {key}: {error_code} - {e}")
            raise BlobStoreError(f"Failed to store blob: {error_code}")
        except BotoCoreError as e:
            logger.error(f"S3 error storing {key}: {e}")
            raise BlobStoreError(f"Failed to store blob: {e}")

        logger.info(f"Stored blob {key} ({len(data)} bytes)")
        return key

    def retrieve(self, locator: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=locator)
            return response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("NoSuchKey", "404"):
                raise BlobNotFoundError(locator)
            logger.error(f"S3 ClientError reading {locator}: {error_code} - {e}")
            raise BlobStoreError(f"Failed to retrieve blob: {error_code}")
        except BotoCoreError as e:
            logger.error(f"S3 error reading {locator}: {e}")
            raise BlobStoreError(f"Failed to retrieve blob: {e}")

    def delete(self, locator: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=locator)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 ClientError deleting {locator}: {error_code} - {e}")
            raise BlobStoreError(f"Failed to delete blob: {error_code}")
        except BotoCoreError as e:
            logger.error(f"S3 error deleting {locator}: {e}")
            raise BlobStoreError(f"Failed to delete blob: {e}")

    def check(self) -> str:
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            return "connected"
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "404":
                return f"bucket_not_found: {self.bucket}"
            return f"disconnected: {error_code}"
        except BotoCoreError as e:
            return f"disconnected: {e}"


def build_blob_store(settings) -> BlobStore:
    """Blob store selected by ``settings.blob_backend``"""
    if settings.blob_backend == "s3":
        return S3BlobStore(
            bucket=settings.s3_bucket,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            endpoint_url=settings.aws_endpoint_url,
        )
    return LocalBlobStore(settings.upload_dir)
