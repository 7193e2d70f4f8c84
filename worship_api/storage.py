"""
Object storage for chord sheet files
Works against any S3-compatible endpoint (Cloudflare R2, Supabase Storage, MinIO)
"""

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from .config import (
    PRESIGNED_URL_EXPIRATION,
    STORAGE_ACCESS_KEY_ID,
    STORAGE_BUCKET_NAME,
    STORAGE_ENDPOINT_URL,
    STORAGE_PUBLIC_BASE_URL,
    STORAGE_SECRET_ACCESS_KEY,
)

logger = logging.getLogger(__name__)


def get_storage_client():
    """Create and return an S3 client for the configured endpoint."""
    return boto3.client(
        "s3",
        endpoint_url=STORAGE_ENDPOINT_URL,
        aws_access_key_id=STORAGE_ACCESS_KEY_ID,
        aws_secret_access_key=STORAGE_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def upload_file(path: str, content: bytes, content_type: str) -> None:
    """Upload bytes to the bucket, replacing any object at the same path"""
    client = get_storage_client()
    client.put_object(Bucket=STORAGE_BUCKET_NAME, Key=path, Body=content, ContentType=content_type)
    logger.info(f"✅ Uploaded {path} ({len(content)} bytes) to {STORAGE_BUCKET_NAME}")


def delete_file(path: str) -> None:
    """Delete an object; a missing object is only logged"""
    client = get_storage_client()
    try:
        client.delete_object(Bucket=STORAGE_BUCKET_NAME, Key=path)
        logger.info(f"🗑️ Deleted {path} from {STORAGE_BUCKET_NAME}")
    except ClientError as e:
        logger.warning(f"⚠️ Failed to delete {path}: {e}")


def public_url(path: str) -> str:
    """Public URL when the bucket is exposed, otherwise a presigned GET URL"""
    if STORAGE_PUBLIC_BASE_URL:
        return f"{STORAGE_PUBLIC_BASE_URL.rstrip('/')}/{path}"
    client = get_storage_client()
    return client.generate_presigned_url(
        "get_object",
        Params={"Bucket": STORAGE_BUCKET_NAME, "Key": path},
        ExpiresIn=PRESIGNED_URL_EXPIRATION,
    )
