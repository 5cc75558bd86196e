"""
MediaStore adapter: review photos live in an object store, the database only keeps their URLs.

Deleting a blob is best-effort from the caller's point of view; this module raises
``MediaStoreError`` and leaves the decision to swallow it to the caller.
"""
import logging
from functools import lru_cache
from urllib.parse import unquote, urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class MediaStoreError(Exception):
    pass


def extract_public_id(url: str) -> str:
    """
    Object key of an uploaded photo, taken from its URL.

    Handles virtual-hosted style (https://bucket.s3.region.amazonaws.com/reviews/a.jpg)
    and path style (https://s3.region.amazonaws.com/bucket/reviews/a.jpg) URLs.
    """
    if not url:
        raise MediaStoreError("Empty media URL.")
    parsed = urlparse(url)
    key = unquote(parsed.path).lstrip("/")
    bucket = settings.MEDIA_STORE.get("BUCKET")
    host = parsed.netloc.lower()
    if bucket and host.startswith("s3") and key.startswith(f"{bucket}/"):
        key = key[len(bucket) + 1:]
    if not key:
        raise MediaStoreError(f"Cannot extract an object key from {url!r}.")
    return key


class S3MediaStore:
    """Review photo blobs stored in an S3 bucket."""

    def __init__(self, config=None):
        self.config = config or settings.MEDIA_STORE
        self.bucket = self.config.get("BUCKET")
        self.client = boto3.client(
            "s3",
            aws_access_key_id=self.config.get("ACCESS_KEY_ID"),
            aws_secret_access_key=self.config.get("SECRET_ACCESS_KEY"),
            region_name=self.config.get("REGION"),
        )

    def extract_public_id(self, url: str) -> str:
        return extract_public_id(url)

    def delete_image(self, public_id: str) -> None:
        if not self.bucket:
            raise MediaStoreError("MEDIA_STORE['BUCKET'] is not configured.")
        try:
            self.client.delete_object(Bucket=self.bucket, Key=public_id)
        except (ClientError, BotoCoreError) as e:
            raise MediaStoreError(f"Failed to delete {public_id}: {e}") from e
        logger.info("Media deleted bucket=%s key=%s", self.bucket, public_id)


@lru_cache(maxsize=1)
def get_media_store():
    backend = import_string(settings.MEDIA_STORE["BACKEND"])
    return backend()
