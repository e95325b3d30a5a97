# showlog/core/storage.py
"""
Media stores for uploaded concert photos and videos.

Keys always look like ``<YYYYMMDD>-<artistSlug>/<filename>``. The local store
writes below MEDIA_ROOT and hands out URLs under MEDIA_URL_PREFIX; the S3
store writes to a bucket and hands out public object URLs.
"""

import os
import shutil
from typing import BinaryIO, Optional

import boto3
from botocore.exceptions import ClientError

from showlog.core.config import settings


class LocalMediaStorage:
    def __init__(self, root: str, url_prefix: str):
        self.root = os.path.abspath(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key))
        if os.path.commonpath([self.root, path]) != self.root:
            raise ValueError(f"Key escapes the media root: {key}")
        return path

    def url_for(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"

    def key_for_url(self, url: str) -> Optional[str]:
        prefix = f"{self.url_prefix}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    def exists(self, key: str) -> bool:
        return os.path.exists(self._path(key))

    def save(self, key: str, fileobj: BinaryIO, content_type: str) -> str:
        path = self._path(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "xb") as out:
            shutil.copyfileobj(fileobj, out)
        return self.url_for(key)

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not os.path.isfile(path):
            return False
        os.remove(path)
        # Drop the concert directory once its last file is gone
        directory = os.path.dirname(path)
        if directory != self.root and not os.listdir(directory):
            os.rmdir(directory)
        return True

    def delete_url(self, url: str) -> bool:
        key = self.key_for_url(url)
        if key is None:
            return False
        return self.delete(key)


def get_s3_client():
    """
    Initializes and returns an S3 client.
    Conditionally configures the endpoint_url for local development with MinIO.
    """
    if settings.AWS_S3_ENDPOINT_URL:
        return boto3.client(
            "s3",
            endpoint_url=settings.AWS_S3_ENDPOINT_URL,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=settings.AWS_S3_REGION,
        )
    return boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_S3_REGION,
    )


class S3MediaStorage:
    def __init__(self, client, bucket: str, region: str, endpoint_url: str | None = None):
        self.client = client
        self.bucket = bucket
        if endpoint_url:
            self.base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def key_for_url(self, url: str) -> Optional[str]:
        prefix = f"{self.base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):] or None

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise
        return True

    def save(self, key: str, fileobj: BinaryIO, content_type: str) -> str:
        self.client.upload_fileobj(
            fileobj,
            self.bucket,
            key,
            ExtraArgs={"ContentType": content_type, "ACL": "public-read"},
        )
        return self.url_for(key)

    def delete(self, key: str) -> bool:
        if not self.exists(key):
            return False
        self.client.delete_object(Bucket=self.bucket, Key=key)
        return True

    def delete_url(self, url: str) -> bool:
        key = self.key_for_url(url)
        if key is None:
            return False
        return self.delete(key)


def get_storage():
    """Dependency returning the configured media store."""
    if settings.MEDIA_BACKEND == "s3":
        return S3MediaStorage(
            get_s3_client(),
            bucket=settings.AWS_S3_BUCKET_NAME,
            region=settings.AWS_S3_REGION,
            endpoint_url=settings.AWS_S3_ENDPOINT_URL,
        )
    return LocalMediaStorage(settings.MEDIA_ROOT, settings.MEDIA_URL_PREFIX)
