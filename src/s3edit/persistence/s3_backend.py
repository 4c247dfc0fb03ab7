"""S3 object storage backend implementing IObjectStore."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3edit.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3ObjectStore:
    """Production IObjectStore backed by boto3.

    Credentials, and the region when none is given, come from the ambient
    AWS configuration (environment, shared config files, instance role).
    """

    def __init__(self, region: str | None = None, endpoint_url: str | None = None,
                 profile: str | None = None) -> None:
        try:
            session = boto3.Session(profile_name=profile, region_name=region)
            kwargs: dict = {}
            if endpoint_url:
                kwargs["endpoint_url"] = endpoint_url
            self._client = session.client("s3", **kwargs)
        except BotoCoreError as exc:
            raise StorageError(f"S3 client setup failed: {exc}") from exc

    def get(self, bucket: str, key: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=bucket, Key=key)
            data = resp["Body"].read()
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"S3 read failed for s3://{bucket}/{key}: {exc}") from exc
        logger.debug("Fetched %d bytes from s3://%s/%s", len(data), bucket, key)
        return data

    def put(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        try:
            self._client.put_object(
                Bucket=bucket, Key=key, Body=data, ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"S3 write failed for s3://{bucket}/{key}: {exc}") from exc
        logger.debug("Uploaded %d bytes to s3://%s/%s (%s)", len(data), bucket, key, content_type)
