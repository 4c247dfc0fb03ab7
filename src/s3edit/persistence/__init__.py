"""Pluggable object storage behind the IObjectStore protocol."""

from __future__ import annotations

from s3edit.core.config import AppSettings
from s3edit.persistence.s3_backend import S3ObjectStore


def create_object_store(settings: AppSettings | None = None) -> S3ObjectStore:
    """Create the S3 object store from application settings."""
    if settings is None:
        settings = AppSettings()

    return S3ObjectStore(
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
        profile=settings.s3.profile,
    )
