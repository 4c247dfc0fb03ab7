"""S3 locator parsed from the command line argument."""

from __future__ import annotations

from pydantic import BaseModel, Field

from s3edit.core.exceptions import InvalidLocator

SCHEME = "s3://"


class Locator(BaseModel):
    """Bucket and key of the object being edited."""

    model_config = {"frozen": True}

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    file_name: str

    @property
    def url(self) -> str:
        return f"{SCHEME}{self.bucket}/{self.key}"


def parse_s3_path(s3_path: str) -> Locator:
    """Split ``s3://bucket/path/to/file`` into a :class:`Locator`.

    Raises:
        InvalidLocator: missing scheme, no key separator, empty bucket or key,
            or a key naming a directory (trailing ``/``).
    """
    if not s3_path.startswith(SCHEME):
        raise InvalidLocator(s3_path)

    bucket, sep, key = s3_path[len(SCHEME):].partition("/")
    if not sep or not bucket or not key or key.endswith("/"):
        raise InvalidLocator(s3_path)

    return Locator(bucket=bucket, key=key, file_name=key.rpartition("/")[2])
