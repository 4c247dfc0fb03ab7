"""Shared fixtures: fake AWS credentials so boto3 never reaches a real account."""

from __future__ import annotations

import pytest


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    for name in ("S3EDIT_S3_REGION", "S3EDIT_S3_ENDPOINT_URL", "S3EDIT_S3_PROFILE"):
        monkeypatch.delenv(name, raising=False)
