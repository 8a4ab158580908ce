"""Shared test fixtures for the essaypub test suite."""

from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError

from essaypub.config import Settings

TEMPLATE_URL = "https://docs.example.com/template/pub"
ESSAY_URL = "https://docs.example.com/essay/pub"


class FakeS3Client:
    """In-memory stand-in for the boto3 S3 client.

    Fails the first ``failures`` put_object calls with a throttling error.
    """

    def __init__(self, failures: int = 0) -> None:
        self.calls: list[dict[str, Any]] = []
        self._failures = failures

    def put_object(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(kwargs)
        if self._failures > 0:
            self._failures -= 1
            raise ClientError(
                {"Error": {"Code": "SlowDown", "Message": "Please reduce your request rate."}},
                "PutObject",
            )
        return {"ETag": '"d41d8cd98f00b204e9800998ecf8427e"'}


@pytest.fixture()
def settings() -> Settings:
    """Settings with retry delays removed so retry tests stay fast."""
    return Settings(
        sources={"template_url": TEMPLATE_URL, "essay_url": ESSAY_URL},
        retry={"max_retries": 3, "delay_ms": 0},
    )


@pytest.fixture()
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture()
def make_s3_client() -> type[FakeS3Client]:
    """Factory for fake clients that fail a given number of times first."""
    return FakeS3Client
