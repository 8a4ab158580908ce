"""Object-storage publisher.

Writes the merged page to a fixed bucket as a public-read HTML object and
reports its public URL. The boto3 client is blocking, so each put runs in a
worker thread; the event loop itself stays single-threaded.
"""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from essaypub.errors import ErrorCode, StorageWriteError
from essaypub.retry import retry_async

if TYPE_CHECKING:
    from essaypub.config import StorageSettings
    from essaypub.protocols import StorageClientProtocol

log = structlog.get_logger()

CONTENT_TYPE = "text/html; charset=utf-8"
PUBLIC_READ_ACL = "public-read"
CREDENTIAL_ENV_VARS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY")

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 0.01


def build_public_url(public_base_url: str, bucket: str, key: str) -> str:
    """Path-style URL: ``https://s3.amazonaws.com/<bucket>/<key>``."""
    return f"{public_base_url.rstrip('/')}/{bucket}/{key}"


def build_s3_client(settings: StorageSettings) -> StorageClientProtocol:
    """Create an S3 client from environment-provided credentials.

    Raises StorageWriteError (STORAGE_CREDENTIALS_MISSING) when either
    credential variable is unset or empty.
    """
    missing = [name for name in CREDENTIAL_ENV_VARS if not os.environ.get(name)]
    if missing:
        raise StorageWriteError(
            f"Missing storage credentials: {', '.join(missing)}",
            suggestion="Export AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY before publishing.",
            code=ErrorCode.STORAGE_CREDENTIALS_MISSING,
        )

    return boto3.client(
        "s3",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
        aws_access_key_id=os.environ["AWS_ACCESS_KEY_ID"],
        aws_secret_access_key=os.environ["AWS_SECRET_ACCESS_KEY"],
        aws_session_token=os.environ.get("AWS_SESSION_TOKEN"),
        config=Config(retries={"max_attempts": settings.client_max_attempts}),
    )


class Publisher:
    """Puts pages into one bucket, retrying failed writes a fixed number of times."""

    def __init__(
        self,
        client: StorageClientProtocol,
        *,
        bucket: str,
        public_base_url: str = "https://s3.amazonaws.com",
        max_retries: int = DEFAULT_MAX_RETRIES,
        delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._public_base_url = public_base_url
        self._max_retries = max_retries
        self._delay_seconds = delay_seconds

    def public_url(self, key: str) -> str:
        return build_public_url(self._public_base_url, self._bucket, key)

    async def publish(self, key: str, content: str) -> str:
        """Upload ``content`` under ``key`` and return the object's public URL.

        Raises the StorageWriteError of the last attempt once retries are
        exhausted.
        """
        body = content.encode("utf-8")
        await retry_async(
            lambda: self._put_once(key, body),
            event="publish",
            max_retries=self._max_retries,
            delay_seconds=self._delay_seconds,
            retry_on=StorageWriteError,
            bucket=self._bucket,
            key=key,
        )
        url = self.public_url(key)
        log.info("publish_complete", bucket=self._bucket, key=key, url=url)
        return url

    async def _put_once(self, key: str, body: bytes) -> None:
        log.info("publish_started", bucket=self._bucket, key=key, size=len(body))
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self._bucket,
                Key=key,
                Body=body,
                ACL=PUBLIC_READ_ACL,
                ContentType=CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageWriteError(
                f"Failed to put s3://{self._bucket}/{key}: {exc}"
            ) from exc
