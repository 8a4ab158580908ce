"""Integration test fixtures.

Provides a fully wired AppState: real Fetcher over an httpx client (mocked at
the transport layer by respx in each test) and a real Publisher over an
in-memory S3 client. Settings and the fake client come from tests/conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from essaypub.fetcher import Fetcher
from essaypub.publisher import Publisher
from essaypub.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from essaypub.config import Settings


@pytest.fixture()
async def app_state(settings: Settings, s3_client: Any) -> AsyncIterator[AppState]:
    async with httpx.AsyncClient() as client:
        yield AppState(
            settings=settings,
            http_client=client,
            fetcher=Fetcher(client, delay_seconds=0),
            publisher=Publisher(
                s3_client,
                bucket=settings.storage.bucket,
                public_base_url=settings.storage.public_base_url,
                delay_seconds=0,
            ),
        )
