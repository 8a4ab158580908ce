"""HTTP document fetcher with bounded retry.

All network reads go through a single Fetcher instance per run. The Fetcher
receives an httpx.AsyncClient via constructor injection; the caller owns the
client lifecycle.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import httpx
import structlog

from essaypub.errors import TransportError
from essaypub.models import RemoteDocument
from essaypub.retry import retry_async

if TYPE_CHECKING:
    from essaypub.config import HttpSettings

log = structlog.get_logger()

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 0.01

# ".../edit", ".../edit?usp=sharing", ".../edit#heading=h.x"
_EDIT_SUFFIX_RE = re.compile(r"/edit(?:[?#].*)?$")


def build_http_client(settings: HttpSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once per run."""
    timeout = settings.timeout_seconds if settings is not None else 30.0
    user_agent = settings.user_agent if settings is not None else "essaypub/1.0"
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": user_agent},
    )


def normalize_document_url(url: str) -> str:
    """Turn a document-edit URL into its published-view URL.

    ``https://docs.google.com/document/d/<id>/edit?usp=sharing`` becomes
    ``https://docs.google.com/document/d/<id>/pub``. URLs without a trailing
    edit segment are returned unchanged.
    """
    url = url.strip()
    return _EDIT_SUFFIX_RE.sub("/pub", url)


class Fetcher:
    """Fetches HTML documents, retrying any failure a fixed number of times."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._max_retries = max_retries
        self._delay_seconds = delay_seconds

    async def fetch(self, url: str) -> str:
        """Fetch a URL and return its body text.

        Only HTTP 200 counts as success. Raises TransportError once the
        initial attempt and every retry have failed; the error is the one
        raised by the last attempt.
        """
        return await retry_async(
            lambda: self._fetch_once(url),
            event="fetch",
            max_retries=self._max_retries,
            delay_seconds=self._delay_seconds,
            retry_on=TransportError,
            url=url,
        )

    async def fetch_document(self, url: str) -> RemoteDocument:
        return RemoteDocument(url=url, body=await self.fetch(url))

    async def _fetch_once(self, url: str) -> str:
        log.info("fetch_started", url=url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error fetching {url}: {exc}") from exc

        if response.status_code != 200:
            raise TransportError(f"HTTP {response.status_code} fetching {url}")

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
