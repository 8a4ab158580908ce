"""End-to-end publish run: fan out two loads, merge, upload."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from essaypub.errors import MalformedDocument
from essaypub.extractor import extract_essay, extract_template
from essaypub.merger import merge
from essaypub.models import PublishResult
from essaypub.publisher import build_public_url

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from essaypub.config import ExtractionSettings
    from essaypub.models import Essay
    from essaypub.protocols import FetcherProtocol
    from essaypub.state import AppState

log = structlog.get_logger()


async def join(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and return their results in argument order.

    The first failure propagates immediately. Operations still in flight are
    not cancelled; they run to completion and their results are dropped.
    """
    return list(await asyncio.gather(*aws))


async def load_template(fetcher: FetcherProtocol, url: str) -> str:
    document = await fetcher.fetch_document(url)
    template = extract_template(document.body)
    if not template:
        log.warning("template_sentinel_missing", url=url)
    return template


async def load_essay(
    fetcher: FetcherProtocol,
    url: str,
    settings: ExtractionSettings,
) -> Essay:
    document = await fetcher.fetch_document(url)
    try:
        essay = extract_essay(
            document.body,
            header_id=settings.header_id,
            footer_id=settings.footer_id,
        )
    except MalformedDocument as exc:
        log.error("essay_extract_failed", url=url, error=exc.message)
        raise
    log.info("essay_extracted", url=url, title=essay.title, slug=essay.slug)
    return essay


async def publish_essay(
    state: AppState,
    *,
    essay_url: str,
    template_url: str,
    dry_run: bool = False,
) -> PublishResult:
    """Fetch the essay and template, merge them and upload the result.

    With ``dry_run`` nothing is written; the result carries the URL the
    artifact would have been published at.
    """
    if state.fetcher is None:
        raise RuntimeError("AppState.fetcher must be set before publishing")

    extraction = state.settings.extraction
    essay, template = await join(
        load_essay(state.fetcher, essay_url, extraction),
        load_template(state.fetcher, template_url),
    )

    artifact = merge(
        template,
        essay,
        body_placeholder=extraction.body_placeholder,
        title_placeholder=extraction.title_placeholder,
    )
    log.info("artifact_merged", key=artifact.key, size=len(artifact.content))

    if dry_run:
        storage = state.settings.storage
        url = build_public_url(storage.public_base_url, storage.bucket, artifact.key)
        log.info("publish_skipped", reason="dry_run", key=artifact.key)
        return PublishResult(artifact=artifact, url=url, uploaded=False)

    if state.publisher is None:
        raise RuntimeError("AppState.publisher must be set before publishing")

    url = await state.publisher.publish(artifact.key, artifact.content)
    return PublishResult(artifact=artifact, url=url)
