"""Command-line entrypoint.

Responsibilities (and nothing more):
- Parse arguments and load Settings
- Configure structlog
- Build the run's AppState (http client, fetcher, publisher)
- Print the public URL to stdout, and map failures to exit status 1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import structlog

from essaypub import __version__
from essaypub.config import Settings
from essaypub.errors import EssayPubError, UsageError
from essaypub.fetcher import Fetcher, build_http_client, normalize_document_url
from essaypub.models import PublishResult
from essaypub.pipeline import publish_essay
from essaypub.publisher import Publisher, build_s3_client
from essaypub.state import AppState

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout carries only the published URL
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="essaypub",
        description="Merge a published essay into an HTML template and upload it.",
    )
    parser.add_argument(
        "essay_url",
        nargs="?",
        help="Essay document URL. Document-edit links are converted to their published view.",
    )
    parser.add_argument("--template-url", help="Template document URL (overrides config).")
    parser.add_argument(
        "--require-url",
        action="store_true",
        help="Fail with a usage error instead of using the configured default essay URL.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and merge, print the would-be URL, but do not upload.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_essay_url(argument: str | None, settings: Settings, *, require: bool) -> str:
    """Pick the essay URL for this run.

    Raises UsageError when no argument was given and one is required.
    """
    if argument:
        return normalize_document_url(argument)
    if require or settings.sources.require_essay_url:
        raise UsageError("No essay URL given")
    return settings.sources.essay_url


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(
    settings: Settings,
    *,
    essay_url: str,
    template_url: str,
    dry_run: bool = False,
) -> PublishResult:
    """Build the run's collaborators and execute one publish."""
    state = AppState(settings=settings)
    delay_seconds = settings.retry.delay_ms / 1000

    async with build_http_client(settings.http) as client:
        state.http_client = client
        state.fetcher = Fetcher(
            client,
            max_retries=settings.retry.max_retries,
            delay_seconds=delay_seconds,
        )
        if not dry_run:
            state.publisher = Publisher(
                build_s3_client(settings.storage),
                bucket=settings.storage.bucket,
                public_base_url=settings.storage.public_base_url,
                max_retries=settings.retry.max_retries,
                delay_seconds=delay_seconds,
            )

        with structlog.contextvars.bound_contextvars(essay_url=essay_url):
            return await publish_essay(
                state,
                essay_url=essay_url,
                template_url=template_url,
                dry_run=dry_run,
            )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    _setup_logging(settings)

    try:
        essay_url = resolve_essay_url(args.essay_url, settings, require=args.require_url)
        result = asyncio.run(
            run(
                settings,
                essay_url=essay_url,
                template_url=args.template_url or settings.sources.template_url,
                dry_run=args.dry_run,
            )
        )
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc.message}", file=sys.stderr)
        sys.exit(1)
    except EssayPubError as exc:
        log.error(
            "run_failed",
            code=exc.code,
            message=exc.message,
            suggestion=exc.suggestion,
        )
        sys.exit(1)
    except Exception:
        log.error("run_unexpected_error", exc_info=True)
        raise

    print(result.url)


if __name__ == "__main__":
    main()
