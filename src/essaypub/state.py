"""Run state container.

AppState is created once per run by the CLI and passed to the pipeline.
Collaborators are attached after construction: the fetcher always, the
publisher only when the run will actually upload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from essaypub.config import Settings
    from essaypub.protocols import FetcherProtocol, PublisherProtocol


@dataclass
class AppState:
    """Holds the settings and I/O collaborators of one publish run."""

    settings: Settings

    http_client: httpx.AsyncClient | None = None
    fetcher: FetcherProtocol | None = None
    publisher: PublisherProtocol | None = None
