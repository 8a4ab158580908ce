"""Protocol interfaces for swappable components.

The pipeline and AppState reference these protocols, not the concrete
implementations. Tests use lightweight in-memory implementations, most
importantly for the storage client, so no test needs AWS credentials.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from essaypub.models import RemoteDocument


class FetcherProtocol(Protocol):
    """Interface for the HTTP document fetcher."""

    async def fetch(self, url: str) -> str: ...

    async def fetch_document(self, url: str) -> RemoteDocument: ...


class StorageClientProtocol(Protocol):
    """The subset of the boto3 S3 client the publisher calls."""

    def put_object(self, **kwargs: Any) -> dict[str, Any]: ...


class PublisherProtocol(Protocol):
    """Interface for the object-storage publisher."""

    def public_url(self, key: str) -> str: ...

    async def publish(self, key: str, content: str) -> str: ...
