from __future__ import annotations

from essaypub.models.artifact import MergedArtifact, PublishResult
from essaypub.models.documents import Essay, RemoteDocument

__all__ = [
    # documents
    "RemoteDocument",
    "Essay",
    # artifact
    "MergedArtifact",
    "PublishResult",
]
