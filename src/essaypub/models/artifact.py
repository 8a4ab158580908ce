from __future__ import annotations

from pydantic import BaseModel


class MergedArtifact(BaseModel):
    """Template with the essay interpolated, ready for upload."""

    content: str
    hash8: str  # First 8 hex chars of SHA-256 over the UTF-8 content
    key: str  # "{slug}-{hash8}.html"


class PublishResult(BaseModel):
    artifact: MergedArtifact
    url: str
    uploaded: bool = True  # False for dry runs
