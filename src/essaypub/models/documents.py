from __future__ import annotations

from pydantic import BaseModel


class RemoteDocument(BaseModel):
    """Raw HTML of a fetched URL. Lives only for the duration of one run."""

    url: str
    body: str


class Essay(BaseModel):
    """Essay content extracted from a published document."""

    title: str
    html: str  # Cleaned body markup
    slug: str  # Title lowercased, whitespace runs collapsed to "-"
