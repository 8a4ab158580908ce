"""Merge an extracted essay into a template fragment.

Pure functions: no I/O, identical inputs always give byte-identical content
and the same storage key.
"""

from __future__ import annotations

import hashlib

from essaypub.models import Essay, MergedArtifact

BODY_PLACEHOLDER = "HTML_GOES_HERE"
TITLE_PLACEHOLDER = "TITLE_GOES_HERE"
HASH_LENGTH = 8


def content_hash(content: str) -> str:
    """First 8 hex characters of the SHA-256 of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def storage_key(slug: str, hash8: str) -> str:
    return f"{slug}-{hash8}.html"


def merge(
    template: str,
    essay: Essay,
    *,
    body_placeholder: str = BODY_PLACEHOLDER,
    title_placeholder: str = TITLE_PLACEHOLDER,
) -> MergedArtifact:
    """Substitute the essay body, then its title, into the template.

    Only the first occurrence of each placeholder is replaced, and the
    replacement text is inserted literally. The title is substituted after
    the body, so a title placeholder carried in by the essay body itself is
    filled as well.
    """
    content = template.replace(body_placeholder, essay.html, 1)
    content = content.replace(title_placeholder, essay.title, 1)
    hash8 = content_hash(content)
    return MergedArtifact(content=content, hash8=hash8, key=storage_key(essay.slug, hash8))
