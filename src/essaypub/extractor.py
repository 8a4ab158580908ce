"""Fragment extraction from fetched HTML documents.

Two independent modes:

- Template mode pulls the HTML fragment a template author wrote between two
  ``@@@@`` sentinels. The fragment is authored as visible text in a published
  document, so it is searched for in the plain-text rendering, not the markup.
- Essay mode reads the title and the cleaned body markup of an essay document.

Body cleanup is done on the parsed tree: anchors are retargeted, scripts and
the header/footer containers are removed whole, nested children included.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Script, Stylesheet, TemplateString

from essaypub.errors import MalformedDocument
from essaypub.models import Essay

NBSP = "\u00a0"
SENTINEL = "@@@@"

_SENTINEL_RE = re.compile(rf"{SENTINEL}(.+){SENTINEL}")
_WHITESPACE_RUN_RE = re.compile(r"\s+")

# Script, style and template contents count as document text too
_TEXT_TYPES = (NavigableString, Script, Stylesheet, TemplateString)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def render_text(html: str) -> str:
    """Return the tag-stripped text content of an HTML document."""
    return _parse(html).get_text(types=_TEXT_TYPES)


def extract_template(html: str) -> str:
    """Return the text between the first pair of ``@@@@`` sentinels.

    Non-breaking spaces are normalised to plain spaces, both as raw characters
    and as ``&nbsp;`` entities decoded during rendering. Returns an empty
    string when the document contains no sentinel pair.
    """
    text = render_text(html.replace(NBSP, " ")).replace(NBSP, " ")
    match = _SENTINEL_RE.search(text)
    if match is None:
        return ""
    return match.group(1)


def slugify(title: str) -> str:
    """``'My Essay Title'`` → ``'my-essay-title'``."""
    return _WHITESPACE_RUN_RE.sub("-", title.lower())


def extract_essay(
    html: str,
    *,
    header_id: str = "header",
    footer_id: str = "footer",
) -> Essay:
    """Extract title, cleaned body markup and slug from an essay document.

    A missing ``<body>`` tag is implied by the parser. Raises MalformedDocument
    if the document has no ``<title>`` or no body content.
    """
    soup = _parse(html)

    title_tag = soup.title
    if title_tag is None:
        raise MalformedDocument("Essay document has no <title> element")
    body = soup.body
    if body is None or not body.contents:
        raise MalformedDocument("Essay document has no <body> content")

    for anchor in body.find_all("a"):
        anchor["target"] = "_blank"

    for script in body.find_all("script"):
        script.decompose()

    for container_id in (header_id, footer_id):
        container = body.find(id=container_id)
        if container is not None:
            container.decompose()

    title = title_tag.get_text()
    return Essay(title=title, html=body.decode_contents(), slug=slugify(title))
