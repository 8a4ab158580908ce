"""Unit tests for template merging and content addressing."""

from __future__ import annotations

import hashlib

from essaypub.merger import content_hash, merge, storage_key
from essaypub.models import Essay

ESSAY = Essay(title="Hello World", html="<p>Hi</p>", slug="hello-world")


class TestMerge:
    def test_body_substituted(self) -> None:
        artifact = merge("<div>HTML_GOES_HERE</div>", ESSAY)
        expected_hash = hashlib.sha256(b"<div><p>Hi</p></div>").hexdigest()[:8]
        assert artifact.content == "<div><p>Hi</p></div>"
        assert artifact.hash8 == expected_hash
        assert artifact.key == f"hello-world-{expected_hash}.html"

    def test_title_substituted(self) -> None:
        artifact = merge("<title>TITLE_GOES_HERE</title><main>HTML_GOES_HERE</main>", ESSAY)
        assert artifact.content == "<title>Hello World</title><main><p>Hi</p></main>"

    def test_only_first_occurrence_replaced(self) -> None:
        artifact = merge("HTML_GOES_HERE|HTML_GOES_HERE|TITLE_GOES_HERE|TITLE_GOES_HERE", ESSAY)
        assert artifact.content == "<p>Hi</p>|HTML_GOES_HERE|Hello World|TITLE_GOES_HERE"

    def test_replacement_inserted_literally(self) -> None:
        essay = Essay(title=r"\1 $&", html=r"<p>\g<0> $1</p>", slug="x")
        artifact = merge("TITLE_GOES_HERE:HTML_GOES_HERE", essay)
        assert artifact.content == r"\1 $&:<p>\g<0> $1</p>"

    def test_template_without_placeholders_unchanged(self) -> None:
        assert merge("<div>static</div>", ESSAY).content == "<div>static</div>"

    def test_empty_template(self) -> None:
        artifact = merge("", ESSAY)
        assert artifact.content == ""
        assert artifact.hash8 == "e3b0c442"

    def test_custom_placeholders(self) -> None:
        artifact = merge(
            "<h1>{{title}}</h1>{{body}}",
            ESSAY,
            body_placeholder="{{body}}",
            title_placeholder="{{title}}",
        )
        assert artifact.content == "<h1>Hello World</h1><p>Hi</p>"

    def test_deterministic(self) -> None:
        first = merge("<div>TITLE_GOES_HERE HTML_GOES_HERE</div>", ESSAY)
        second = merge("<div>TITLE_GOES_HERE HTML_GOES_HERE</div>", ESSAY)
        assert first == second

    def test_hash_sensitive_to_one_character(self) -> None:
        changed = Essay(title="Hello World", html="<p>Ho</p>", slug="hello-world")
        assert merge("HTML_GOES_HERE", ESSAY).key != merge("HTML_GOES_HERE", changed).key


class TestContentAddressing:
    def test_hash_is_eight_hex_chars(self) -> None:
        digest = content_hash("<p>anything</p>")
        assert len(digest) == 8
        int(digest, 16)

    def test_hash_over_utf8_bytes(self) -> None:
        assert content_hash("é") == hashlib.sha256("é".encode()).hexdigest()[:8]

    def test_storage_key(self) -> None:
        assert storage_key("my-essay", "0badc0de") == "my-essay-0badc0de.html"
