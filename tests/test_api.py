"""Tests for the public API: parse, render and Wikitext."""

import enlaces
from enlaces import Wikitext, parse, render
from enlaces.nodes import Document, SoftBreak, Text, WikiLink


class TestParse:
    def test_returns_document(self) -> None:
        doc = parse("See [[Home]]")
        assert isinstance(doc, Document)
        assert [type(n) for n in doc.children] == [Text, WikiLink]

    def test_document_location_covers_source(self) -> None:
        source = "one\ntwo [[x]]"
        doc = parse(source)
        assert doc.location.offset == 0
        assert doc.location.end_offset == len(source)
        assert (doc.location.end_lineno, doc.location.end_col_offset) == (2, 10)

    def test_source_file_recorded(self) -> None:
        doc = parse("[[Home]]", source_file="index.md")
        assert doc.location.source_file == "index.md"
        assert doc.children[0].location.source_file == "index.md"
        assert str(doc.children[0].location) == "index.md:1:1"

    def test_without_extensions(self) -> None:
        doc = parse("[[Home]]", extensions=[])
        assert len(doc.children) == 1
        assert doc.children[0].content == "[[Home]]"

    def test_empty_source(self) -> None:
        doc = parse("")
        assert doc.children == ()


class TestRender:
    def test_render(self) -> None:
        assert render(parse("[[Foo|bar]]")) == '<a href="bar">Foo</a>'

    def test_text_is_escaped(self) -> None:
        assert render(parse("a < b & [[c]]")) == 'a &lt; b &amp; <a href="c">c</a>'

    def test_escape_links(self) -> None:
        assert render(parse("[[<i>|a&b]]"), escape_links=True) == '<a href="a&amp;b">&lt;i&gt;</a>'

    def test_soft_breaks(self) -> None:
        doc = parse("a\n[[b]]")
        assert isinstance(doc.children[1], SoftBreak)
        assert render(doc) == 'a\n<a href="b">b</a>'


class TestWikitext:
    def test_call(self) -> None:
        md = Wikitext()
        assert md("[[Foo]]") == '<a href="Foo">Foo</a>'

    def test_parse_then_render(self) -> None:
        md = Wikitext()
        doc = md.parse("x [[Foo]]")
        assert md.render(doc) == 'x <a href="Foo">Foo</a>'

    def test_parse_many(self) -> None:
        docs = Wikitext().parse_many(["[[One]]", "two", "[[Three|3]]"])
        assert [type(d.children[0]) for d in docs] == [WikiLink, Text, WikiLink]
        assert docs[2].children[0].target == "3"

    def test_all_extensions(self) -> None:
        md = Wikitext(extensions=["all"])
        assert [ext.name for ext in md.config.extensions] == ["wikilink"]

    def test_disabled(self) -> None:
        assert Wikitext(extensions=[])("[[Foo]]") == "[[Foo]]"

    def test_escape_links(self) -> None:
        assert Wikitext(escape_links=True)("[[a<b]]") == '<a href="a&lt;b">a&lt;b</a>'


def test_public_names_resolve() -> None:
    for name in enlaces.__all__:
        assert hasattr(enlaces, name), name
