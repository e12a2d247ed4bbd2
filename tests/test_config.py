"""Tests for ContextVar-based parse configuration.

Validates thread isolation, context manager behavior and how the
configured extensions reach the parser.
"""

from threading import Thread

import pytest

from enlaces import (
    ParseConfig,
    Parser,
    Wikitext,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from enlaces.extensions.wikilink import create_wikilink_extension
from enlaces.nodes import NodeType, Text, WikiLink


class TestParseConfigDataclass:
    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.extensions == ()
        assert config.text_transformer is None

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.extensions = ()  # type: ignore[misc]

    def test_dispatch_table(self) -> None:
        ext = create_wikilink_extension()
        assert ParseConfig(extensions=(ext,)).dispatch_table() == {"[": (ext,)}

    def test_extension_for(self) -> None:
        ext = create_wikilink_extension()
        config = ParseConfig(extensions=(ext,))
        assert config.extension_for(ext.node_type) is ext
        assert config.extension_for(NodeType.TEXT) is None


class TestFromDict:
    def test_resolves_extension_names(self) -> None:
        config = ParseConfig.from_dict({"extensions": ["wikilink"]})
        assert [ext.name for ext in config.extensions] == ["wikilink"]

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"unknown_key": True, "tables_enabled": True})
        assert config == ParseConfig()

    def test_unknown_extension(self) -> None:
        with pytest.raises(KeyError):
            ParseConfig.from_dict({"extensions": ["tables"]})


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_reset(self) -> None:
        config = ParseConfig.from_dict({"extensions": ["wikilink"]})
        set_parse_config(config)
        assert get_parse_config() is config
        reset_parse_config()
        assert get_parse_config().extensions == ()

    def test_context_manager_restores_previous(self) -> None:
        outer = ParseConfig(text_transformer=str.lower)
        inner = ParseConfig.from_dict({"extensions": ["wikilink"]})
        set_parse_config(outer)
        with parse_config_context(inner):
            assert get_parse_config() is inner
        assert get_parse_config() is outer

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig.from_dict({"extensions": ["wikilink"]})):
                raise RuntimeError("boom")
        assert get_parse_config() == ParseConfig()

    def test_thread_sees_default(self) -> None:
        set_parse_config(ParseConfig.from_dict({"extensions": ["wikilink"]}))
        seen: list[ParseConfig] = []
        thread = Thread(target=lambda: seen.append(get_parse_config()))
        thread.start()
        thread.join()
        assert seen == [ParseConfig()]


class TestParserReadsConfig:
    def test_no_extensions_by_default(self) -> None:
        doc = Parser("[[Foo]]").parse()
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Text)

    def test_configured_extensions(self) -> None:
        with parse_config_context(ParseConfig.from_dict({"extensions": ["wikilink"]})):
            doc = Parser("[[Foo]]").parse()
        assert isinstance(doc.children[0], WikiLink)

    def test_text_transformer(self) -> None:
        md = Wikitext(text_transformer=str.upper)
        assert md("[[foo]] x") == '<a href="FOO">FOO</a> X'

    def test_text_transformer_runs_once_before_scanning(self) -> None:
        calls: list[str] = []

        def shout(source: str) -> str:
            calls.append(source)
            return source + "!"

        assert Wikitext(text_transformer=shout)("[[a]]") == '<a href="a">a</a>!'
        assert calls == ["[[a]]"]

    def test_wikitext_resets_config(self) -> None:
        Wikitext().parse("[[Foo]]")
        assert get_parse_config() == ParseConfig()
