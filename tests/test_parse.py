"""
Tests for end-to-end conversion
"""

import pytest

from shortcoder import messages as m
from shortcoder.parser import (
    ParseConfig,
    camelCase,
    closingTagTable,
    escapeAttr,
    kebabCase,
    parse,
    parseShortcodes,
)


class TestParse:
    """Test converting whole documents"""

    def test_no_shortcodes(self):
        assert parse("") == ""
        assert parse("plain <b>html</b> text") == "plain <b>html</b> text"

    def test_brackets_that_are_not_shortcodes(self):
        assert parse("a [ b ] c [] d") == "a [ b ] c [] d"

    def test_simple_pair(self):
        assert parse('[a x="1"]hi[/a]') == '<x-a x="1">hi</x-a>'

    def test_surrounding_text_is_kept(self):
        text = "Intro,\n  [a]body[/a]\n\toutro  "

        assert parse(text) == "Intro,\n  <x-a>body</x-a>\n\toutro  "

    def test_nested(self):
        result = parse('[outer][inner data-id="5"]x[/inner][/outer]')

        assert result == '<x-outer><x-inner dataId="5">x</x-inner></x-outer>'

    def test_self_closing(self):
        assert parse('[img src="a.png"/]') == '<x-img src="a.png" />'
        assert parse("[br /]") == "<x-br />"

    def test_single_quoted_value_becomes_double_quoted(self):
        assert parse("[a title='single']") == '<x-a title="single"></x-a>'

    def test_values_are_escaped(self):
        result = parse("[a t='<b>&\"']x[/a]")

        assert result == '<x-a t="&lt;b&gt;&amp;&quot;">x</x-a>'

    def test_mixed_fancy_quotes(self):
        result = parse("[et_pb_text a=”x″ b=”y″]t[/et_pb_text]")

        assert result == '<x-et-pb-text a="x" b="y">t</x-et-pb-text>'

    def test_identical_tags_with_different_attributes(self):
        result = parse('[a n="1"]x[/a][a n="2"]y[/a]')

        assert result == '<x-a n="1">x</x-a><x-a n="2">y</x-a>'

    def test_unclosed_tags_closed_innermost_first(self, console):
        assert parse("[a][b]x") == "<x-a><x-b>x</x-b></x-a>"

    def test_stray_closing_tag_left_alone(self, console):
        assert parse("[/foo]") == "[/foo]"
        assert parse("[a]x[/a] [/a]") == "<x-a>x</x-a> [/a]"

    def test_mismatched_closing(self, console):
        assert parse("[a][b][/a]") == "<x-a><x-b></x-a></x-a>"

    def test_bytes_input(self):
        assert parse('[a x="é"]'.encode()) == '<x-a x="é"></x-a>'

    def test_legacy_bytes_input(self):
        assert parse(b'[a x="caf\xe9"]y[/a]') == '<x-a x="café">y</x-a>'

    def test_output_is_stable(self, console):
        once = parse('[a b="c"][d/][/a] [e]')

        assert parse(once) == once

    @pytest.mark.parametrize(
        "text",
        ["[", "]", "[/", "[a", "[a]]", "[[a]]", "[a ='']", "[a b=\"]", "[/]", "[a/][/a][/a]"],
    )
    def test_never_raises(self, console, text):
        assert isinstance(parse(text), str)

    def test_lint_locations_use_context(self, console):
        parse("x\n[/foo]", context="page.txt")

        assert "LINT (LINE 2:1 of page.txt)" in console.getvalue()


class TestParseConfig:
    """Test how configuration shapes the output"""

    def test_prefix(self):
        assert parse("[a]x[/a]", ParseConfig(prefix="wp-")) == "<wp-a>x</wp-a>"

    def test_renames(self):
        config = ParseConfig(renames={"et-pb-section": "section"})

        assert parse("[et_pb_section]x[/et_pb_section]", config) == "<x-section>x</x-section>"

    def test_replace_mode_rewrites_stray_closings(self, console):
        config = ParseConfig(substitution="replace")

        assert parse("[a]x[/a] [/a]", config) == "<x-a>x</x-a> </x-a>"

    def test_replace_mode_appends_unclosed(self, console):
        config = ParseConfig(substitution="replace")

        assert parse("[a][b]x", config) == "<x-a><x-b>x</x-b></x-a>"

    def test_modes_agree_on_well_formed_input(self):
        text = '[row][col w="1/2"]a[/col][col w="1/2"]b[/col][/row][br/]'

        assert parse(text) == parse(text, ParseConfig(substitution="replace"))


class TestNames:
    """Test tag and attribute name conversion"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("et_pb_section", "et-pb-section"),
            ("myTag", "my-tag"),
            ("HTMLBlock", "h-t-m-l-block"),
            ("fooBarBaz", "foo-bar-baz"),
            ("already-kebab", "already-kebab"),
            ("Tag2Go", "tag2-go"),
        ],
    )
    def test_kebab_case(self, name, expected):
        assert kebabCase(name) == expected

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("data-id", "dataId"),
            ("link_target", "linkTarget"),
            ("Foo-bar", "fooBar"),
            ("plain", "plain"),
            ("a--b__c", "aBC"),
        ],
    )
    def test_camel_case(self, name, expected):
        assert camelCase(name) == expected

    def test_escape_attr(self):
        assert escapeAttr("Tom & \"Jerry\" <it's>") == "Tom &amp; &quot;Jerry&quot; &lt;it&#039;s&gt;"


class TestClosingTagTable:
    """Test the raw-to-rewritten closing tag table"""

    def test_one_entry_per_raw_closing(self):
        records = parseShortcodes("[a]x[/a][b][/b][a][/a]")

        assert closingTagTable(records) == {"[/a]": "</x-a>", "[/b]": "</x-b>"}

    def test_self_closing_tags_have_no_entry(self):
        assert closingTagTable(parseShortcodes("[br/]")) == {}


class TestReporting:
    """Test lints across separate conversions"""

    def test_each_document_reports_its_own_lints(self, console):
        parse("[/foo]")
        parse("[/foo]")

        assert console.getvalue().count("Saw a closing tag [/foo]") == 2
        assert m.state.seenMessages == set()
