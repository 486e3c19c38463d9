"""
Tests for loading conversion settings from KDL
"""

from shortcoder.parser import ParseConfig


class TestFromKdl:
    """Test reading a KDL config"""

    def test_all_nodes(self, console):
        config = ParseConfig.fromKdlStr(
            """
            prefix "wp-"
            self-closing "br" "hr"
            self-closing "et_pb_divider"
            self-close-empty
            rename "et-pb-section" "section"
            substitution "replace"
            """,
        )

        assert config.prefix == "wp-"
        assert config.selfClosingTags == {"br", "hr", "et_pb_divider"}
        assert config.selfCloseEmpty is True
        assert config.renames == {"et-pb-section": "section"}
        assert config.substitution == "replace"
        assert console.getvalue() == ""

    def test_empty_config_is_the_default(self, console):
        assert ParseConfig.fromKdlStr("") == ParseConfig()

    def test_self_close_empty_can_be_turned_off(self, console):
        config = ParseConfig.fromKdlStr('self-close-empty "no"')

        assert config.selfCloseEmpty is False

    def test_unknown_node_warns(self, console):
        config = ParseConfig.fromKdlStr("frobnicate 1", source="tags.kdl")

        assert config == ParseConfig()
        assert "WARNING: Unknown node 'frobnicate' in tags.kdl" in console.getvalue()

    def test_bad_rename_warns(self, console):
        config = ParseConfig.fromKdlStr('rename "only-one"')

        assert config.renames == {}
        assert "needs exactly two arguments" in console.getvalue()

    def test_bad_substitution_warns(self, console):
        config = ParseConfig.fromKdlStr('substitution "bogus"')

        assert config.substitution == "offsets"
        assert "Unknown substitution mode 'bogus'" in console.getvalue()
        assert "'offsets' or 'replace'" in console.getvalue()

    def test_invalid_kdl_is_fatal(self, console):
        config = ParseConfig.fromKdlStr('prefix "never closed', source="tags.kdl")

        assert config == ParseConfig()
        assert "FATAL ERROR: Couldn't parse the tags.kdl file as KDL" in console.getvalue()


class TestFromPath:
    """Test reading a KDL config from disk"""

    def test_reads_file(self, console, tmp_path):
        path = tmp_path / "tags.kdl"
        path.write_text('rename "et-pb-row" "row"\n', encoding="utf-8")

        config = ParseConfig.fromPath(str(path))

        assert config.renames == {"et-pb-row": "row"}

    def test_missing_file_is_fatal(self, console, tmp_path):
        config = ParseConfig.fromPath(str(tmp_path / "nope.kdl"))

        assert config == ParseConfig()
        assert "Couldn't read the config file" in console.getvalue()


class TestConfigHelpers:
    """Test the small lookups the converter uses"""

    def test_component_name(self):
        config = ParseConfig(prefix="wp-", renames={"et-pb-section": "section"})

        assert config.componentName("et-pb-section") == "wp-section"
        assert config.componentName("et-pb-row") == "wp-et-pb-row"

    def test_replace_returns_a_copy(self):
        config = ParseConfig()
        other = config.replace(substitution="replace")

        assert config.substitution == "offsets"
        assert other.substitution == "replace"
