"""
Tests for the command-line interface
"""

import json

import pytest

from shortcoder import cli


class TestConvert:
    """Test the convert subcommand"""

    def test_convert_to_file(self, console, tmp_path):
        infile = tmp_path / "page.txt"
        outfile = tmp_path / "out.html"
        infile.write_text('[a x="1"]hi[/a]\n', encoding="utf-8")

        cli.main(["--print", "plain", "convert", str(infile), str(outfile)])

        assert outfile.read_text(encoding="utf-8") == '<x-a x="1">hi</x-a>\n'
        assert "Successfully converted" in console.getvalue()

    def test_default_output_name(self, console, tmp_path):
        infile = tmp_path / "page.txt"
        infile.write_text("[br/]", encoding="utf-8")

        cli.main(["convert", str(infile)])

        assert (tmp_path / "page.html").read_text(encoding="utf-8") == "<x-br />"

    def test_convert_to_stdout(self, console, capsys, tmp_path):
        infile = tmp_path / "page.txt"
        infile.write_text("[a]x[/a]", encoding="utf-8")

        cli.main(["convert", str(infile), "-"])

        assert capsys.readouterr().out == "<x-a>x</x-a>"

    def test_config_and_substitution(self, console, tmp_path):
        infile = tmp_path / "page.txt"
        outfile = tmp_path / "out.html"
        configFile = tmp_path / "tags.kdl"
        infile.write_text("[et_pb_section]x[/et_pb_section] [/et_pb_section]", encoding="utf-8")
        configFile.write_text('rename "et-pb-section" "section"\n', encoding="utf-8")

        cli.main(["--config", str(configFile), "convert", str(infile), str(outfile), "--substitution", "replace"])

        assert outfile.read_text(encoding="utf-8") == "<x-section>x</x-section> </x-section>"

    def test_die_on_lint(self, console, tmp_path):
        infile = tmp_path / "page.txt"
        outfile = tmp_path / "out.html"
        infile.write_text("[a]x", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--print", "plain", "--die-on", "lint", "convert", str(infile), str(outfile)])

        assert excinfo.value.code == 2
        assert not outfile.exists()
        assert "Did not convert" in console.getvalue()

    def test_missing_input(self, console, tmp_path):
        with pytest.raises(SystemExit):
            cli.main(["--print", "plain", "convert", str(tmp_path / "nope.txt")])

        assert "Couldn't read the input" in console.getvalue()


class TestOtherCommands:
    """Test debug and template"""

    def test_debug_records_as_json(self, console, capsys, tmp_path):
        infile = tmp_path / "page.txt"
        infile.write_text('[a x="1"]hi[/a][br/]', encoding="utf-8")

        cli.main(["--print", "json", "debug", str(infile), "--print-records"])

        records = json.loads(capsys.readouterr().out)
        assert [r["tag"] for r in records] == ["a", "br"]
        assert records[0]["attributes"] == {"x": "1"}
        assert records[0]["closingTag"]["position"] == 11
        assert records[1]["closingTag"] is None

    def test_debug_table(self, console, capsys, tmp_path):
        infile = tmp_path / "page.txt"
        infile.write_text("[a]hi[/a]", encoding="utf-8")

        cli.main(["--print", "plain", "debug", str(infile), "--print-table"])

        assert capsys.readouterr().out == '[/a]: "</x-a>"\n'

    def test_template(self, console, capsys):
        cli.main(["template"])

        out = capsys.readouterr().out
        assert 'prefix "x-"' in out
        assert "self-closing" in out
