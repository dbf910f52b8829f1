"""Tests for the Typer CLI."""
from typer.testing import CliRunner

from chatscope.cli.app import app

runner = CliRunner()


class TestDecodeCommand:
    """Tests for ``chatscope decode``."""

    def test_decode_source_quote(self):
        result = runner.invoke(
            app,
            ["decode", "language-type:Quoted,lang:rust,path:src/main.rs,lines:10-20", "fn main() {}"],
        )

        assert result.exit_code == 0
        assert "source_quote" in result.stdout
        assert "src/main.rs" in result.stdout

    def test_decode_file_chip(self):
        result = runner.invoke(
            app,
            ["decode", "language-type:Quoted path:a.py, lines:5", "x", "--hide-code"],
        )

        assert result.exit_code == 0
        assert "file_chip" in result.stdout
        assert "4_4" in result.stdout

    def test_decode_color(self):
        result = runner.invoke(app, ["decode", "", "#FFF", "--inline"])

        assert result.exit_code == 0
        assert "color_swatch" in result.stdout


class TestTurnsCommand:
    """Tests for ``chatscope turns``."""

    def test_lists_turns(self, sample_transcript_file):
        result = runner.invoke(app, ["turns", str(sample_transcript_file)])

        assert result.exit_code == 0
        assert "server" in result.stdout
        assert "user" in result.stdout

    def test_invalid_transcript_exits_nonzero(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('[{"author": "server", "text": "no id"}]')

        result = runner.invoke(app, ["turns", str(bad)])

        assert result.exit_code == 1


class TestBlocksCommand:
    """Tests for ``chatscope blocks``."""

    def test_lists_code_blocks(self, tmp_path, sample_answer):
        answer = tmp_path / "answer.md"
        answer.write_text(sample_answer)

        result = runner.invoke(app, ["blocks", str(answer), "--hide-code"])

        assert result.exit_code == 0
        assert "file_chip" in result.stdout
        assert "syntax_block" in result.stdout
