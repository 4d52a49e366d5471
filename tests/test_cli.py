"""
Tests for CLI interface.
"""

import json

import pytest
from click.testing import CliRunner

from stream2lines.cli.main import cli


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


class TestCLI:
    """Tests for CLI commands."""

    def test_cli_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_cli_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "stream2lines - split byte streams into lines" in result.output
        assert "split" in result.output
        assert "count" in result.output

    def test_split_help(self, runner):
        """Test split --help."""
        result = runner.invoke(cli, ["split", "--help"])
        assert result.exit_code == 0
        assert "--encoding" in result.output
        assert "--eol" in result.output
        assert "--max-line-length" in result.output

    def test_encodings_command(self, runner):
        """Test encodings command."""
        result = runner.invoke(cli, ["encodings"])
        assert result.exit_code == 0
        assert "utf16le" in result.output
        assert "iso8859" in result.output


class TestSplitCommand:
    """Tests for split command."""

    def test_split_file(self, runner, temp_text_file, sample_lines):
        """Test splitting an LF file."""
        result = runner.invoke(cli, ["split", "--eol", "lf", str(temp_text_file)])
        assert result.exit_code == 0
        assert result.output == "\n".join(sample_lines) + "\n"

    def test_split_crlf(self, runner, tmp_path):
        """Test that crlf leaves lone LFs inside lines."""
        path = tmp_path / "mail.eml"
        path.write_bytes(b"Subject: hi\r\nbody\nstill body\r\n")

        result = runner.invoke(cli, ["split", "--eol", "dos", "--output", "json", str(path)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == [
            {"line": 1, "text": "Subject: hi"},
            {"line": 2, "text": "body\nstill body"},
        ]

    def test_split_numbered(self, runner, temp_text_file):
        """Test --number prefixes line numbers."""
        result = runner.invoke(cli, ["split", "-n", str(temp_text_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[1].split(None, 1) == ["2", "ERROR: Something went wrong!"]

    def test_split_latin1(self, runner, tmp_path):
        """Test NEL splitting under latin1."""
        path = tmp_path / "legacy.txt"
        path.write_bytes(b"caf\xe9\x85bar")

        result = runner.invoke(cli, ["split", "--encoding", "latin1", str(path)])
        assert result.exit_code == 0
        assert result.output == "café\nbar\n"

    def test_split_table_output(self, runner, temp_text_file):
        """Test table output."""
        result = runner.invoke(cli, ["split", "--output", "table", str(temp_text_file)])
        assert result.exit_code == 0
        assert "Total: 5 lines" in result.output

    def test_line_too_long(self, runner, tmp_path):
        """Test that an overlong line fails the command."""
        path = tmp_path / "long.txt"
        path.write_text("ok\ntoo long\n")

        result = runner.invoke(cli, ["split", "--max-line-length", "3", str(path)])
        assert result.exit_code == 1
        assert "Maximum line length exceeded" in result.output

    def test_invalid_eol_for_encoding(self, runner, temp_text_file):
        """Test that a dialect above the encoding's level is rejected."""
        result = runner.invoke(
            cli, ["split", "--encoding", "ascii", "--eol", "all", str(temp_text_file)]
        )
        assert result.exit_code == 1
        assert "Invalid EOL match type" in result.output

    def test_nonexistent_file(self, runner):
        """Test handling of nonexistent file."""
        result = runner.invoke(cli, ["split", "/nonexistent/file.txt"])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestCountCommand:
    """Tests for count command."""

    def test_count_file(self, runner, temp_text_file, sample_lines):
        """Test counting lines."""
        result = runner.invoke(cli, ["count", str(temp_text_file)])
        assert result.exit_code == 0
        assert result.output.strip() == str(len(sample_lines))

    def test_count_unterminated(self, runner, tmp_path):
        """Test that a final unterminated line is counted."""
        path = tmp_path / "three.txt"
        path.write_bytes(b"a\r\nb\rc")

        result = runner.invoke(cli, ["count", "--eol", "basic", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == "3"
