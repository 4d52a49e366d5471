"""
Tests for the boundary scanner.
"""

import pytest

from stream2lines.core.models import EolMatch, LineMatch
from stream2lines.domain.scanner import scan

LS = chr(0x2028)
PS = chr(0x2029)
NEL = chr(0x85)


class TestScanBasics:
    """Tests common to every dialect."""

    @pytest.mark.parametrize("dialect", list(EolMatch))
    def test_empty_window(self, dialect):
        """An empty window is a trivial zero-length match."""
        assert scan("", dialect) == LineMatch("", "", "")

    @pytest.mark.parametrize("dialect", list(EolMatch))
    def test_unterminated_window(self, dialect):
        """Text without a terminator is matched whole."""
        found = scan("no end here", dialect)
        assert found.whole_match == "no end here"
        assert found.content == "no end here"
        assert found.terminator == ""
        assert found.ends_ambiguously

    @pytest.mark.parametrize(
        "dialect", [d for d in EolMatch if d is not EolMatch.LF]
    )
    def test_crlf_everywhere(self, dialect):
        """\\r\\n terminates a line in every dialect that knows \\r."""
        found = scan("foo\r\nbar", dialect)
        assert found.content == "foo"
        assert found.terminator == "\r\n"
        assert found.whole_match == "foo\r\n"

    def test_start_offset(self):
        """Scanning starts at pos."""
        found = scan("foo\nbar\nbaz", EolMatch.LF, pos=4)
        assert found.content == "bar"
        assert found.whole_match == "bar\n"

    def test_empty_line(self):
        """A bare terminator is an empty line."""
        found = scan("\nrest", EolMatch.LF)
        assert found.content == ""
        assert found.terminator == "\n"


class TestDialects:
    """Tests for what each dialect treats as a terminator."""

    def test_crlf_keeps_lone_cr_and_lf(self):
        """crlf only splits on \\r\\n."""
        found = scan("a\rb\nc\r\nd", EolMatch.CRLF)
        assert found.content == "a\rb\nc"
        assert found.terminator == "\r\n"

    def test_crlf_trailing_cr_is_content(self):
        """A lone trailing \\r is still content under crlf."""
        found = scan("abc\r", EolMatch.CRLF)
        assert found.content == "abc\r"
        assert found.terminator == ""

    def test_lf_keeps_cr_of_crlf(self):
        """lf leaves the \\r of a \\r\\n in the content."""
        found = scan("foo\r\nbar", EolMatch.LF)
        assert found.content == "foo\r"
        assert found.terminator == "\n"

    def test_lf_ignores_cr(self):
        """lf keeps \\r in the content."""
        found = scan("a\rb\r\nc", EolMatch.LF)
        assert found.content == "a\rb\r"
        assert found.terminator == "\n"

    def test_basic_lone_cr(self):
        """basic splits on a lone \\r and flags it as ambiguous at the end."""
        found = scan("abc\r", EolMatch.BASIC)
        assert found.content == "abc"
        assert found.terminator == "\r"
        assert found.ends_ambiguously

    def test_basic_ignores_form_feed(self):
        """basic does not split on form feed."""
        assert scan("a\x0cb\n", EolMatch.BASIC).content == "a\x0cb"

    @pytest.mark.parametrize("terminator", ["\x0c", "\x0b"])
    def test_7bit_adds_ff_vt(self, terminator):
        """7bit splits on form feed and vertical tab."""
        found = scan(f"a{terminator}b", EolMatch.SEVEN_BIT)
        assert found.content == "a"
        assert found.terminator == terminator

    def test_7bit_ignores_nel(self):
        """7bit does not split on NEL."""
        assert scan(f"a{NEL}b", EolMatch.SEVEN_BIT).terminator == ""

    def test_iso8859_adds_nel(self):
        """iso8859 splits on NEL but not on Unicode separators."""
        assert scan(f"a{NEL}b", EolMatch.ISO8859).terminator == NEL
        assert scan(f"a{LS}b", EolMatch.ISO8859).terminator == ""

    @pytest.mark.parametrize("terminator", [LS, PS, NEL, "\x0c", "\x0b", "\n", "\r"])
    def test_all(self, terminator):
        """all splits on every line boundary."""
        found = scan(f"a{terminator}b", EolMatch.ALL)
        assert found.content == "a"
        assert found.terminator == terminator

    def test_ends_ambiguously(self):
        """Only a missing terminator or a lone \\r is ambiguous."""
        assert not scan("a\n", EolMatch.BASIC).ends_ambiguously
        assert not scan("a\r\n", EolMatch.BASIC).ends_ambiguously
        assert scan("a\r", EolMatch.ALL).ends_ambiguously
