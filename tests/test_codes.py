"""Tests for the code alphabet and capture notation."""

import pytest

from acremote_ir.codes import Code, format_codes, parse_codes
from acremote_ir.exceptions import DecodeError, UnexpectedMarkerError

MARKERS = [Code.START, Code.CONTINUE, Code.END]


class TestBits:
    """Tests for bit projections."""

    def test_from_bit(self):
        assert Code.from_bit(True) is Code.LONG
        assert Code.from_bit(False) is Code.SHORT

    def test_to_bit(self):
        assert Code.LONG.to_bit() is True
        assert Code.SHORT.to_bit() is False

    def test_to_byte(self):
        assert Code.LONG.to_byte() == 1
        assert Code.SHORT.to_byte() == 0

    @pytest.mark.parametrize("marker", MARKERS)
    def test_marker_to_bit_raises(self, marker):
        """Markers carry no data."""
        with pytest.raises(UnexpectedMarkerError):
            marker.to_bit()

    @pytest.mark.parametrize("marker", MARKERS)
    def test_marker_to_byte_raises(self, marker):
        with pytest.raises(UnexpectedMarkerError):
            marker.to_byte()

    def test_unexpected_marker_is_decode_error(self):
        with pytest.raises(DecodeError):
            Code.END.to_bit()

    def test_is_marker(self):
        assert all(code.is_marker for code in MARKERS)
        assert not Code.SHORT.is_marker
        assert not Code.LONG.is_marker


class TestNotation:
    """Tests for capture notation."""

    def test_format_codes(self):
        codes = [Code.START, Code.SHORT, Code.LONG, Code.CONTINUE, Code.LONG, Code.END]
        assert format_codes(codes) == "S01_1$"

    def test_parse_codes(self):
        assert parse_codes("S01_1$") == [
            Code.START,
            Code.SHORT,
            Code.LONG,
            Code.CONTINUE,
            Code.LONG,
            Code.END,
        ]

    def test_parse_ignores_whitespace(self):
        assert parse_codes(" S 0101\n 1 $ ") == parse_codes("S01011$")

    def test_parse_invalid_character(self):
        with pytest.raises(ValueError, match="Invalid code character"):
            parse_codes("S012$")

    def test_parse_empty(self):
        assert parse_codes("") == []
