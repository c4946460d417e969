"""Tests for the per-attribute codecs."""

import pytest

from acremote_ir.codes import Code, parse_codes
from acremote_ir.exceptions import (
    EofError,
    InvalidFanError,
    InvalidModeError,
    InvalidTemperatureError,
    InvalidTimerSettingError,
    UnexpectedMarkerError,
)
from acremote_ir.fields import (
    Fan,
    Mode,
    SwingMode,
    Temperature,
    TemperatureDisplay,
    TimerSetting,
    decode_int,
    encode_int,
    read_bool,
    read_code,
)


def _codes(text: str):
    return iter(parse_codes(text))


class TestBitHelpers:
    """Tests for LSB-first integer packing."""

    def test_encode_int_lsb_first(self):
        assert list(encode_int(0b0110, 4)) == parse_codes("0110")
        assert list(encode_int(0b0001, 4)) == parse_codes("1000")

    def test_encode_int_truncates_to_width(self):
        assert list(encode_int(0xFF, 3)) == parse_codes("111")

    def test_decode_int_lsb_first(self):
        assert decode_int(_codes("1101"), 4) == 0b1011

    def test_decode_int_consumes_exactly_width(self):
        codes = _codes("10" "1")
        assert decode_int(codes, 2) == 1
        assert read_bool(codes) is True

    def test_decode_int_eof(self):
        with pytest.raises(EofError):
            decode_int(_codes("10"), 3)

    def test_decode_int_unexpected_marker(self):
        with pytest.raises(UnexpectedMarkerError):
            decode_int(_codes("1_0"), 3)

    def test_read_code_eof(self):
        with pytest.raises(EofError):
            read_code(iter([]))


class TestMode:
    """Tests for the 3-bit mode field."""

    def test_encode(self):
        assert list(Mode.COLD.encode()) == [Code.LONG, Code.SHORT, Code.SHORT]
        assert list(Mode.HOT.encode()) == [Code.SHORT, Code.SHORT, Code.LONG]

    @pytest.mark.parametrize("mode", list(Mode))
    def test_decode_all(self, mode):
        assert Mode.decode(mode.encode()) is mode

    @pytest.mark.parametrize("bits", ["101", "011", "111"])
    def test_decode_invalid(self, bits):
        """Values 5-7 are not modes."""
        with pytest.raises(InvalidModeError):
            Mode.decode(_codes(bits))

    def test_decode_eof(self):
        with pytest.raises(EofError):
            Mode.decode(_codes("10"))


class TestFan:
    """Tests for the 2-bit fan field."""

    @pytest.mark.parametrize("fan", list(Fan))
    def test_decode_all(self, fan):
        assert Fan.decode(fan.encode()) is fan

    def test_encode_level2(self):
        assert list(Fan.LEVEL2.encode()) == [Code.SHORT, Code.LONG]

    def test_from_int_invalid(self):
        with pytest.raises(InvalidFanError):
            Fan.from_int(4)


class TestSwingMode:
    """Tests for the 4-bit swing fields."""

    def test_total_over_four_bits(self):
        """Every 4-bit pattern decodes to a named value."""
        for value in range(16):
            decoded = SwingMode.decode(encode_int(value, 4))
            assert decoded == value
            assert decoded.name in ("OFF", "ON") or decoded.name == f"UNKNOWN{value}"

    def test_encode_on(self):
        assert list(SwingMode.ON.encode()) == parse_codes("1000")


class TestTemperatureDisplay:
    """Tests for the 2-bit display field."""

    def test_patterns(self):
        assert TemperatureDisplay.decode(_codes("00")) is TemperatureDisplay.SETTING
        assert TemperatureDisplay.decode(_codes("10")) is TemperatureDisplay.ROOM
        assert TemperatureDisplay.decode(_codes("01")) is TemperatureDisplay.INDOOR
        assert TemperatureDisplay.decode(_codes("11")) is TemperatureDisplay.OUTDOOR


class TestTemperature:
    """Tests for the temperature field."""

    @pytest.mark.parametrize("degrees", [16, 23, 30])
    def test_from_centigrade_in_range(self, degrees):
        assert Temperature.from_centigrade(degrees).degrees == degrees

    @pytest.mark.parametrize("degrees", [0, 15, 31, 100])
    def test_from_centigrade_out_of_range(self, degrees):
        assert Temperature.from_centigrade(degrees) is None

    def test_constructor_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="between 16 and 30"):
            Temperature(31)

    def test_default(self):
        assert Temperature() == Temperature(16)

    def test_encode_offset(self):
        """24 °C is sent as offset 8."""
        assert list(Temperature(24).encode()) == parse_codes("0001")

    def test_decode_bounds(self):
        assert Temperature.decode(_codes("0000")) == Temperature(16)
        assert Temperature.decode(_codes("0111")) == Temperature(30)

    def test_decode_31_rejected(self):
        with pytest.raises(InvalidTemperatureError):
            Temperature.decode(_codes("1111"))

    def test_str(self):
        assert str(Temperature(22)) == "22 ℃"


class TestTimerSetting:
    """Tests for the packed timer field."""

    def test_to_int_two_and_a_half_hours(self):
        # half=1, tens=0, enabled=1, units=2
        assert TimerSetting(enabled=True, half_hours=5).to_int() == 0x29

    def test_to_int_24_hours(self):
        # half=0, tens=2, enabled=1, units=4
        assert TimerSetting(enabled=True, half_hours=48).to_int() == 0x4C

    def test_to_int_default(self):
        assert TimerSetting().to_int() == 0

    @pytest.mark.parametrize("half_hours", [0, 1, 19, 20, 21, 47, 48])
    @pytest.mark.parametrize("enabled", [False, True])
    def test_from_int_inverts_to_int(self, half_hours, enabled):
        timer = TimerSetting(enabled=enabled, half_hours=half_hours)
        assert TimerSetting.from_int(timer.to_int()) == timer

    def test_from_int_units_above_nine(self):
        with pytest.raises(InvalidTimerSettingError):
            TimerSetting.from_int(0xA0)

    def test_from_int_tens_above_two(self):
        with pytest.raises(InvalidTimerSettingError):
            TimerSetting.from_int(0b0110)

    def test_from_int_above_24_hours(self):
        """24.5 hours packs validly but is beyond the remote's range."""
        with pytest.raises(InvalidTimerSettingError):
            TimerSetting.from_int(0x45)

    def test_constructor_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            TimerSetting(half_hours=49)
        with pytest.raises(ValueError):
            TimerSetting(half_hours=-1)

    def test_encode_lsb_first(self):
        assert list(TimerSetting(enabled=True, half_hours=5).encode()) == parse_codes(
            "10010100"
        )

    def test_decode(self):
        assert TimerSetting.decode(_codes("00110010")) == TimerSetting(
            enabled=True, half_hours=48
        )

    def test_decode_eof(self):
        with pytest.raises(EofError):
            TimerSetting.decode(_codes("0011"))

    def test_str(self):
        assert str(TimerSetting(enabled=True, half_hours=5)) == "2.5 h (on)"
        assert str(TimerSetting()) == "0 h (off)"
