"""Attribute codecs - per-field encoding to and decoding from codes.

All numeric fields are sent least-significant bit first: bit 0 of a field is
the first code emitted/consumed for it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from .codes import Code
from .exceptions import (
    EofError,
    InvalidFanError,
    InvalidModeError,
    InvalidTemperatureError,
    InvalidTimerSettingError,
)

TEMP_MIN = 16  # °C
TEMP_MAX = 30  # °C
TIMER_MAX_HALF_HOURS = 48  # 24 hours


def read_code(codes: Iterator[Code]) -> Code:
    """Consume one code, raising EofError when the frame is exhausted."""
    try:
        return next(codes)
    except StopIteration:
        raise EofError("Bad frame: ran out of codes") from None


def read_bool(codes: Iterator[Code]) -> bool:
    """Consume one data code as a bool."""
    return read_code(codes).to_bit()


def decode_int(codes: Iterator[Code], width: int) -> int:
    """Consume `width` data codes (LSB first) as an unsigned integer."""
    value = 0
    for i in range(width):
        value |= read_code(codes).to_byte() << i
    return value


def encode_int(value: int, width: int) -> Iterator[Code]:
    """Yield `width` codes for value, LSB first."""
    return (Code.from_bit(value >> i & 1 != 0) for i in range(width))


class Mode(IntEnum):
    """Operating mode (3 bits)."""

    AUTO = 0
    COLD = 1
    DRY = 2
    WIND = 3
    HOT = 4

    def encode(self) -> Iterator[Code]:
        return encode_int(self, 3)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> Mode:
        return cls.from_int(decode_int(codes, 3))

    @classmethod
    def from_int(cls, value: int) -> Mode:
        try:
            return cls(value)
        except ValueError:
            raise InvalidModeError(f"Bad frame: invalid mode: {value}") from None


class Fan(IntEnum):
    """Fan speed (2 bits)."""

    AUTO = 0
    LEVEL1 = 1
    LEVEL2 = 2
    LEVEL3 = 3

    def encode(self) -> Iterator[Code]:
        return encode_int(self, 2)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> Fan:
        return cls.from_int(decode_int(codes, 2))

    @classmethod
    def from_int(cls, value: int) -> Fan:
        try:
            return cls(value)
        except ValueError:
            raise InvalidFanError(f"Bad frame: invalid fan speed: {value}") from None


class SwingMode(IntEnum):
    """Louver swing setting (4 bits).

    Only OFF and ON are understood; the remaining patterns are kept as named
    values so a decoded frame can be re-encoded unchanged.
    """

    OFF = 0
    ON = 1
    UNKNOWN2 = 2
    UNKNOWN3 = 3
    UNKNOWN4 = 4
    UNKNOWN5 = 5
    UNKNOWN6 = 6
    UNKNOWN7 = 7
    UNKNOWN8 = 8
    UNKNOWN9 = 9
    UNKNOWN10 = 10
    UNKNOWN11 = 11
    UNKNOWN12 = 12
    UNKNOWN13 = 13
    UNKNOWN14 = 14
    UNKNOWN15 = 15

    def encode(self) -> Iterator[Code]:
        return encode_int(self, 4)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> SwingMode:
        return cls(decode_int(codes, 4))


class TemperatureDisplay(IntEnum):
    """Which temperature the indoor unit shows (2 bits)."""

    SETTING = 0
    ROOM = 1
    INDOOR = 2
    OUTDOOR = 3

    def encode(self) -> Iterator[Code]:
        return encode_int(self, 2)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> TemperatureDisplay:
        return cls(decode_int(codes, 2))


@dataclass(frozen=True)
class Temperature:
    """Target temperature in whole degrees Celsius (16-30).

    Sent as a 4-bit offset from 16 °C.
    """

    degrees: int = TEMP_MIN

    def __post_init__(self) -> None:
        if not TEMP_MIN <= self.degrees <= TEMP_MAX:
            raise ValueError(
                f"Temperature must be between {TEMP_MIN} and {TEMP_MAX}°C, got {self.degrees}"
            )

    def __str__(self) -> str:
        return f"{self.degrees} ℃"

    @classmethod
    def from_centigrade(cls, degrees: int) -> Temperature | None:
        """Return a Temperature, or None if degrees is out of range."""
        if not TEMP_MIN <= degrees <= TEMP_MAX:
            return None
        return cls(degrees)

    @property
    def offset(self) -> int:
        """The 4-bit value sent on the wire."""
        return self.degrees - TEMP_MIN

    @classmethod
    def from_offset(cls, offset: int) -> Temperature:
        """Build from the wire value.

        Raises:
            InvalidTemperatureError: If offset + 16 is above 30 °C
        """
        temperature = cls.from_centigrade(offset + TEMP_MIN)
        if temperature is None:
            raise InvalidTemperatureError(
                f"Bad frame: invalid temperature: {offset + TEMP_MIN}°C"
            )
        return temperature

    def encode(self) -> Iterator[Code]:
        return encode_int(self.offset, 4)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> Temperature:
        return cls.from_offset(decode_int(codes, 4))


@dataclass(frozen=True)
class TimerSetting:
    """On/off timer, counted in half hours (0-48).

    Packed into 8 bits as a BCD-like value::

        bit 0     half hour
        bits 1-2  tens of hours (0-2)
        bit 3     enabled
        bits 4-7  units of hours (0-9)
    """

    enabled: bool = False
    half_hours: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.half_hours <= TIMER_MAX_HALF_HOURS:
            raise ValueError(
                f"Timer must be between 0 and {TIMER_MAX_HALF_HOURS} half hours, "
                f"got {self.half_hours}"
            )

    def __str__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"{self.half_hours / 2:g} h ({state})"

    def to_int(self) -> int:
        hours, half = divmod(self.half_hours, 2)
        tens, units = divmod(hours, 10)
        return half | tens << 1 | int(self.enabled) << 3 | units << 4

    @classmethod
    def from_int(cls, value: int) -> TimerSetting:
        """Unpack the 8-bit wire value.

        Raises:
            InvalidTimerSettingError: If tens > 2, units > 9, or above 24 hours
        """
        half = value & 1
        tens = value >> 1 & 0b11
        enabled = value >> 3 & 1 != 0
        units = value >> 4 & 0xF
        if tens > 2 or units > 9:
            raise InvalidTimerSettingError(
                f"Bad frame: invalid timer setting: 0x{value:02X} (tens={tens}, units={units})"
            )
        half_hours = (tens * 10 + units) * 2 + half
        if half_hours > TIMER_MAX_HALF_HOURS:
            raise InvalidTimerSettingError(
                f"Bad frame: invalid timer setting: {half_hours / 2:g} hours"
            )
        return cls(enabled=enabled, half_hours=half_hours)

    def encode(self) -> Iterator[Code]:
        return encode_int(self.to_int(), 8)

    @classmethod
    def decode(cls, codes: Iterator[Code]) -> TimerSetting:
        return cls.from_int(decode_int(codes, 8))
