"""Packed-byte state model - the 8 frame bytes with bit-masked accessors.

Attributes are read and written straight from/to the byte array, so the
stored bytes are exactly what goes on the wire (see the layout in
protocol.py). The fixed bits of bytes 3 and 5 are set at construction and
cannot be changed through the attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from itertools import chain
from typing import Any

from .codes import Code, format_codes
from .exceptions import ChecksumError, DecodeError, EofError, InvalidMarkerError
from .fields import (
    Fan,
    Mode,
    SwingMode,
    Temperature,
    TemperatureDisplay,
    TimerSetting,
    decode_int,
    encode_int,
)
from .protocol import (
    ATTRIBUTES,
    FRAME_LENGTH,
    MAGIC_3,
    MAGIC_BLOCK_2,
    MARKERS,
    RemoteState,
    checksum_block,
    read_magic,
    read_marker,
)

_LOGGER = logging.getLogger(__name__)

STATE_SIZE = 8

# Protocol-mandated bits, byte index -> bits
FIXED_BITS: dict[int, int] = {
    3: 0b01010000,
    5: 0b00100000,
}


class ByteLayout:
    """Byte index and bit mask of each attribute."""

    MODE = (0, 0b00000111)
    ON = (0, 0b00001000)
    FAN = (0, 0b00110000)
    SWING = (0, 0b01000000)
    SLEEP = (0, 0b10000000)

    TEMPERATURE = (1, 0b00001111)  # °C - 16
    TIMER_HIGH = (1, 0b11110000)  # timer bits 0-3: half, tens, enabled

    TIMER_LOW = (2, 0b00001111)  # timer bits 4-7: units
    STRONG = (2, 0b00010000)
    LIGHT = (2, 0b00100000)
    ANION = (2, 0b01000000)
    DRY = (2, 0b10000000)

    VENTILATE = (3, 0b00000001)

    V_SWING = (4, 0b00001111)
    H_SWING = (4, 0b11110000)

    TEMPERATURE_DISPLAY = (5, 0b00000011)
    I_FEEL = (5, 0b00000100)
    WIFI = (5, 0b01000000)

    ECONO = (7, 0b00000100)
    CHECKSUM = (7, 0b11110000)


class _Bits:
    """Descriptor for an attribute held in the masked bits of one byte."""

    def __init__(self, layout: tuple[int, int], kind: Callable[[int], Any] = bool) -> None:
        self.byte, self.mask = layout
        self.shift = (self.mask & -self.mask).bit_length() - 1
        self.kind = kind

    def __get__(self, obj: PackedController | None, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return self.kind(obj._get(self.byte, self.mask, self.shift))

    def __set__(self, obj: PackedController, value: Any) -> None:
        obj._set(self.byte, self.mask, self.shift, int(value))


class PackedController(RemoteState):
    """Desired air-conditioner state, stored as the 8 bytes of the frame.

    Args:
        **attributes: Initial attribute values (see protocol.ATTRIBUTES)

    Example:
        state = PackedController(mode=Mode.HOT, on=True)
        state.timer = TimerSetting(enabled=True, half_hours=5)
        frame = list(state.encode())
        assert PackedController.decode(frame) == state
    """

    mode = _Bits(ByteLayout.MODE, Mode.from_int)
    on = _Bits(ByteLayout.ON)
    fan = _Bits(ByteLayout.FAN, Fan.from_int)
    swing = _Bits(ByteLayout.SWING)
    sleep = _Bits(ByteLayout.SLEEP)
    strong = _Bits(ByteLayout.STRONG)
    light = _Bits(ByteLayout.LIGHT)
    anion = _Bits(ByteLayout.ANION)
    dry = _Bits(ByteLayout.DRY)
    ventilate = _Bits(ByteLayout.VENTILATE)
    v_swing = _Bits(ByteLayout.V_SWING, SwingMode)
    h_swing = _Bits(ByteLayout.H_SWING, SwingMode)
    temperature_display = _Bits(ByteLayout.TEMPERATURE_DISPLAY, TemperatureDisplay)
    i_feel = _Bits(ByteLayout.I_FEEL)
    wifi = _Bits(ByteLayout.WIFI)
    econo = _Bits(ByteLayout.ECONO)

    def __init__(self, **attributes: Any) -> None:
        self._data = bytearray(STATE_SIZE)
        for index, bits in FIXED_BITS.items():
            self._data[index] |= bits
        for name, value in attributes.items():
            if name not in ATTRIBUTES:
                raise TypeError(f"Unknown attribute: {name}")
            setattr(self, name, value)

    def _get(self, byte: int, mask: int, shift: int) -> int:
        return (self._data[byte] & mask) >> shift

    def _set(self, byte: int, mask: int, shift: int, value: int) -> None:
        self._data[byte] = self._data[byte] & ~mask & 0xFF | value << shift & mask

    @property
    def temperature(self) -> Temperature:
        """Target temperature.

        Raises:
            InvalidTemperatureError: If the stored offset is above 30 °C
        """
        return Temperature.from_offset(self._get(*ByteLayout.TEMPERATURE, 0))

    @temperature.setter
    def temperature(self, value: Temperature) -> None:
        self._set(*ByteLayout.TEMPERATURE, 0, value.offset)

    @property
    def timer(self) -> TimerSetting:
        """Timer, split over the high nibble of byte 1 and the low nibble of byte 2.

        Raises:
            InvalidTimerSettingError: If the stored value is not a valid setting
        """
        packed = self._get(*ByteLayout.TIMER_HIGH, 4) | self._get(*ByteLayout.TIMER_LOW, 0) << 4
        return TimerSetting.from_int(packed)

    @timer.setter
    def timer(self, value: TimerSetting) -> None:
        packed = value.to_int()
        self._set(*ByteLayout.TIMER_HIGH, 4, packed & 0x0F)
        self._set(*ByteLayout.TIMER_LOW, 0, packed >> 4)

    def checksum(self) -> int:
        """Return the checksum nibble over stored bytes 0-6."""
        return checksum_block(self._data)

    def to_bytes(self) -> bytes:
        """Return the 8 frame bytes, with the checksum in the high nibble of byte 7."""
        data = bytearray(self._data)
        byte, mask = ByteLayout.CHECKSUM
        data[byte] = data[byte] & ~mask & 0xFF | self.checksum() << 4
        return bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> PackedController:
        """Rebuild a state from 8 frame bytes.

        Args:
            data: 8 bytes, checksum in the high nibble of byte 7

        Returns:
            PackedController holding the bytes

        Raises:
            ValueError: If data is not 8 bytes long
            InvalidModeError, InvalidFanError, InvalidTemperatureError,
            InvalidTimerSettingError: If a field is out of range
            ChecksumError: If the checksum nibble does not match
        """
        if len(data) != STATE_SIZE:
            raise ValueError(f"State must be {STATE_SIZE} bytes, got {len(data)}")
        state = cls()
        state._data[:] = data
        state._validate()
        return state

    def _validate(self) -> None:
        """Range-check the partial fields, then the checksum."""
        for name in ("mode", "fan", "temperature", "timer"):
            getattr(self, name)
        transmitted = self._get(*ByteLayout.CHECKSUM, 4)
        if transmitted != self.checksum():
            raise ChecksumError()

    def encode(self) -> Iterator[Code]:
        """Yield the 70 codes of the frame for this state.

        START, bytes 0-3, magic block, CONTINUE, bytes 4-6, the low nibble of
        byte 7, the checksum, END.
        """
        data = self.to_bytes()
        return chain(
            (Code.START,),
            chain.from_iterable(encode_int(value, 8) for value in data[:4]),
            MAGIC_3,
            (Code.CONTINUE,),
            chain.from_iterable(encode_int(value, 8) for value in data[4:7]),
            encode_int(data[7] & 0x0F, 4),
            encode_int(data[7] >> 4, 4),
            (Code.END,),
        )

    @classmethod
    def decode(cls, frame: Iterable[Code]) -> PackedController:
        """Decode a 70-code frame.

        Raises:
            EofError: If the frame is shorter than 70 codes
            InvalidMarkerError: If a marker is missing/misplaced
            UnexpectedMarkerError: If a marker is found inside the data
            InvalidMagicError: If the magic block is wrong (block 2)
            InvalidModeError, InvalidFanError, InvalidTemperatureError,
            InvalidTimerSettingError: If a field is out of range
            ChecksumError: If the checksum does not match
        """
        frame = tuple(frame)
        try:
            state = cls._decode(frame)
        except DecodeError as err:
            _LOGGER.debug("Rejected frame %s: %s", format_codes(frame), err)
            raise
        _LOGGER.debug("Decoded frame %s: %r", format_codes(frame), state)
        return state

    @classmethod
    def _decode(cls, frame: tuple[Code, ...]) -> PackedController:
        if len(frame) < FRAME_LENGTH:
            raise EofError(f"Bad frame: {len(frame)} codes, expected {FRAME_LENGTH}")
        if len(frame) > FRAME_LENGTH:
            raise InvalidMarkerError(f"Bad frame: {len(frame) - FRAME_LENGTH} codes after END")
        for pos, marker in MARKERS:
            if frame[pos] is not marker:
                raise InvalidMarkerError(
                    f"Bad frame: expected {marker.name} at {pos}, found {frame[pos].name}"
                )

        codes = iter(frame)
        read_marker(codes, Code.START)
        data = bytearray(decode_int(codes, 8) for _ in range(4))
        read_magic(codes, (MAGIC_3,), MAGIC_BLOCK_2)
        read_marker(codes, Code.CONTINUE)
        data.extend(decode_int(codes, 8) for _ in range(3))
        low = decode_int(codes, 4)
        checksum = decode_int(codes, 4)
        data.append(low | checksum << 4)

        state = cls()
        state._data[:] = data
        state._validate()

        read_marker(codes, Code.END)
        return state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackedController):
            return NotImplemented
        return self._payload() == other._payload()

    __hash__ = None  # type: ignore[assignment]

    def _payload(self) -> bytes:
        # the checksum nibble is derived, so it takes no part in equality
        return bytes(self._data[:7]) + bytes([self._data[7] & 0x0F])

    def __repr__(self) -> str:
        return f"PackedController({self.to_bytes().hex(' ')})"
