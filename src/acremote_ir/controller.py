"""Structured-field state model - one dataclass field per attribute.

The frame is assembled as an explicit concatenation of field codecs, so the
field order below is the wire order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import chain, repeat

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
    read_bool,
    read_code,
)
from .protocol import (
    FRAME_LENGTH,
    MAGIC_1,
    MAGIC_2,
    MAGIC_3,
    MAGIC_4,
    MAGIC_BLOCK_1,
    MAGIC_BLOCK_2,
    MAGIC_BLOCK_3,
    MARKERS,
    RESERVED_CODES,
    RemoteState,
    checksum_block,
    read_magic,
    read_marker,
)

_LOGGER = logging.getLogger(__name__)


@dataclass
class Controller(RemoteState):
    """Desired air-conditioner state, as sent by the remote.

    A default Controller is all off: AUTO mode, AUTO fan, 16 °C, no timer.

    Example:
        state = Controller(mode=Mode.COLD, on=True)
        state.temperature = Temperature.from_centigrade(24)
        frame = list(state.encode())
        assert Controller.decode(frame) == state
    """

    # Segment A
    mode: Mode = Mode.AUTO
    on: bool = False
    fan: Fan = Fan.AUTO
    swing: bool = False
    sleep: bool = False
    temperature: Temperature = field(default_factory=Temperature)
    timer: TimerSetting = field(default_factory=TimerSetting)
    strong: bool = False  # turbo
    light: bool = False
    anion: bool = False  # health
    dry: bool = False  # x-fan
    ventilate: bool = False

    # Segment B
    v_swing: SwingMode = SwingMode.OFF
    h_swing: SwingMode = SwingMode.OFF
    temperature_display: TemperatureDisplay = TemperatureDisplay.SETTING
    i_feel: bool = False
    wifi: bool = False
    econo: bool = False

    def encode(self) -> Iterator[Code]:
        """Yield the 70 codes of the frame for this state."""
        segment_a = chain(
            self.mode.encode(),
            (Code.from_bit(self.on),),
            self.fan.encode(),
            (Code.from_bit(self.swing), Code.from_bit(self.sleep)),
            self.temperature.encode(),
            self.timer.encode(),
            (
                Code.from_bit(self.strong),
                Code.from_bit(self.light),
                Code.from_bit(self.anion),
                Code.from_bit(self.dry),
                Code.from_bit(self.ventilate),
            ),
            MAGIC_1,
            MAGIC_3,
        )
        segment_b = chain(
            self.v_swing.encode(),
            self.h_swing.encode(),
            self.temperature_display.encode(),
            (Code.from_bit(self.i_feel),),
            MAGIC_4,
            (Code.from_bit(self.wifi),),
            repeat(Code.SHORT, RESERVED_CODES),
            (Code.from_bit(self.econo), Code.SHORT),
            encode_int(self.checksum(), 4),
        )
        return chain(
            (Code.START,), segment_a, (Code.CONTINUE,), segment_b, (Code.END,)
        )

    @classmethod
    def decode(cls, frame: Iterable[Code]) -> Controller:
        """Decode a 70-code frame.

        Checks are made in order: length, marker positions, fields and magic
        blocks (in frame order), checksum, and finally the END marker.

        Args:
            frame: The 70 codes of a received frame

        Returns:
            The decoded Controller

        Raises:
            EofError: If the frame is shorter than 70 codes
            InvalidMarkerError: If a marker is missing/misplaced
            UnexpectedMarkerError: If a marker is found inside a data field
            InvalidMagicError: If a magic block is wrong (block 1, 2 or 3)
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
    def _decode(cls, frame: tuple[Code, ...]) -> Controller:
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

        state = cls(
            mode=Mode.decode(codes),
            on=read_bool(codes),
            fan=Fan.decode(codes),
            swing=read_bool(codes),
            sleep=read_bool(codes),
            temperature=Temperature.decode(codes),
            timer=TimerSetting.decode(codes),
            strong=read_bool(codes),
            light=read_bool(codes),
            anion=read_bool(codes),
            dry=read_bool(codes),
            ventilate=read_bool(codes),
        )
        read_magic(codes, (MAGIC_1, MAGIC_2), MAGIC_BLOCK_1)
        read_magic(codes, (MAGIC_3,), MAGIC_BLOCK_2)
        read_marker(codes, Code.CONTINUE)

        state.v_swing = SwingMode.decode(codes)
        state.h_swing = SwingMode.decode(codes)
        state.temperature_display = TemperatureDisplay.decode(codes)
        state.i_feel = read_bool(codes)
        read_magic(codes, (MAGIC_4,), MAGIC_BLOCK_3)
        state.wifi = read_bool(codes)
        for _ in range(RESERVED_CODES):
            read_code(codes)
        state.econo = read_bool(codes)
        read_code(codes)  # reserved

        transmitted = decode_int(codes, 4)
        computed = state.checksum()
        if transmitted != computed:
            raise ChecksumError(transmitted, computed)

        read_marker(codes, Code.END)
        return state

    def checksum(self) -> int:
        """Return the checksum nibble over this state's 7-byte block.

        The block is fixed by the protocol revision this model speaks: the
        timer byte and the wifi bit are sent as zero here.
        """
        block = (
            self.mode | int(self.on) << 3,
            self.temperature.offset,
            0x00,  # timer
            int(self.ventilate) | 0b01010000,
            self.v_swing | self.h_swing << 4,
            self.temperature_display | int(self.i_feel) << 2 | 0b100 << 3,
            0x00,
        )
        return checksum_block(block)

