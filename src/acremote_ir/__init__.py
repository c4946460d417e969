"""AC remote IR - Codec for split air-conditioner infrared remote frames.

This library translates between the 70-code infrared frames sent by a split
air-conditioner remote control (Gree YAW1F family and compatibles) and the
operating state they carry: mode, fan speed, temperature, timer, swing,
display and auxiliary toggles.

The library does no I/O. A receiver (or transmitter) is expected to classify
each pulse/gap pair as a Code; this library turns those codes into a state and
back.

Two state models speak the same wire format:
- Controller: a dataclass with one field per attribute
- PackedController: the 8 frame bytes with bit-masked attributes

Basic Usage:
    from acremote_ir import Controller, Fan, Mode, Temperature, format_state

    state = Controller(mode=Mode.COLD, on=True, fan=Fan.LEVEL2)
    state.temperature = Temperature.from_centigrade(24)
    frame = list(state.encode())  # 70 codes for the transmitter

    received = Controller.decode(frame)
    print(format_state(received))

Capture Notation:
    from acremote_ir import PackedController, format_codes, parse_codes

    frame = parse_codes("S 00000000 ... 010 _ ... 0011 $")
    state = PackedController.decode(frame)
    print(format_codes(state.encode()))
"""

from __future__ import annotations

from .codes import Code, format_codes, parse_codes
from .controller import Controller
from .exceptions import (
    AcRemoteException,
    ChecksumError,
    DecodeError,
    EofError,
    InvalidFanError,
    InvalidFieldError,
    InvalidMagicError,
    InvalidMarkerError,
    InvalidModeError,
    InvalidTemperatureError,
    InvalidTimerSettingError,
    UnexpectedMarkerError,
)
from .fields import (
    Fan,
    Mode,
    SwingMode,
    Temperature,
    TemperatureDisplay,
    TimerSetting,
)
from .packed import PackedController
from .protocol import (
    # Constants
    ATTRIBUTES,
    FRAME_LENGTH,
    # Base class
    RemoteState,
    # Functions
    checksum_block,
    format_state,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # State models
    "Controller",
    "PackedController",
    "RemoteState",
    # Codes
    "Code",
    "format_codes",
    "parse_codes",
    # Attribute types
    "Fan",
    "Mode",
    "SwingMode",
    "Temperature",
    "TemperatureDisplay",
    "TimerSetting",
    # Constants
    "ATTRIBUTES",
    "FRAME_LENGTH",
    # Exceptions
    "AcRemoteException",
    "ChecksumError",
    "DecodeError",
    "EofError",
    "InvalidFanError",
    "InvalidFieldError",
    "InvalidMagicError",
    "InvalidMarkerError",
    "InvalidModeError",
    "InvalidTemperatureError",
    "InvalidTimerSettingError",
    "UnexpectedMarkerError",
    # Functions
    "checksum_block",
    "format_state",
]
