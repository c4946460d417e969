#!/usr/bin/env python3
"""Basic usage example for acremote-ir.

This example shows how to:
1. Build a state and encode it to a frame
2. Decode a frame captured from a remote
3. Display the state using attribute labels
4. Convert between the two state models

Requirements:
    pip install acremote-ir

Usage:
    python basic_usage.py [FRAME]

FRAME is a captured frame in capture notation (S, _, $, 0, 1). If omitted, a
built-in frame is decoded.
"""

import logging
import sys

from acremote_ir import (
    Controller,
    DecodeError,
    Fan,
    Mode,
    PackedController,
    Temperature,
    TimerSetting,
    format_codes,
    format_state,
    parse_codes,
)

# COLD, on, fan LEVEL2, 24 °C, light
SAMPLE_FRAME = (
    "S 10010100 00010000 00000100 00001010 010"
    " _ 00000000 00000100 00000000 0000 1011 $"
)


def main(text: str) -> int:
    # Encode a state
    state = Controller(mode=Mode.HOT, on=True, fan=Fan.LEVEL1)
    state.temperature = Temperature.from_centigrade(26)
    print("--- Encoded ---")
    print(format_codes(state.encode()))

    # Decode a captured frame
    try:
        decoded = Controller.decode(parse_codes(text))
    except DecodeError as err:
        print(f"Cannot decode frame: {err}")
        return 1
    print("\n--- Decoded ---")
    print(format_state(decoded))

    # Same attributes, byte-level model
    packed = PackedController.from_state(decoded)
    packed.timer = TimerSetting(enabled=True, half_hours=3)
    print("\n--- Packed bytes ---")
    print(packed.to_bytes().hex(" "))
    print(format_codes(packed.encode()))
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else SAMPLE_FRAME))
