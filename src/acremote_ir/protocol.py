"""AC remote IR protocol - frame geometry, magic blocks and checksum.

This module contains the reverse-engineered layout of the infrared frames sent
by the split air-conditioner remote (Gree YAW1F family and compatibles).

Protocol overview:
- A frame is exactly 70 codes: START, 35 codes, CONTINUE, 32 codes, END
- The 67 data/magic codes carry 8 bytes, LSB first, with a 3-code magic block
  (``010``) just before the CONTINUE marker
- Byte 3 and byte 5 contain fixed bits that act as a vendor fingerprint
- The last nibble of byte 7 is a checksum over bytes 0-6

Byte layout::

    byte 0  mode(0-2) on(3) fan(4-5) swing(6) sleep(7)
    byte 1  temperature-16(0-3) timer half(4) timer tens(5-6) timer enabled(7)
    byte 2  timer units(0-3) strong(4) light(5) anion(6) dry(7)
    byte 3  ventilate(0) fixed 0b0101 (4-7, alternatively 0b0111)
    byte 4  v_swing(0-3) h_swing(4-7)
    byte 5  temperature_display(0-1) i_feel(2) fixed 0b001 (3-5) wifi(6)
    byte 6  reserved
    byte 7  econo(2) checksum(4-7)

Two state models are provided over the same wire format:
- Controller (controller.py): one dataclass field per attribute
- PackedController (packed.py): the 8 bytes with bit-masked accessors
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from .codes import Code
from .exceptions import InvalidMagicError, InvalidMarkerError
from .fields import read_code

# =============================================================================
# Frame Geometry
# =============================================================================

FRAME_LENGTH = 70
SEGMENT_A_LENGTH = 35  # data/magic codes between START and CONTINUE
SEGMENT_B_LENGTH = 32  # data/magic codes between CONTINUE and END

START_POS = 0
CONTINUE_POS = START_POS + 1 + SEGMENT_A_LENGTH  # 36
END_POS = CONTINUE_POS + 1 + SEGMENT_B_LENGTH  # 69

MARKERS: tuple[tuple[int, Code], ...] = (
    (START_POS, Code.START),
    (CONTINUE_POS, Code.CONTINUE),
    (END_POS, Code.END),
)

RESERVED_CODES = 11  # between wifi and econo

# =============================================================================
# Magic Blocks
# =============================================================================

# Bits 1-7 of byte 3; two fingerprints are seen in the wild
MAGIC_1: tuple[Code, ...] = (
    Code.SHORT,
    Code.SHORT,
    Code.SHORT,
    Code.LONG,
    Code.SHORT,
    Code.LONG,
    Code.SHORT,
)
MAGIC_2: tuple[Code, ...] = (
    Code.SHORT,
    Code.SHORT,
    Code.SHORT,
    Code.LONG,
    Code.LONG,
    Code.LONG,
    Code.SHORT,
)
# Intra-frame sync, sent before the CONTINUE marker
MAGIC_3: tuple[Code, ...] = (Code.SHORT, Code.LONG, Code.SHORT)
# Bits 3-5 of byte 5
MAGIC_4: tuple[Code, ...] = (Code.SHORT, Code.SHORT, Code.LONG)

MAGIC_BLOCK_1 = 1
MAGIC_BLOCK_2 = 2
MAGIC_BLOCK_3 = 3

# =============================================================================
# Checksum
# =============================================================================

CHECKSUM_SEED = 10
CHECKSUM_BLOCK_SIZE = 7


def checksum_block(data: bytes | bytearray | Sequence[int]) -> int:
    """Calculate the 4-bit checksum over the first 7 bytes of a frame.

    The seed 10 plus the low nibbles of bytes 0-3 plus the high nibbles of
    bytes 4-6, mod 16.

    Args:
        data: At least 7 bytes (anything beyond the 7th is ignored)

    Returns:
        Checksum nibble (0-15)
    """
    total = CHECKSUM_SEED
    for value in data[:4]:
        total += value & 0xF
    for value in data[4:CHECKSUM_BLOCK_SIZE]:
        total += value >> 4
    return total & 0xF


def read_marker(codes: Iterator[Code], marker: Code) -> None:
    """Consume one code, which must be the given marker.

    Raises:
        EofError: If the frame runs out of codes
        InvalidMarkerError: If any other code is found
    """
    found = read_code(codes)
    if found is not marker:
        raise InvalidMarkerError(f"Bad frame: expected {marker.name}, found {found.name}")


def read_magic(codes: Iterator[Code], accepted: Iterable[tuple[Code, ...]], block: int) -> None:
    """Consume a magic block and check it against the accepted patterns.

    Raises:
        EofError: If the frame runs out of codes
        InvalidMagicError: If the block matches none of the accepted patterns
    """
    accepted = tuple(accepted)
    found = tuple(read_code(codes) for _ in range(len(accepted[0])))
    if found not in accepted:
        raise InvalidMagicError(block)


# =============================================================================
# State Models
# =============================================================================

# Attribute name -> human-readable label, in frame order
ATTRIBUTES: dict[str, str] = {
    "mode": "Mode",
    "on": "Power",
    "fan": "Fan speed",
    "swing": "Swing",
    "sleep": "Sleep",
    "temperature": "Temperature",
    "timer": "Timer",
    "strong": "Turbo",
    "light": "Light",
    "anion": "Health (anion)",
    "dry": "Dry (X-fan)",
    "ventilate": "Ventilate",
    "v_swing": "Vertical swing",
    "h_swing": "Horizontal swing",
    "temperature_display": "Temperature display",
    "i_feel": "I feel",
    "wifi": "WiFi",
    "econo": "Econo",
}


class RemoteState(ABC):
    """Common shape of both state models.

    Both expose the same attribute names (see ATTRIBUTES) and the same
    encode/decode contract, but each keeps its own framing code: frames must
    be decoded with the model that encoded them.
    """

    @abstractmethod
    def encode(self) -> Iterator[Code]:
        """Yield the 70 codes of the frame for this state."""

    @classmethod
    @abstractmethod
    def decode(cls, frame: Iterable[Code]) -> RemoteState:
        """Decode a 70-code frame.

        Raises:
            DecodeError: If the frame is invalid
        """

    @abstractmethod
    def checksum(self) -> int:
        """Return the checksum nibble that encode() would send."""

    def attributes(self) -> dict[str, Any]:
        """Return every attribute by name, in frame order."""
        return {name: getattr(self, name) for name in ATTRIBUTES}

    @classmethod
    def from_state(cls, other: RemoteState) -> RemoteState:
        """Build a state of this model with the same attributes as other."""
        state = cls()
        for name, value in other.attributes().items():
            setattr(state, name, value)
        return state


def format_state(state: RemoteState) -> str:
    """Format a state for display, one ``Label: value`` line per attribute."""
    lines = []
    for name, value in state.attributes().items():
        label = ATTRIBUTES[name]
        if isinstance(value, bool):
            formatted = "On" if value else "Off"
        elif hasattr(value, "name") and isinstance(value, int):
            formatted = value.name.title()
        else:
            formatted = str(value)
        lines.append(f"{label}: {formatted}")
    return "\n".join(lines)
