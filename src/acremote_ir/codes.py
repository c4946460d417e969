"""Code alphabet of the IR frames.

Every pulse/gap pair received from (or sent to) the remote is classified as
one of five codes:

- START: the long lead-in burst that opens a frame
- CONTINUE: the intra-frame space between the two halves of a frame
- END: the closing burst
- SHORT: a data bit 0 (short gap)
- LONG: a data bit 1 (long gap)

Markers never carry data. Codes are written down in the notation used by IR
capture tools, one character per code::

    S 0000 1000 ... 010 _ 0000 ... 0011 $
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .exceptions import UnexpectedMarkerError


class Code(Enum):
    """A single timing-class symbol."""

    START = "S"
    CONTINUE = "_"
    END = "$"

    SHORT = "0"
    LONG = "1"

    @classmethod
    def from_bit(cls, bit: bool) -> Code:
        """Return LONG for a set bit, SHORT otherwise."""
        return cls.LONG if bit else cls.SHORT

    @property
    def is_marker(self) -> bool:
        return self in (Code.START, Code.CONTINUE, Code.END)

    def to_bit(self) -> bool:
        """Return the bit carried by a data code.

        Raises:
            UnexpectedMarkerError: If this code is a marker
        """
        if self.is_marker:
            raise UnexpectedMarkerError(f"Bad frame: {self.name} marker where data expected")
        return self is Code.LONG

    def to_byte(self) -> int:
        """Return the bit carried by a data code as 0 or 1."""
        return 1 if self.to_bit() else 0


_CODE_CHARS = {code.value: code for code in Code}


def format_codes(codes: Iterable[Code]) -> str:
    """Render codes in capture notation, e.g. ``S0010...010_...0011$``."""
    return "".join(code.value for code in codes)


def parse_codes(text: str) -> list[Code]:
    """Parse capture notation back into codes.

    Whitespace is ignored so long frames can be split up for readability.

    Args:
        text: Characters from ``S _ $ 0 1``

    Returns:
        List of codes

    Raises:
        ValueError: If text contains any other character
    """
    codes = []
    for char in text:
        if char.isspace():
            continue
        try:
            codes.append(_CODE_CHARS[char])
        except KeyError:
            raise ValueError(f"Invalid code character: {char!r}") from None
    return codes
