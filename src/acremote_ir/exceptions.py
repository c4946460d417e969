"""AC remote IR - exceptions raised while decoding frames."""

from __future__ import annotations


class AcRemoteException(Exception):
    """Base class for all acremote_ir exceptions."""

    HINT: None | str = None

    def __init__(self, *args: object):
        super().__init__(*args)
        self.message: str | None = args[0] if args else None  # type: ignore[assignment]

    def __str__(self) -> str:
        if self.message and self.HINT:
            return f"{self.message} (hint: {self.HINT})"
        if self.message:
            return self.message
        if self.HINT:
            return f"Hint: {self.HINT}"
        return ""


class DecodeError(AcRemoteException):
    """The frame is corrupt/not internally consistent, or cannot be decoded."""


########################################################################################
# Structural errors (framing)


class EofError(DecodeError):
    """The frame ran out of codes before the field being decoded was complete."""

    HINT = "the frame is truncated"


class InvalidMarkerError(DecodeError):
    """A marker is missing, misplaced, or of the wrong kind."""

    HINT = "the frame is misaligned"


class UnexpectedMarkerError(DecodeError):
    """A marker was found where a data code (SHORT/LONG) was expected."""

    HINT = "the frame is misaligned"


class InvalidMagicError(DecodeError):
    """A fixed magic block did not match any accepted pattern."""

    HINT = "protocol variant mismatch or corrupted frame"

    def __init__(self, block: int, *args: object):
        super().__init__(*(args or (f"Bad frame: magic block {block} mismatch",)))
        self.block = block


########################################################################################
# Field errors (a packed value fell outside its valid range)


class InvalidFieldError(DecodeError):
    """A field's packed integer is outside its valid range."""


class InvalidModeError(InvalidFieldError):
    """The mode field holds an unknown mode."""


class InvalidFanError(InvalidFieldError):
    """The fan field holds an unknown fan speed."""


class InvalidTemperatureError(InvalidFieldError):
    """The temperature field is outside 16-30 °C."""


class InvalidTimerSettingError(InvalidFieldError):
    """The timer field has tens > 2, units > 9, or exceeds 24 hours."""


########################################################################################
# Integrity errors


class ChecksumError(DecodeError):
    """The transmitted checksum disagrees with the recomputed one.

    The structured-field variant reports both nibbles; the packed-byte variant
    reports neither.
    """

    def __init__(
        self, transmitted: int | None = None, computed: int | None = None
    ) -> None:
        if transmitted is None or computed is None:
            super().__init__("Bad frame: checksum mismatch")
        else:
            super().__init__(
                f"Bad frame: checksum mismatch "
                f"(transmitted=0x{transmitted:X}, computed=0x{computed:X})"
            )
        self.transmitted = transmitted
        self.computed = computed

    @property
    def nibbles(self) -> int | None:
        """Both checksums packed into one byte: transmitted << 4 | computed."""
        if self.transmitted is None or self.computed is None:
            return None
        return self.transmitted << 4 | self.computed
