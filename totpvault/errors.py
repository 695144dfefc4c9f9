"""
Error types raised by totpvault.

Verification never raises for a wrong or malformed code; it answers
False. The exceptions below cover configuration mistakes and an
unusable random source.
"""


class TOTPError(Exception):
    """Base class for all totpvault errors."""


class InvalidLength(TOTPError, ValueError):
    """Secret length outside [16, 128] or code length below 6."""


class InvalidBase32(TOTPError, ValueError):
    """Secret text contains a character outside the Base32 alphabet (strict decode only)."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Invalid Base32 character {char!r} at position {position}")
        self.char = char
        self.position = position


class RandomnessUnavailable(TOTPError, RuntimeError):
    """The operating system could not supply secure random bytes."""
