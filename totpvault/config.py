"""
TOTP configuration.

Module-level defaults follow RFC 6238 and what authenticator apps
expect. TOTPConfig bundles them into an immutable value that
generators capture at construction time.
"""

from dataclasses import dataclass, replace

from .errors import InvalidLength


# TOTP configuration (RFC 6238 defaults)
TOTP_DIGITS = 6             # Default number of digits in a code
TOTP_MIN_DIGITS = 6
TOTP_TIME_STEP = 30         # Time step in seconds
TOTP_DRIFT_TOLERANCE = 1    # Accept codes from +/- this many time steps

# Secret configuration (lengths in characters, one per random byte)
SECRET_DEFAULT_LENGTH = 16
SECRET_MIN_LENGTH = 16
SECRET_MAX_LENGTH = 128


def check_code_length(length: int) -> int:
    """
    Validate a code length.

    Raises:
        InvalidLength: If length is below TOTP_MIN_DIGITS
    """
    if length < TOTP_MIN_DIGITS:
        raise InvalidLength(f"Code length must be >= {TOTP_MIN_DIGITS}, got {length}")
    return length


@dataclass(frozen=True)
class TOTPConfig:
    """
    Immutable settings shared by code generation and verification.

    Attributes:
        code_length: Digits per code (>= 6)
        time_step: Seconds per time slice
        discrepancy: Default number of slices accepted on each side of now
        strict_decode: Reject secrets with non-Base32 characters instead of
            skipping them
    """
    code_length: int = TOTP_DIGITS
    time_step: int = TOTP_TIME_STEP
    discrepancy: int = TOTP_DRIFT_TOLERANCE
    strict_decode: bool = False

    def __post_init__(self):
        check_code_length(self.code_length)
        if self.time_step <= 0:
            raise ValueError("Time step must be positive")
        if self.discrepancy < 0:
            raise ValueError("Discrepancy must be non-negative")

    def with_code_length(self, length: int) -> 'TOTPConfig':
        """Return a copy using a different code length."""
        return replace(self, code_length=check_code_length(length))


DEFAULT_CONFIG = TOTPConfig()
