"""
TOTP (Time-based One-Time Password) Implementation

Implements RFC 6238 TOTP on top of the RFC 4226 HOTP core.

Features:
- TOTP code generation for the current or a given time slice
- Configurable code length (6 digits or more)
- Verification with time drift tolerance
- Constant-time code comparison

Generators are immutable: "changing" the code length returns a new
generator, so one instance can be shared between threads.

Used with:
- Google Authenticator
- Authy
- Microsoft Authenticator
- Any RFC 6238 compliant authenticator
"""

import hmac
import logging
from typing import Optional

from ..config import TOTPConfig, DEFAULT_CONFIG, TOTP_DIGITS, TOTP_TIME_STEP
from ..core_crypto.base32 import decode
from ..core_crypto.hotp import hotp
from .clock import SystemClock, time_slice

log = logging.getLogger(__name__)


class CodeGenerator:
    """
    TOTP code generator.

    Example:
        >>> gen = CodeGenerator()
        >>> gen.get_code("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", time_slice=1)
        '287082'
    """

    def __init__(self, config: TOTPConfig = DEFAULT_CONFIG, clock=None):
        """
        Initialize TOTP generator.

        Args:
            config: Code length, time step and decode policy
            clock: Object with a now() method returning Unix seconds
                (SystemClock if None)
        """
        self._config = config
        self._clock = clock or SystemClock()

    @property
    def config(self) -> TOTPConfig:
        return self._config

    @property
    def code_length(self) -> int:
        """Number of digits in generated codes."""
        return self._config.code_length

    @property
    def clock(self):
        return self._clock

    def current_time_slice(self) -> int:
        """Time slice for the clock's current time."""
        return time_slice(self._clock.now(), self._config.time_step)

    def with_code_length(self, length: int) -> 'CodeGenerator':
        """
        Return a generator producing codes of a different length.

        The receiver is left unchanged.

        Raises:
            InvalidLength: If length is below 6
        """
        return CodeGenerator(self._config.with_code_length(length), self._clock)

    def get_code(self, secret: str, time_slice: Optional[int] = None) -> str:
        """
        Generate the TOTP code for a time slice.

        Args:
            secret: Base32 secret text
            time_slice: Counter value (current time slice if None)

        Returns:
            Code of exactly code_length digits

        Raises:
            InvalidBase32: Only when the config uses strict decoding
        """
        if time_slice is None:
            time_slice = self.current_time_slice()

        key = decode(secret, strict=self._config.strict_decode)
        return hotp(key, time_slice, self._config.code_length)

    def __repr__(self) -> str:
        return f"CodeGenerator(code_length={self.code_length}, time_step={self._config.time_step})"


class Verifier:
    """
    Check user-entered codes against a secret.

    Every failure (wrong code, wrong length, secret that decodes to
    garbage) is reported as False; callers cannot tell them apart.

    Example:
        >>> verifier = Verifier()
        >>> verifier.verify_code("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "287082",
        ...                      current_time_slice=2)
        True
    """

    def __init__(self, generator: Optional[CodeGenerator] = None):
        self._generator = generator or CodeGenerator()

    @property
    def generator(self) -> CodeGenerator:
        return self._generator

    @property
    def code_length(self) -> int:
        return self._generator.code_length

    def with_code_length(self, length: int) -> 'Verifier':
        """Return a verifier expecting codes of a different length."""
        return Verifier(self._generator.with_code_length(length))

    def verify_code(self, secret: str, code: str,
                    discrepancy: Optional[int] = None,
                    current_time_slice: Optional[int] = None) -> bool:
        """
        Verify a TOTP code with drift tolerance.

        Checks time slices from current - discrepancy to current +
        discrepancy in ascending order and stops at the first match.

        Args:
            secret: Base32 secret text
            code: Code entered by the user
            discrepancy: Slices accepted on each side (config default if None)
            current_time_slice: Slice treated as "now" (clock if None)

        Returns:
            True if the code matches any slice in the window

        Raises:
            ValueError: If discrepancy is negative
        """
        if discrepancy is None:
            discrepancy = self._generator.config.discrepancy
        if discrepancy < 0:
            raise ValueError("Discrepancy must be non-negative")

        # Verify length before doing any hashing
        if len(code) != self._generator.code_length:
            log.debug("rejected code: length %d, expected %d",
                      len(code), self._generator.code_length)
            return False

        if current_time_slice is None:
            current_time_slice = self._generator.current_time_slice()

        # compare_digest only accepts ASCII str, compare bytes instead.
        # surrogatepass lets undecodable argv bytes through without raising
        candidate = code.encode('utf-8', 'surrogatepass')

        for offset in range(-discrepancy, discrepancy + 1):
            expected = self._generator.get_code(secret, current_time_slice + offset)

            # Use constant-time comparison
            if hmac.compare_digest(expected.encode('ascii'), candidate):
                log.debug("accepted code at offset %d (window %d)", offset, discrepancy)
                return True

        log.debug("rejected code: no match in window %d", discrepancy)
        return False

    def __repr__(self) -> str:
        return f"Verifier(code_length={self.code_length})"


def get_code(secret: str, time_slice: Optional[int] = None,
             code_length: int = TOTP_DIGITS,
             time_step: int = TOTP_TIME_STEP) -> str:
    """
    Generate a TOTP code without keeping a generator around.

    Args:
        secret: Base32 secret text
        time_slice: Counter value (current time slice if None)
        code_length: Number of digits
        time_step: Time step in seconds

    Returns:
        TOTP code string
    """
    config = TOTPConfig(code_length=code_length, time_step=time_step)
    return CodeGenerator(config).get_code(secret, time_slice)


def verify_code(secret: str, code: str,
                discrepancy: int = DEFAULT_CONFIG.discrepancy,
                current_time_slice: Optional[int] = None,
                code_length: int = TOTP_DIGITS,
                time_step: int = TOTP_TIME_STEP) -> bool:
    """
    Verify a TOTP code without keeping a verifier around.

    Returns:
        True if code is valid, False otherwise
    """
    config = TOTPConfig(code_length=code_length, time_step=time_step)
    return Verifier(CodeGenerator(config)).verify_code(
        secret, code, discrepancy, current_time_slice
    )
