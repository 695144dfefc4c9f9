"""
Secret generation.

A secret is `length` random bytes, each mapped to one Base32 character,
so a secret of length 16 is a 16-character string carrying 80 bits.
"""

import logging
import secrets
from typing import Callable

from ..config import SECRET_DEFAULT_LENGTH, SECRET_MIN_LENGTH, SECRET_MAX_LENGTH
from ..core_crypto.base32 import encode_per_byte
from ..errors import InvalidLength, RandomnessUnavailable

log = logging.getLogger(__name__)


class SecretGenerator:
    """
    Create Base32 secrets from a secure random source.

    Args:
        random_bytes: Callable returning n random bytes (defaults to
            secrets.token_bytes). Only replace it in tests.
    """

    def __init__(self, random_bytes: Callable[[int], bytes] = secrets.token_bytes):
        self._random_bytes = random_bytes

    def create_secret(self, length: int = SECRET_DEFAULT_LENGTH) -> str:
        """
        Create a new secret.

        Args:
            length: Number of characters (and random bytes), 16 to 128

        Returns:
            Base32 secret of exactly `length` characters

        Raises:
            InvalidLength: If length is outside [16, 128]
            RandomnessUnavailable: If the random source fails
        """
        if length < SECRET_MIN_LENGTH or length > SECRET_MAX_LENGTH:
            raise InvalidLength(
                f"Secret length must be between {SECRET_MIN_LENGTH} and "
                f"{SECRET_MAX_LENGTH}, got {length}"
            )

        try:
            raw = self._random_bytes(length)
        except (OSError, NotImplementedError) as e:
            raise RandomnessUnavailable("Secure random source failed") from e

        if len(raw) != length:
            raise RandomnessUnavailable(
                f"Random source returned {len(raw)} bytes, expected {length}"
            )

        log.debug("created secret of length %d", length)
        return encode_per_byte(raw)


_default_generator = SecretGenerator()


def create_secret(length: int = SECRET_DEFAULT_LENGTH) -> str:
    """Create a secret with the system random source. See SecretGenerator.create_secret."""
    return _default_generator.create_secret(length)
