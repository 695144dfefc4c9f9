"""
totpvault - time-based one-time passwords for authenticator apps.
"""

from .errors import TOTPError, InvalidLength, InvalidBase32, RandomnessUnavailable
from .config import TOTPConfig, DEFAULT_CONFIG
from .core_crypto.base32 import Base32Codec
from .auth import (
    Authenticator,
    CodeGenerator,
    Verifier,
    SecretGenerator,
    SystemClock,
    FixedClock,
    create_secret,
    get_code,
    verify_code,
    get_provisioning_uri,
    get_qr_code_url,
)

__version__ = "1.0.0"

__all__ = [
    'TOTPError',
    'InvalidLength',
    'InvalidBase32',
    'RandomnessUnavailable',
    'TOTPConfig',
    'DEFAULT_CONFIG',
    'Base32Codec',
    'Authenticator',
    'CodeGenerator',
    'Verifier',
    'SecretGenerator',
    'SystemClock',
    'FixedClock',
    'create_secret',
    'get_code',
    'verify_code',
    'get_provisioning_uri',
    'get_qr_code_url',
]
