# Authentication Module
"""
Two-factor authentication with TOTP (RFC 6238):
- Secret generation - secret.py
- Code generation and verification - totp.py
- Setup links for authenticator apps - provisioning.py
- All of the above behind one object - authenticator.py

Security features:
- Secrets drawn from the operating system's secure random source
- Constant-time comparison for code verification
- Immutable generators, safe to share between threads
"""

from .clock import SystemClock, FixedClock, time_slice

from .secret import SecretGenerator, create_secret

from .totp import (
    CodeGenerator,
    Verifier,
    get_code,
    verify_code,
)

from .provisioning import get_provisioning_uri, get_qr_code_url

from .authenticator import Authenticator

__all__ = [
    # Time
    'SystemClock',
    'FixedClock',
    'time_slice',
    # Secrets
    'SecretGenerator',
    'create_secret',
    # TOTP
    'CodeGenerator',
    'Verifier',
    'get_code',
    'verify_code',
    # Setup
    'get_provisioning_uri',
    'get_qr_code_url',
    'Authenticator',
]
