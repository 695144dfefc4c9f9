"""
Authenticator facade.

One object bundling secret creation, code generation, verification and
setup links for authenticator apps. The secret is always passed in by
the caller; nothing is stored.
"""

from typing import Optional

from ..config import TOTPConfig, DEFAULT_CONFIG, SECRET_DEFAULT_LENGTH
from ..integration.event_logger import EventLogger
from .provisioning import get_provisioning_uri, get_qr_code_url, QR_DEFAULT_SIZE, QR_DEFAULT_LEVEL
from .secret import SecretGenerator
from .totp import CodeGenerator, Verifier


class Authenticator:
    """
    Google Authenticator compatible TOTP handler.

    Example:
        >>> auth = Authenticator()
        >>> secret = auth.create_secret()
        >>> auth.verify_code(secret, auth.get_code(secret))
        True
    """

    def __init__(self, config: TOTPConfig = DEFAULT_CONFIG, clock=None,
                 secret_generator: Optional[SecretGenerator] = None,
                 event_logger: Optional[EventLogger] = None):
        """
        Args:
            config: Code length, time step, default window and decode policy
            clock: Time source for the current time slice
            secret_generator: Source of new secrets
            event_logger: Optional audit log; events are only recorded for
                calls that pass an account label
        """
        self._generator = CodeGenerator(config, clock)
        self._verifier = Verifier(self._generator)
        self._secrets = secret_generator or SecretGenerator()
        self._events = event_logger

    @property
    def config(self) -> TOTPConfig:
        return self._generator.config

    @property
    def code_length(self) -> int:
        return self._generator.code_length

    @property
    def event_logger(self) -> Optional[EventLogger]:
        return self._events

    def with_code_length(self, length: int) -> 'Authenticator':
        """
        Return an authenticator using a different code length.

        Raises:
            InvalidLength: If length is below 6
        """
        return Authenticator(
            self.config.with_code_length(length),
            self._generator.clock,
            self._secrets,
            self._events,
        )

    def create_secret(self, length: int = SECRET_DEFAULT_LENGTH,
                      account: Optional[str] = None) -> str:
        """Create a new Base32 secret of `length` characters (16 to 128)."""
        secret = self._secrets.create_secret(length)
        if self._events is not None and account is not None:
            self._events.log_secret_created(account, length)
        return secret

    def get_code(self, secret: str, time_slice: Optional[int] = None) -> str:
        """Code for the given time slice, or the current one."""
        return self._generator.get_code(secret, time_slice)

    def verify_code(self, secret: str, code: str,
                    discrepancy: Optional[int] = None,
                    current_time_slice: Optional[int] = None,
                    account: Optional[str] = None) -> bool:
        """
        Verify a user-entered code.

        Args:
            secret: Base32 secret text
            code: Code entered by the user
            discrepancy: Time slices accepted on each side of now
            current_time_slice: Slice treated as now
            account: Account label for the audit log

        Returns:
            True if the code is valid
        """
        if discrepancy is None:
            discrepancy = self.config.discrepancy

        valid = self._verifier.verify_code(secret, code, discrepancy, current_time_slice)
        if self._events is not None and account is not None:
            self._events.log_verification(account, valid, discrepancy)
        return valid

    def get_provisioning_uri(self, name: str, secret: str,
                             issuer: Optional[str] = None) -> str:
        """otpauth:// URI for manual entry or QR encoding."""
        uri = get_provisioning_uri(
            name, secret, issuer, self.code_length, self.config.time_step
        )
        if self._events is not None:
            self._events.log_setup_link(name, issuer)
        return uri

    def get_qr_code_url(self, name: str, secret: str, issuer: Optional[str] = None,
                        width: int = QR_DEFAULT_SIZE, height: int = QR_DEFAULT_SIZE,
                        level: str = QR_DEFAULT_LEVEL) -> str:
        """URL of a QR code image that authenticator apps can scan."""
        url = get_qr_code_url(
            name, secret, issuer, width, height, level,
            self.code_length, self.config.time_step,
        )
        if self._events is not None:
            self._events.log_setup_link(name, issuer)
        return url

    def __repr__(self) -> str:
        return f"Authenticator(code_length={self.code_length})"
