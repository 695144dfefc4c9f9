"""
Authenticator app setup links.

Builds the otpauth:// URI that authenticator apps import, and a URL
asking an external QR renderer (api.qrserver.com) to draw it. No image
is produced here.
"""

from typing import Optional
from urllib.parse import urlencode

import pyotp

from ..config import TOTP_DIGITS, TOTP_TIME_STEP


QR_SERVICE_URL = 'https://api.qrserver.com/v1/create-qr-code/'
QR_DEFAULT_SIZE = 200
QR_ERROR_LEVELS = ('L', 'M', 'Q', 'H')
QR_DEFAULT_LEVEL = 'M'


def get_provisioning_uri(account_name: str, secret: str,
                         issuer: Optional[str] = None,
                         code_length: int = TOTP_DIGITS,
                         time_step: int = TOTP_TIME_STEP) -> str:
    """
    Generate otpauth:// URI for an authenticator app.

    Args:
        account_name: Account label (usually an email)
        secret: Base32 secret text
        issuer: Service name shown in the app
        code_length: Digits per code (written to the URI when not 6)
        time_step: Time step (written to the URI when not 30)

    Returns:
        otpauth:// URI string

    Raises:
        ValueError: If code_length exceeds what authenticator apps support (10)
    """
    totp = pyotp.TOTP(secret, digits=code_length, interval=time_step)
    return totp.provisioning_uri(name=account_name, issuer_name=issuer)


def get_qr_code_url(name: str, secret: str, issuer: Optional[str] = None,
                    width: int = QR_DEFAULT_SIZE, height: int = QR_DEFAULT_SIZE,
                    level: str = QR_DEFAULT_LEVEL,
                    code_length: int = TOTP_DIGITS,
                    time_step: int = TOTP_TIME_STEP) -> str:
    """
    Generate a QR renderer URL encoding the provisioning URI.

    Args:
        name: Account label
        secret: Base32 secret text
        issuer: Service name shown in the app
        width: Image width in pixels
        height: Image height in pixels
        level: Error correction level (L, M, Q or H; anything else means M)

    Returns:
        URL of a QR code image for the otpauth:// URI
    """
    if level not in QR_ERROR_LEVELS:
        level = QR_DEFAULT_LEVEL

    params = {
        'data': get_provisioning_uri(name, secret, issuer, code_length, time_step),
        'size': f"{width}x{height}",
        'ecc': level,
    }
    return f"{QR_SERVICE_URL}?{urlencode(params)}"
