"""
totpvault - Command line entry point.

    totpvault secret [--length N]
    totpvault code SECRET [--digits N] [--time-slice T]
    totpvault verify SECRET CODE [--window N] [--digits N] [--time-slice T]
    totpvault uri ACCOUNT SECRET [--issuer NAME] [--qr]

verify exits with 0 for a valid code and 1 otherwise. Invalid arguments
exit with 2.
"""

import argparse
import logging
import sys

from .auth.authenticator import Authenticator
from .config import TOTPConfig, TOTP_DIGITS, TOTP_DRIFT_TOLERANCE, SECRET_DEFAULT_LENGTH
from .core_crypto.base32 import is_valid
from .errors import TOTPError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="totpvault", description="TOTP secrets and codes.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("secret", help="Create a new Base32 secret.")
    p.add_argument("--length", type=int, default=SECRET_DEFAULT_LENGTH,
                   help="Secret length in characters (16-128).")

    p = sub.add_parser("code", help="Print the code for a secret.")
    p.add_argument("secret")
    p.add_argument("--digits", type=int, default=TOTP_DIGITS, help="Length of the code.")
    p.add_argument("--time-slice", type=int, default=None,
                   help="Time slice to use instead of the current one.")

    p = sub.add_parser("verify", help="Check a code against a secret.")
    p.add_argument("secret")
    p.add_argument("code")
    p.add_argument("--window", type=int, default=TOTP_DRIFT_TOLERANCE,
                   help="Time slices accepted on each side of now.")
    p.add_argument("--digits", type=int, default=TOTP_DIGITS, help="Length of the code.")
    p.add_argument("--time-slice", type=int, default=None,
                   help="Time slice to treat as now.")

    p = sub.add_parser("uri", help="Print the otpauth:// URI for an account.")
    p.add_argument("account")
    p.add_argument("secret")
    p.add_argument("--issuer", default=None, help="Service name shown in the app.")
    p.add_argument("--qr", action="store_true", help="Print a QR code image URL instead.")

    return parser


def run(args: argparse.Namespace) -> int:
    digits = getattr(args, "digits", TOTP_DIGITS)
    auth = Authenticator(TOTPConfig(code_length=digits))

    if args.command == "secret":
        print(auth.create_secret(args.length))
        return 0

    secret = getattr(args, "secret", None)
    if secret is not None and not is_valid(secret):
        # Lenient decoding drops them, so codes may not match the app
        print("warning: secret contains non-Base32 characters", file=sys.stderr)

    if args.command == "code":
        print(auth.get_code(args.secret, args.time_slice))
        return 0

    if args.command == "verify":
        valid = auth.verify_code(args.secret, args.code, args.window, args.time_slice)
        print("valid" if valid else "invalid")
        return 0 if valid else 1

    if args.command == "uri":
        if args.qr:
            print(auth.get_qr_code_url(args.account, args.secret, args.issuer))
        else:
            print(auth.get_provisioning_uri(args.account, args.secret, args.issuer))
        return 0

    return 2


def main(argv=None) -> int:
    """Main entry point for totpvault."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args)
    except (TOTPError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
