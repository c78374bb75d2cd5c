"""twofactor - HOTP / TOTP two-factor authentication helpers"""

from twofactor.codec import encode_counter
from twofactor.exc import MissingParameterError
from twofactor.hotp import HotpRequest, hotp
from twofactor.provision import generate_qr_image, generate_secret_and_qr, to_uri
from twofactor.secret import generate_secret_code
from twofactor.totp import TotpMatch, TotpVerifier, VerifyRequest, generate, verify

__version__ = "1.0.0"

__all__ = [
    "HotpRequest",
    "MissingParameterError",
    "TotpMatch",
    "TotpVerifier",
    "VerifyRequest",
    "encode_counter",
    "generate",
    "generate_qr_image",
    "generate_secret_and_qr",
    "generate_secret_code",
    "hotp",
    "to_uri",
    "verify",
]
