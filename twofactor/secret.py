"""twofactor.secret -- random secret code generation"""

from __future__ import annotations

from twofactor.utils import check_int, getrandstr, rng

__all__ = [
    "SECRET_CHARS",
    "DEFAULT_SECRET_LENGTH",
    "generate_secret_code",
]

#: alphabet for generated secret codes.
#: NOTE: '0' is left out, since it is easily confused with 'o'.
SECRET_CHARS = "abcdefghijklmnopqrstuvwxyz123456789"

#: number of characters in a generated secret code, unless requested otherwise
DEFAULT_SECRET_LENGTH = 25


def generate_secret_code(key_length: int | None = None) -> str:
    """
    Generate a random secret code for a new enrollment.

    The code is a printable string, used as-is as the HMAC key by
    :func:`~twofactor.hotp.hotp` and :func:`~twofactor.totp.verify`.

    :param key_length:
        number of characters, defaults to ``25``.

    :returns: str drawn from :data:`SECRET_CHARS`
    """
    if key_length is None:
        key_length = DEFAULT_SECRET_LENGTH
    check_int(key_length, "key_length", minval=1)
    return getrandstr(rng, SECRET_CHARS, key_length)
