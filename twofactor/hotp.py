"""twofactor.hotp -- HOTP / RFC 4226 token generation"""

from __future__ import annotations

import struct
from typing import Callable

from twofactor.codec import encode_counter
from twofactor.crypto.digest import compile_hmac
from twofactor.exc import MissingParameterError
from twofactor.utils import check_int, to_bytes

__all__ = [
    "DEFAULT_CODE_LENGTH",
    "MAX_CODE_LENGTH",
    "HotpRequest",
    "hotp",
    "truncate",
    "generate_code",
    "normalize_secret_key",
]

#: number of digits in generated codes, unless requested otherwise
DEFAULT_CODE_LENGTH = 6

#: largest code length accepted; a 31-bit value never has more than 10 digits
MAX_CODE_LENGTH = 10

#: modulus applied to the truncated value.
#: NOTE: this stays at 10**6 for every code length; longer codes are zero-padded,
#:       shorter codes keep the rightmost digits.
CODE_MODULUS = 10**6

#: hmac digest used for all codes
HOTP_DIGEST = "sha1"


def normalize_secret_key(secret_key: str | bytes | None) -> bytes:
    """
    validate secret key, returning it as raw bytes (str keys are utf-8 encoded).

    :raises ~twofactor.MissingParameterError: if key is ``None`` or empty.
    """
    if secret_key is None:
        raise MissingParameterError("secret_key")
    key = to_bytes(secret_key, param="secret_key")
    if not key:
        raise MissingParameterError("secret_key")
    return key


def truncate(digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    The low nibble of the last digest byte selects an offset (0..15);
    the 4 bytes starting there are read big-endian and the top bit masked off,
    giving a 31-bit value.
    """
    assert len(digest) >= 20, "digest too small for dynamic truncation"
    offset = digest[-1] & 0xF
    return struct.unpack(">I", digest[offset : offset + 4])[0] & 0x7FFFFFFF


def generate_code(
    keyed_hmac: Callable[[bytes], bytes], counter: int, code_length: int
) -> str:
    """
    lowlevel HOTP generation, shared by :class:`HotpRequest`
    and the TOTP window scan.

    :arg keyed_hmac: function returned by :func:`~twofactor.crypto.digest.compile_hmac`
    :arg counter: HOTP counter, as non-negative integer
    :arg code_length: number of digits to return
    :returns: code as unicode string
    """
    digest = keyed_hmac(encode_counter(counter))
    value = truncate(digest) % CODE_MODULUS
    return ("%0*d" % (code_length, value))[-code_length:]


class HotpRequest:
    """
    Validated parameters for a single HOTP computation.

    :arg secret_key:
        shared secret, as :class:`!bytes` or :class:`!str` (str is utf-8 encoded).
        Used directly as HMAC key material.

    :arg int counter:
        HOTP counter. ``0`` is a valid counter; only ``None`` counts as missing.

    :param int code_length:
        number of digits in the generated code, 1 through 10. Defaults to ``6``.

    :raises ~twofactor.MissingParameterError:
        if **secret_key** is empty, or **counter** is omitted.

    Usage example::

        >>> HotpRequest("12345678901234567890", 1).generate()
        '287082'
    """

    #: secret key as raw :class:`!bytes`
    secret_key = None

    #: counter value
    counter = None

    #: number of digits in generated code
    code_length = DEFAULT_CODE_LENGTH

    def __init__(
        self,
        secret_key: str | bytes | None,
        counter: int | None = None,
        code_length: int | None = None,
    ) -> None:
        self.secret_key = normalize_secret_key(secret_key)

        if counter is None:
            raise MissingParameterError("counter")
        self.counter = check_int(counter, "counter")

        if code_length is not None:
            self.code_length = check_int(
                code_length, "code_length", minval=1, maxval=MAX_CODE_LENGTH
            )

    def generate(self) -> str:
        keyed_hmac = compile_hmac(HOTP_DIGEST, self.secret_key)
        return generate_code(keyed_hmac, self.counter, self.code_length)

    def __repr__(self):
        return "<HotpRequest counter=%d code_length=%d>" % (
            self.counter,
            self.code_length,
        )


def hotp(
    secret_key: str | bytes | None,
    counter: int | None = None,
    code_length: int | None = None,
) -> str:
    """
    Generate the HOTP code for a secret key & counter.

    :returns:
        decimal string, exactly **code_length** digits long.

    Usage example::

        >>> hotp("12345678901234567890", 0)
        '755224'
        >>> hotp("12345678901234567890", 0, code_length=8)
        '00755224'

    .. seealso:: :class:`HotpRequest` for parameter details.
    """
    return HotpRequest(secret_key, counter, code_length).generate()
