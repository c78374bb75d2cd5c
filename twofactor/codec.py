"""twofactor.codec -- counter & key encoding helpers"""

from __future__ import annotations

import base64
import struct

from twofactor.exc import ExpectedTypeError

__all__ = [
    "MAX_UINT64",
    "COUNTER_SIZE",
    "encode_counter",
    "b32encode",
]

#: max 64-bit value
MAX_UINT64 = (1 << 64) - 1

#: size of an encoded counter, in bytes
COUNTER_SIZE = 8

_counter_struct = struct.Struct(">Q")


def encode_counter(counter: int) -> bytes:
    """
    Encode HOTP counter as the 8-byte big-endian message fed to the HMAC,
    most significant byte first (``byte[0]`` holds bits 56-63).

    Values which don't fit in 64 bits wrap around, the same as an unsigned
    64-bit integer would.

    :arg counter: non-negative integer
    :returns: 8 bytes
    """
    if not isinstance(counter, int):
        raise ExpectedTypeError(counter, "int", "counter")
    return _counter_struct.pack(counter & MAX_UINT64)


def b32encode(key: bytes) -> str:
    """
    wrapper around :func:`base64.b32encode` which strips padding,
    and returns a native string.
    """
    return base64.b32encode(key).rstrip(b"=").decode("ascii")
