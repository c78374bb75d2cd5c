"""twofactor.utils -- shared helpers for token generation & verification"""

from __future__ import annotations

import hmac
import random
from typing import AnyStr

from twofactor.exc import ExpectedStringError, ExpectedTypeError
from twofactor.utils.decor import memoized_property

__all__ = [
    "SequenceMixin",
    "check_int",
    "consteq",
    "getrandstr",
    "memoized_property",
    "numeric_types",
    "rng",
    "to_bytes",
    "to_unicode",
]

numeric_types = (int, float)


class SequenceMixin:
    """
    helper which lets result object act like a fixed-length sequence.
    subclass just needs to provide :meth:`_as_tuple()`.
    """

    def _as_tuple(self):
        raise NotImplementedError("implement in subclass")

    def __repr__(self):
        return repr(self._as_tuple())

    def __getitem__(self, idx):
        return self._as_tuple()[idx]

    def __iter__(self):
        return iter(self._as_tuple())

    def __len__(self):
        return len(self._as_tuple())

    def __eq__(self, other):
        return self._as_tuple() == other

    def __ne__(self, other):
        return not self.__eq__(other)


def consteq(left, right):
    """
    check two strings/bytes for equality in time proportional to the input size,
    independent of where they first differ.
    """
    if type(left) is not type(right):
        raise TypeError

    left = left.encode() if isinstance(left, str) else left
    right = right.encode() if isinstance(right, str) else right
    return hmac.compare_digest(left, right)


def check_int(
    value: object, param: str, minval: int = 0, maxval: int | None = None
) -> int:
    """
    check that value is an integer within ``[minval, maxval]``.

    :raises TypeError: if value isn't an integer.
    :raises ValueError: if value is out of range.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ExpectedTypeError(value, "int", param)
    if value < minval:
        raise ValueError("%s must be >= %d" % (param, minval))
    if maxval is not None and value > maxval:
        raise ValueError("%s must be <= %d" % (param, maxval))
    return value


def to_bytes(source: str | bytes, encoding: str = "utf-8", param: str = "value") -> bytes:
    """Helper to normalize input to bytes.

    :arg source:
        Source bytes/unicode to process.

    :arg encoding:
        Target encoding (defaults to ``"utf-8"``).

    :param param:
        Optional name of variable/noun to reference when raising errors

    :raises TypeError: if source is not str or bytes.

    :returns:
        * unicode strings will be encoded using *encoding*, and returned.
        * byte strings will be returned unchanged.
    """
    assert encoding
    if isinstance(source, bytes):
        return source
    if isinstance(source, str):
        return source.encode(encoding)
    raise ExpectedStringError(source, param)


def to_unicode(source: AnyStr, encoding: str = "utf-8", param: str = "value") -> str:
    """Helper to normalize input to unicode.

    :raises TypeError: if source is not str or bytes.

    :returns:
        * returns unicode strings unchanged.
        * returns bytes strings decoded using *encoding*
    """
    assert encoding
    if isinstance(source, str):
        return source
    if isinstance(source, bytes):
        return source.decode(encoding)
    raise ExpectedStringError(source, param)


# ------------------------------------------------------------------------
# rng helpers
# ------------------------------------------------------------------------

#: rng used for secret generation; tests may swap in a seeded :class:`random.Random`.
rng: random.Random = random.SystemRandom()


def getrandstr(rng, charset, count):
    """return string containing *count* number of chars, whose elements are drawn from specified charset, using specified rng"""
    # check alphabet & count
    if count < 0:
        raise ValueError("count must be >= 0")
    letters = len(charset)
    if letters == 0:
        raise ValueError("alphabet must not be empty")
    if letters == 1:
        return charset * count

    # get random value, and write out to buffer
    def helper():
        value = rng.randrange(0, letters**count)
        i = 0
        while i < count:
            yield charset[value % letters]
            value //= letters
            i += 1

    return "".join(helper())
