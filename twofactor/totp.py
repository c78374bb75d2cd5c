"""twofactor.totp -- TOTP / RFC 6238 token generation & verification"""

# =============================================================================
# imports
# =============================================================================
from __future__ import annotations

import calendar
import datetime
import time as _time
from typing import Callable, Union

from twofactor import exc
from twofactor._logging import logger
from twofactor.crypto.digest import compile_hmac
from twofactor.hotp import (
    DEFAULT_CODE_LENGTH,
    HOTP_DIGEST,
    MAX_CODE_LENGTH,
    generate_code,
    hotp,
    normalize_secret_key,
)
from twofactor.utils import (
    SequenceMixin,
    check_int,
    consteq,
    memoized_property,
    numeric_types,
    to_unicode,
)

__all__ = [
    "DEFAULT_STEP",
    "DEFAULT_ALLOW",
    "TotpMatch",
    "VerifyRequest",
    "TotpVerifier",
    "verify",
    "match",
    "generate",
]

#: timestamp accepted wherever a point in time is expected
TimeValue = Union[int, float, datetime.datetime, None]

#: number of seconds per counter step, unless configured otherwise
DEFAULT_STEP = 30

#: number of adjacent steps accepted on either side of the current one
DEFAULT_ALLOW = 0

# =============================================================================
# helpers
# =============================================================================


def normalize_token(user_token: str | bytes | None) -> str:
    """
    validate user token, returning it as unicode.

    No whitespace stripping or reformatting is performed:
    the token must equal the generated code exactly.

    :raises ~twofactor.exc.MissingParameterError: if token is ``None`` or empty.
    """
    if user_token is None:
        raise exc.MissingParameterError("user_token")
    try:
        token = to_unicode(user_token, "ascii", param="user_token")
    except UnicodeDecodeError:
        # keep undecodable bytes as non-ascii chars, rejected by _is_wellformed()
        token = user_token.decode("latin-1")
    if not token:
        raise exc.MissingParameterError("user_token")
    return token


def _is_wellformed(token: str) -> bool:
    # shorter tokens would match on the trailing digits of a code alone
    return (
        DEFAULT_CODE_LENGTH <= len(token) <= MAX_CODE_LENGTH
        and token.isascii()
        and token.isdigit()
    )


# =============================================================================
# match result
# =============================================================================


class TotpMatch(SequenceMixin):
    """
    Object returned by :meth:`TotpVerifier.match` on a successful match.

    It can be treated as a sequence of ``(counter, time)``,
    or accessed via the following attributes:

    .. autoattribute:: counter
    .. autoattribute:: time
    .. autoattribute:: expected_counter
    .. autoattribute:: skipped

    This object will always have a ``True`` boolean value.
    """

    #: TOTP counter value which matched token.
    counter = 0

    #: Timestamp when verification was performed.
    time = 0

    #: step used to derive the counter (needed to calculate expected_counter)
    step = DEFAULT_STEP

    def __init__(self, counter: int, time: int, step: int = DEFAULT_STEP) -> None:
        self.counter = counter
        self.time = time
        self.step = step

    @memoized_property
    def expected_counter(self):
        """
        Counter value expected for timestamp.
        """
        return self.time // self.step

    @memoized_property
    def skipped(self):
        """
        How many steps were skipped between expected and actual matched counter
        value (may be positive, zero, or negative).
        """
        return self.counter - self.expected_counter

    def __bool__(self):
        return True

    def _as_tuple(self):
        return self.counter, self.time

    def __repr__(self):
        return "<TotpMatch counter=%d time=%d>" % self._as_tuple()


# =============================================================================
# verification request
# =============================================================================


class VerifyRequest:
    """
    Validated parameters for a single TOTP verification.

    :arg secret_key:
        shared secret, as :class:`!bytes` or :class:`!str` (str is utf-8 encoded).

    :arg user_token:
        code submitted by the user. Its length determines the code length
        used when generating candidate codes.
        Tokens must be 6 to 10 ascii digits, others never match.

    :param int step:
        number of seconds per counter step; must be >= 1. Defaults to ``30``.

    :param int allow:
        number of steps before & after the current one to also accept;
        must be >= 0. Defaults to ``0``.

        Each extra step tolerates another **step** seconds of clock skew in either direction,
        at the price of accepting ``2 * allow + 1`` codes at any given moment.

    :raises ~twofactor.exc.MissingParameterError:
        if **secret_key** or **user_token** is empty.
    """

    secret_key = None
    user_token = None
    step = DEFAULT_STEP
    allow = DEFAULT_ALLOW

    def __init__(
        self,
        secret_key: str | bytes | None,
        user_token: str | bytes | None = None,
        step: int | None = None,
        allow: int | None = None,
    ) -> None:
        self.secret_key = normalize_secret_key(secret_key)
        self.user_token = normalize_token(user_token)
        if step is not None:
            self.step = check_int(step, "step", minval=1)
        if allow is not None:
            self.allow = check_int(allow, "allow")

    def match(self, time: int) -> TotpMatch | None:
        """
        scan the window around the counter for *time*, in ascending counter order.

        :arg time: unix epoch timestamp, as non-negative integer.

        :returns:
            :class:`TotpMatch` for the first counter whose code equals the token,
            or ``None`` if no counter in the window matches.
        """
        token = self.user_token
        if not _is_wellformed(token):
            logger.debug("rejecting malformed token (length=%d)", len(token))
            return None

        code_length = len(token)
        keyed_hmac = compile_hmac(HOTP_DIGEST, self.secret_key)
        expected = time // self.step
        # NOTE: counters before the epoch don't exist, so the window is clipped at 0.
        start = max(0, expected - self.allow)
        end = expected + self.allow + 1
        for counter in range(start, end):
            if consteq(token, generate_code(keyed_hmac, counter, code_length)):
                logger.debug(
                    "token matched counter %d (skipped %d)", counter, counter - expected
                )
                return TotpMatch(counter, time, self.step)
        logger.debug("token did not match counters %d..%d", start, end - 1)
        return None


# =============================================================================
# verifier
# =============================================================================


class TotpVerifier:
    """
    Generates and verifies TOTP codes.

    Holds the application's TOTP settings (:attr:`step`, :attr:`allow`)
    and the clock used to derive the current counter.
    All methods are stateless; a single instance may be shared across threads.

    Configuration
    =============
    Customized verifiers are created via :meth:`using`, which returns a subclass
    with the new defaults::

        >>> Verifier = TotpVerifier.using(allow=1)
        >>> Verifier().verify(secret_key, "287082")

    The same method is used to fix the clock in tests::

        >>> TotpVerifier.using(now=lambda: 59)().generate("12345678901234567890")
        '287082'

    .. automethod:: using
    .. automethod:: verify
    .. automethod:: match
    .. automethod:: generate
    .. automethod:: normalize_time
    """

    # =============================================================================
    # class attrs
    # =============================================================================

    #: function to get system time in seconds, as needed by :meth:`generate` and :meth:`verify`.
    #: defaults to :func:`time.time`, but can be overridden via :meth:`using`.
    now = _time.time

    #: number of seconds per counter step
    step = DEFAULT_STEP

    #: number of adjacent steps to accept on either side of the current one
    allow = DEFAULT_ALLOW

    # =============================================================================
    # configuration
    # =============================================================================
    @classmethod
    def using(
        cls,
        step: int | None = None,
        allow: int | None = None,
        now: Callable[[], float] | None = None,
    ) -> type[TotpVerifier]:
        """
        Dynamically create subclass of :class:`TotpVerifier` with different defaults.

        :param step: default step, in seconds
        :param allow: default window radius, in steps
        :param now:
            Optional callable that should return current time for verifier to use.
            This is mainly present for examples & unit-testing.

        :returns: subclass of this class
        """
        subcls = type(cls.__name__, (cls,), dict(__module__=cls.__module__))
        if step is not None:
            subcls.step = check_int(step, "step", minval=1)
        if allow is not None:
            subcls.allow = check_int(allow, "allow")
        if now is not None:
            if not callable(now):
                raise exc.ExpectedTypeError(now, "callable", "now")
            subcls.now = staticmethod(now)
        return subcls

    # =============================================================================
    # time helpers
    # =============================================================================
    def normalize_time(self, time: TimeValue) -> int:
        """
        Normalize time value to unix epoch seconds.

        :arg time:
            Can be ``None``, :class:`!datetime`,
            or unix epoch timestamp as :class:`!float` or :class:`!int`.
            If ``None``, uses current time (read once from :attr:`now`).
            Naive datetimes are treated as UTC.

        :raises ValueError: if time is before the unix epoch.

        :returns:
            unix epoch timestamp as :class:`int`.
        """
        if time is None:
            time = self.now()
        if isinstance(time, numeric_types):
            value = int(time)
        elif isinstance(time, datetime.datetime):
            # NOTE: utctimetuple() assumes naive datetimes are in UTC,
            #       and drops microseconds.
            value = calendar.timegm(time.utctimetuple())
        else:
            raise exc.ExpectedTypeError(time, "int, float, or datetime", "time")
        if value < 0:
            raise ValueError("time must be >= 0")
        return value

    def time_to_counter(self, time: TimeValue, step: int | None = None) -> int:
        """convert timestamp to HOTP counter, using **step** (or :attr:`step`)"""
        if step is None:
            step = self.step
        else:
            check_int(step, "step", minval=1)
        return self.normalize_time(time) // step

    # =============================================================================
    # token generation
    # =============================================================================
    def generate(
        self,
        secret_key: str | bytes | None,
        time: TimeValue = None,
        code_length: int | None = None,
        step: int | None = None,
    ) -> str:
        """
        Generate the code for a given time.

        :arg secret_key: shared secret
        :param time: timestamp; if ``None`` (the default), uses current time.
        :param code_length: number of digits, defaults to ``6``.
        :param step: seconds per step, defaults to :attr:`step`.

        :returns: decimal code as unicode string

        Usage example::

            >>> verifier = TotpVerifier()
            >>> verifier.generate("12345678901234567890", 59)
            '287082'
        """
        return hotp(secret_key, self.time_to_counter(time, step), code_length)

    # =============================================================================
    # token verification
    # =============================================================================
    def match(
        self,
        secret_key: str | bytes | None,
        user_token: str | bytes | None,
        step: int | None = None,
        allow: int | None = None,
        now: TimeValue = None,
    ) -> TotpMatch | None:
        """
        Check token against the window around the current time.

        Parameters are the same as :meth:`verify`.

        :returns:
            :class:`TotpMatch` describing which counter matched,
            or ``None`` if the token did not match.
        """
        request = VerifyRequest(
            secret_key,
            user_token,
            step=self.step if step is None else step,
            allow=self.allow if allow is None else allow,
        )
        # clock is sampled exactly once, so the whole scan sees the same "now".
        return request.match(self.normalize_time(now))

    def verify(
        self,
        secret_key: str | bytes | None,
        user_token: str | bytes | None,
        step: int | None = None,
        allow: int | None = None,
        now: TimeValue = None,
    ) -> bool:
        """
        Verify a user-submitted code.

        :arg secret_key:
            shared secret, as :class:`!bytes` or :class:`!str`.

        :arg user_token:
            code to check. Compared exactly; its length selects the code length.

        :param int step:
            seconds per counter step. Defaults to :attr:`step` (``30``).

        :param int allow:
            steps before & after the current step to also accept.
            Defaults to :attr:`allow` (``0``).

        :param now:
            timestamp to verify against; defaults to the current time.

        :raises ~twofactor.exc.MissingParameterError:
            if **secret_key** or **user_token** is empty.

        :returns:
            ``True`` if token matches any counter within the window.

        .. note::
            This method keeps no record of accepted tokens, so the same token
            verifies again until it leaves the window. Preventing reuse is
            left to the caller (e.g. by remembering :attr:`TotpMatch.counter`).
        """
        return (
            self.match(secret_key, user_token, step=step, allow=allow, now=now)
            is not None
        )


# =============================================================================
# convenience helpers
# =============================================================================
_default_verifier = TotpVerifier()
verify = _default_verifier.verify
match = _default_verifier.match
generate = _default_verifier.generate
