"""twofactor.provision -- enrollment helpers (otpauth uris & qrcode images)"""

from __future__ import annotations

import base64
import io
from urllib.parse import quote

from twofactor import exc
from twofactor._logging import logger
from twofactor.codec import b32encode
from twofactor.secret import generate_secret_code
from twofactor.utils import SequenceMixin, to_bytes

try:
    # qrcode rendering only supported if qrcode (https://pypi.org/project/qrcode/) is installed
    import qrcode
except ImportError:
    logger.debug("can't import 'qrcode' package, qr image rendering disabled")
    qrcode = None

__all__ = [
    "DEFAULT_LABEL",
    "QR_SUPPORT",
    "Enrollment",
    "to_uri",
    "generate_qr_image",
    "generate_secret_and_qr",
]

#: flag for detecting if qr image rendering is available
QR_SUPPORT = qrcode is not None

#: name & user account shown by authenticator apps when none is given
DEFAULT_LABEL = "Secret"

#: characters left unescaped in uri components, in addition to letters, digits and ``_.-~``
_URI_SAFE = "!*'()"


class Enrollment(SequenceMixin):
    """
    Object returned by :func:`generate_secret_and_qr`.
    It can be treated as a sequence of ``(secret_code, qr_image)``.
    """

    #: generated secret code
    secret_code = None

    #: ``data:image/png;base64,...`` uri of the provisioning qrcode
    qr_image = None

    def __init__(self, secret_code: str, qr_image: str) -> None:
        self.secret_code = secret_code
        self.qr_image = qr_image

    def _as_tuple(self):
        return self.secret_code, self.qr_image

    def __repr__(self):
        # never render the secret code
        return "<Enrollment qr_image=%d chars>" % len(self.qr_image)


def to_uri(
    secret_code: str | bytes | None,
    name: str | None = None,
    user_account: str | None = None,
) -> str:
    """
    Render the ``otpauth://`` provisioning uri for a secret code,
    in the format read by Google Authenticator & similar apps.

    :arg secret_code:
        secret code, as returned by :func:`~twofactor.secret.generate_secret_code`.
        The uri carries its utf-8 bytes base32-encoded (without padding);
        the code itself remains the HMAC key.

    :param name:
        application / company name, sent as the ``issuer`` parameter.
        Defaults to ``"Secret"``.

    :param user_account:
        name, user id or email of the user, used as the uri label.
        Defaults to ``"Secret"``.

    :raises ~twofactor.exc.MissingParameterError: if **secret_code** is empty.

    Usage example::

        >>> to_uri("12345678901234567890", "Example Org", "alice@example.org")
        'otpauth://totp/alice%40example.org?issuer=Example%20Org&secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ'
    """
    if not secret_code:
        raise exc.MissingParameterError("secret_code")
    secret = b32encode(to_bytes(secret_code, param="secret_code"))
    label = quote(user_account or DEFAULT_LABEL, _URI_SAFE)
    issuer = quote(name or DEFAULT_LABEL, _URI_SAFE)
    return "otpauth://totp/%s?issuer=%s&secret=%s" % (label, issuer, secret)


def generate_qr_image(
    secret_code: str | bytes | None,
    name: str | None = None,
    user_account: str | None = None,
) -> str:
    """
    Render the provisioning uri (see :func:`to_uri`) as a PNG qrcode.

    :returns:
        ``data:image/png;base64,...`` string, which can be placed directly
        in the ``src`` attribute of an ``<img>`` tag.

    .. note::

        This function requires installation of the external
        `qrcode <https://pypi.org/project/qrcode/>`_ package.
    """
    uri = to_uri(secret_code, name, user_account)
    if qrcode is None:
        raise RuntimeError(
            "qr image rendering requires 'qrcode' package "
            "(https://pypi.org/project/qrcode/)"
        )
    image = qrcode.make(uri)
    buffer = io.BytesIO()
    image.save(buffer)
    data = base64.b64encode(buffer.getvalue()).decode("ascii")
    return "data:image/png;base64," + data


def generate_secret_and_qr(
    key_length: int | None = None,
    name: str | None = None,
    user_account: str | None = None,
) -> Enrollment:
    """
    Generate a new secret code, along with its provisioning qrcode.

    :param key_length: length of secret code, see :func:`~twofactor.secret.generate_secret_code`.
    :param name: see :func:`to_uri`.
    :param user_account: see :func:`to_uri`.

    :returns: :class:`Enrollment` instance.
    """
    secret_code = generate_secret_code(key_length)
    qr_image = generate_qr_image(secret_code, name, user_account)
    return Enrollment(secret_code, qr_image)
