"""twofactor.crypto.digest -- hash lookup & precompiled hmac helpers"""

from __future__ import annotations

import hashlib

from twofactor._logging import logger
from twofactor.utils import SequenceMixin, to_bytes

__all__ = [
    "HashInfo",
    "lookup_hash",
    "clear_lookup_hash_cache",
    "compile_hmac",
]

#: cache of hash info instances used by lookup_hash()
_hash_info_cache: dict[str, HashInfo] = {}


class HashInfo(SequenceMixin):
    """
    Record containing information about a given hash algorithm, as returned :func:`lookup_hash`.
    It can be treated as a sequence of ``(const, digest_size, block_size)``.
    """

    #: hashlib name of hash
    name = None

    #: hash constructor function (e.g. :func:`hashlib.sha1`)
    const = None

    #: hash's digest size
    digest_size = None

    #: hash's block size
    block_size = None

    def __init__(self, const, name: str) -> None:
        self.name = name
        self.const = const
        hash = const()
        self.digest_size = hash.digest_size
        self.block_size = hash.block_size

    def __repr__(self):
        return "<lookup_hash(%r): digest_size=%r block_size=%r>" % (
            self.name,
            self.digest_size,
            self.block_size,
        )

    def _as_tuple(self):
        return self.const, self.digest_size, self.block_size


def lookup_hash(digest: str) -> HashInfo:
    """
    Returns a :class:`HashInfo` record containing information about a given hash function.
    The name is normalized to hashlib format (``"SHA-1"`` -> ``"sha1"``).

    :raises ValueError: if the hash is not available.
    """
    name = digest.replace("-", "").lower()
    try:
        return _hash_info_cache[name]
    except KeyError:
        pass
    if name not in hashlib.algorithms_guaranteed:
        raise ValueError("unknown hash algorithm: %r" % (digest,))
    info = _hash_info_cache[name] = HashInfo(getattr(hashlib, name), name)
    logger.debug("loaded hash info: %r", info)
    return info


def clear_lookup_hash_cache() -> None:
    _hash_info_cache.clear()


#: translation tables used by compile_hmac()
_TRANS_5C = bytes((x ^ 0x5C) for x in range(256))
_TRANS_36 = bytes((x ^ 0x36) for x in range(256))


def compile_hmac(digest: str, key: str | bytes):
    """
    This function returns an efficient HMAC function, hardcoded with a specific digest & key.
    It can be used via ``hmac = compile_hmac(digest, key)``.

    :arg digest:
        digest name (e.g. ``"sha1"``).

    :arg key:
        secret key as :class:`!bytes` or :class:`!str` (str will be encoded using utf-8).

    :returns:
        function with the signature ``hmac(msg) -> digest output``.
        The returned object will also have a ``digest_info`` attribute, containing
        a :class:`HashInfo` instance for the specified digest.

    The padded inner & outer hash states are computed once here, so a caller
    scanning a window of counters only pays for the per-message work.
    """
    # all the following was adapted from stdlib's hmac module

    # resolve digest (cached)
    digest_info = lookup_hash(digest)
    const, digest_size, block_size = digest_info
    assert block_size >= 16, "block size too small"

    # prepare key
    if not isinstance(key, bytes):
        key = to_bytes(key, param="key")
    klen = len(key)
    if klen > block_size:
        key = const(key).digest()
        klen = digest_size
    if klen < block_size:
        key += b"\x00" * (block_size - klen)

    # create pre-initialized hash constructors
    _inner_copy = const(key.translate(_TRANS_36)).copy
    _outer_copy = const(key.translate(_TRANS_5C)).copy

    def hmac(msg):
        """generated by compile_hmac()"""
        inner = _inner_copy()
        inner.update(msg)
        outer = _outer_copy()
        outer.update(inner.digest())
        return outer.digest()

    # add info attr
    hmac.digest_info = digest_info  # type: ignore[attr-defined]
    return hmac
