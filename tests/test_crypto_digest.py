import hashlib
import hmac

import pytest

from twofactor.crypto.digest import clear_lookup_hash_cache, compile_hmac, lookup_hash


class TestLookupHash:
    def setup_method(self):
        clear_lookup_hash_cache()

    def test_metadata(self):
        """lookup_hash() -- metadata"""
        info = lookup_hash("sha1")
        assert info.name == "sha1"
        assert info.const is hashlib.sha1
        assert info.digest_size == 20
        assert info.block_size == 64

        # acts like a tuple
        const, digest_size, block_size = info
        assert (digest_size, block_size) == (20, 64)

    def test_normalizes_name(self):
        assert lookup_hash("SHA-1") is lookup_hash("sha1")
        assert lookup_hash("SHA256").digest_size == 32

    def test_unknown(self):
        with pytest.raises(ValueError):
            lookup_hash("__name__")
        with pytest.raises(ValueError):
            lookup_hash("not-a-hash")


class TestCompileHmac:
    @pytest.mark.parametrize("digest", ["sha1", "sha256", "sha512"])
    @pytest.mark.parametrize(
        "key",
        [
            b"12345678901234567890",
            b"k",
            # longer than the block size, gets hashed first
            b"x" * 200,
        ],
    )
    def test_matches_stdlib(self, digest, key):
        """compile_hmac() -- output matches stdlib hmac"""
        keyed_hmac = compile_hmac(digest, key)
        for msg in (b"", b"\x00" * 8, b"The quick brown fox"):
            assert keyed_hmac(msg) == hmac.new(key, msg, digest).digest()

    def test_str_key(self):
        assert compile_hmac("sha1", "secret")(b"msg") == compile_hmac("sha1", b"secret")(b"msg")

    def test_reusable(self):
        """compile_hmac() -- function can be called repeatedly"""
        keyed_hmac = compile_hmac("sha1", b"secret")
        first = keyed_hmac(b"one")
        keyed_hmac(b"two")
        assert keyed_hmac(b"one") == first

    def test_digest_info(self):
        assert compile_hmac("sha1", b"secret").digest_info is lookup_hash("sha1")
