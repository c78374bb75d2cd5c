import pytest

from twofactor.codec import COUNTER_SIZE, MAX_UINT64, b32encode, encode_counter


class TestEncodeCounter:
    def test_small_values(self):
        """encode_counter() -- big-endian layout"""
        assert encode_counter(0) == bytes(8)
        assert list(encode_counter(1)) == [0, 0, 0, 0, 0, 0, 0, 1]
        assert list(encode_counter(256)) == [0, 0, 0, 0, 0, 0, 1, 0]

    def test_byte_order(self):
        """encode_counter() -- most significant byte first"""
        assert encode_counter(0x0102030405060708) == bytes(range(1, 9))

    def test_size(self):
        for counter in (0, 1, 47320757, 1 << 40, MAX_UINT64):
            assert len(encode_counter(counter)) == COUNTER_SIZE

    def test_max_value(self):
        assert encode_counter(MAX_UINT64) == b"\xff" * 8

    def test_wraparound(self):
        """encode_counter() -- values past 64 bits wrap"""
        assert encode_counter(MAX_UINT64 + 1) == bytes(8)
        assert encode_counter((1 << 64) + 256) == encode_counter(256)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            encode_counter("1")
        with pytest.raises(TypeError):
            encode_counter(1.0)


def test_b32encode():
    """b32encode() -- padding stripped, native str returned"""
    assert b32encode(b"12345678901234567890") == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
    assert b32encode(b"Hello!\xde\xad\xbe\xef") == "JBSWY3DPEHPK3PXP"
    assert b32encode(b"a") == "ME"
    assert b32encode(b"") == ""
