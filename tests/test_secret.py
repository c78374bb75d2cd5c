import random

import pytest

from twofactor import secret as secret_module
from twofactor.secret import DEFAULT_SECRET_LENGTH, SECRET_CHARS, generate_secret_code


def test_charset():
    assert SECRET_CHARS == "abcdefghijklmnopqrstuvwxyz123456789"
    assert len(SECRET_CHARS) == 35


def test_default_length():
    code = generate_secret_code()
    assert len(code) == DEFAULT_SECRET_LENGTH == 25
    assert set(code) <= set(SECRET_CHARS)


@pytest.mark.parametrize("key_length", [1, 10, 32, 64])
def test_length(key_length):
    code = generate_secret_code(key_length)
    assert isinstance(code, str)
    assert len(code) == key_length
    assert set(code) <= set(SECRET_CHARS)


def test_random():
    codes = {generate_secret_code() for _ in range(20)}
    assert len(codes) == 20


def test_uses_module_rng(monkeypatch):
    """generate_secret_code() -- draws from the module's rng"""
    monkeypatch.setattr(secret_module, "rng", random.Random(1234))
    first = generate_secret_code()
    monkeypatch.setattr(secret_module, "rng", random.Random(1234))
    assert generate_secret_code() == first


def test_invalid_length():
    with pytest.raises(ValueError):
        generate_secret_code(0)
    with pytest.raises(ValueError):
        generate_secret_code(-5)
    with pytest.raises(TypeError):
        generate_secret_code("25")
