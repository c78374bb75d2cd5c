import pytest

#: ascii secret used by the RFC 4226 / RFC 6238 reference vectors
RFC_KEY = "12345678901234567890"


@pytest.fixture
def rfc_key() -> str:
    return RFC_KEY
