from pytest_archon import archrule


def test_codec_is_leaf() -> None:
    (
        archrule("codec-is-leaf")
        .match("twofactor.codec")
        .should_not_import("twofactor.hotp", "twofactor.totp", "twofactor.provision")
        .check("twofactor")
    )


def test_hotp_does_not_import_totp() -> None:
    (
        archrule("hotp-below-totp")
        .match("twofactor.hotp")
        .should_not_import("twofactor.totp", "twofactor.provision")
        .check("twofactor")
    )
