"""
twofactor setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# pull version string from twofactor
from twofactor import __version__ as version

#=============================================================================
# static text
#=============================================================================
SUMMARY = "HOTP / TOTP two-factor authentication helpers (RFC 4226 & RFC 6238)"

DESCRIPTION = """\
twofactor issues and verifies time-based one-time passwords for
two-factor authentication. It can generate a shared secret for a new
enrollment, render the provisioning uri & qrcode scanned by authenticator
apps, and verify a user-submitted code within a configurable window of
time steps.
"""

KEYWORDS = """\
totp hotp 2fa otp
rfc4226 rfc6238
authenticator
"""

CLASSIFIERS = """\
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Programming Language :: Python :: Implementation :: PyPy
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 5 - Production/Stable")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["twofactor", "twofactor.*"]),
    zip_safe=True,
    python_requires=">=3.9",

    # metadata
    name="twofactor",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    extras_require={
        "qr": "qrcode[pil]>=7.4",
        "test": [
            "pytest",
            "pytest-archon",
            "qrcode[pil]>=7.4",
        ],
    },
)

#=============================================================================
# eof
#=============================================================================
