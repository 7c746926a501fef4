"""xsum - verify files against checksum digest files.

Digest files list one ``<hex digest> <marker><filename>`` line per file, as
written by sha256sum, md5sum, xSum or CyberChef::

    >>> import asyncio
    >>> from xsum import validate
    >>> result = asyncio.run(
    ...     validate("sha256", "SHA256SUMS", "dist", ["app.tar.gz"])
    ... )
    >>> result.passed
    True
"""

from xsum.config import SettingsManager, VerifierSettings, load_settings
from xsum.exceptions import (
    ConfigurationError,
    MismatchError,
    NoMatchError,
    ParseError,
    ReadError,
    UnsupportedAlgorithmError,
    VerificationError,
)
from xsum.hasher import StreamingHasher, hash_bytes
from xsum.parser import DigestParser, parse_digest_text
from xsum.results import VerificationOutcome, VerificationResult
from xsum.types import ChecksumEntry, DigestTable, ErrorKind, HashMode
from xsum.verifier import Verifier, validate, validate_sync

__version__ = "1.0.0"

__all__ = [
    "ChecksumEntry",
    "ConfigurationError",
    "DigestParser",
    "DigestTable",
    "ErrorKind",
    "HashMode",
    "MismatchError",
    "NoMatchError",
    "ParseError",
    "ReadError",
    "SettingsManager",
    "StreamingHasher",
    "UnsupportedAlgorithmError",
    "VerificationError",
    "VerificationOutcome",
    "VerificationResult",
    "Verifier",
    "VerifierSettings",
    "hash_bytes",
    "load_settings",
    "parse_digest_text",
    "validate",
    "validate_sync",
]
