"""Domain types for digest verification.

Pure data types without any IO dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class HashMode(Enum):
    """How a target file is read before hashing."""

    TEXT = "text"
    BINARY = "binary"


class ErrorKind(str, Enum):
    """Tag identifying the kind of a verification failure."""

    PARSE = "parse"
    NO_MATCH = "no_match"
    MISMATCH = "mismatch"
    IO = "io"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"


@dataclass(slots=True, frozen=True)
class ChecksumEntry:
    """Expected checksum for one file listed in a digest file.

    Attributes:
        digest_hex: Hexadecimal digest as written in the digest file
        is_binary: True when the line used the ``*`` binary marker

    """

    digest_hex: str
    is_binary: bool

    @property
    def mode(self) -> HashMode:
        """Read mode implied by the digest line marker."""
        return HashMode.BINARY if self.is_binary else HashMode.TEXT


# Filename as written in the digest file -> expected checksum
DigestTable = Mapping[str, ChecksumEntry]
