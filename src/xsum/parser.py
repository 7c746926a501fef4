"""Digest file parsing.

Parses the text of a digest file, as written by ``sha256sum``, ``md5sum``
and similar tools, into a read-only table of expected checksums::

    <hex digest><space><marker><filename>

where ``marker`` is a space for text mode or ``*`` for binary mode. Parsing
is strict: the first line that does not follow this grammar fails the whole
file with a ParseError, and no partial table is returned.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import TYPE_CHECKING

import aiofiles

from xsum.constants import (
    BINARY_MARKER,
    BYTE_ORDER_MARK,
    DEFAULT_DIGEST_ENCODING,
    DIGEST_LINE_PATTERN,
    DIGEST_LINE_SEPARATOR,
)
from xsum.exceptions import ParseError, ReadError
from xsum.logger import get_logger
from xsum.types import ChecksumEntry, DigestTable

if TYPE_CHECKING:
    from os import PathLike

logger = get_logger(__name__)

_LINE_RE = re.compile(DIGEST_LINE_PATTERN)
_SEPARATOR_RE = re.compile(DIGEST_LINE_SEPARATOR)


def parse_digest_text(text: str) -> DigestTable:
    """Parse digest file text into a table of expected checksums.

    Args:
        text: Full digest file content

    Returns:
        Read-only mapping of filename (as written) to ChecksumEntry

    Raises:
        ParseError: If any line does not match the digest line grammar

    """
    entries: dict[str, ChecksumEntry] = {}
    # str.strip() keeps U+FEFF, so a leading byte-order mark goes first
    text = text.strip().lstrip(BYTE_ORDER_MARK).strip()

    for line_number, line in enumerate(_SEPARATOR_RE.split(text), start=1):
        match = _LINE_RE.match(line)
        if match is None:
            logger.debug("Could not parse line #%d", line_number)
            raise ParseError(line_number, line)

        digest_hex, marker, filename = match.groups()
        # Last duplicate wins
        entries[filename] = ChecksumEntry(
            digest_hex=digest_hex,
            is_binary=marker == BINARY_MARKER,
        )

    logger.debug("Parsed %d checksum entries", len(entries))
    return MappingProxyType(entries)


class DigestParser:
    """Reads and parses digest files."""

    def __init__(self, encoding: str = DEFAULT_DIGEST_ENCODING) -> None:
        self.encoding = encoding

    def parse(self, text: str) -> DigestTable:
        """Parse digest file text. See :func:`parse_digest_text`."""
        return parse_digest_text(text)

    async def read(self, path: str | PathLike[str]) -> str:
        """Read a digest file fully as text.

        Raises:
            ReadError: If the file cannot be opened, read or decoded

        """
        logger.debug("Reading digest file %s (%s)", path, self.encoding)
        try:
            async with aiofiles.open(path, encoding=self.encoding) as f:
                return await f.read()
        except UnicodeDecodeError as e:
            cause = OSError(f"not valid {self.encoding} text: {e.reason}")
            raise ReadError(str(path), cause) from e
        except OSError as e:
            raise ReadError(str(path), e) from e

    async def parse_file(self, path: str | PathLike[str]) -> DigestTable:
        """Read and parse a digest file.

        Raises:
            ReadError: If the file cannot be read
            ParseError: If any line does not match the grammar

        """
        return self.parse(await self.read(path))
