"""Streaming file hashing.

Files are read asynchronously in bounded chunks with aiofiles and fed into a
running ``hashlib`` state, so no file is ever held in memory at once.
"""

from __future__ import annotations

import hashlib
import os
from typing import TYPE_CHECKING

import aiofiles

from xsum.constants import DEFAULT_CHUNK_SIZE
from xsum.exceptions import ReadError, UnsupportedAlgorithmError
from xsum.logger import get_logger
from xsum.types import HashMode

if TYPE_CHECKING:
    from os import PathLike

logger = get_logger(__name__)


def new_hash(algorithm: str) -> hashlib._Hash:
    """Create a fresh hash state for the named algorithm.

    Args:
        algorithm: Any name accepted by ``hashlib.new``

    Returns:
        New hash object

    Raises:
        UnsupportedAlgorithmError: If the name is unknown or the algorithm
            has no fixed-length digest (shake_128, shake_256)

    """
    try:
        hasher = hashlib.new(algorithm)
    except (ValueError, TypeError) as e:
        raise UnsupportedAlgorithmError(algorithm) from e

    if hasher.digest_size == 0:
        raise UnsupportedAlgorithmError(algorithm)
    return hasher


def hash_bytes(data: bytes, algorithm: str) -> str:
    """Return the lowercase hex digest of in-memory content."""
    hasher = new_hash(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


class _NewlineNormalizer:
    """Incrementally rewrites CRLF to LF across chunk boundaries."""

    def __init__(self) -> None:
        self._pending_cr = False

    def feed(self, chunk: bytes) -> bytes:
        if self._pending_cr:
            chunk = b"\r" + chunk
            self._pending_cr = False
        if chunk.endswith(b"\r"):
            self._pending_cr = True
            chunk = chunk[:-1]
        return chunk.replace(b"\r\n", b"\n")

    def flush(self) -> bytes:
        if self._pending_cr:
            self._pending_cr = False
            return b"\r"
        return b""


class StreamingHasher:
    """Computes file digests from bounded-size chunks."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        normalize_newlines: bool | None = None,
    ) -> None:
        """Create a hasher.

        Args:
            chunk_size: Bytes read per chunk
            normalize_newlines: Rewrite CRLF to LF for text-mode entries.
                None follows the platform: only where text I/O differs
                from binary I/O.

        """
        if chunk_size <= 0:
            message = "chunk_size must be positive"
            raise ValueError(message)
        self.chunk_size = chunk_size
        if normalize_newlines is None:
            normalize_newlines = os.linesep != "\n"
        self.normalize_newlines = normalize_newlines

    async def hash(
        self,
        file_path: str | PathLike[str],
        algorithm: str,
        mode: HashMode = HashMode.BINARY,
    ) -> str:
        """Compute the hex digest of a file.

        Args:
            file_path: File to hash
            algorithm: Hash algorithm name
            mode: Read mode taken from the digest line marker

        Returns:
            Lowercase hexadecimal digest

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not available
            ReadError: If the file cannot be opened or read

        """
        hasher = new_hash(algorithm)
        normalizer = (
            _NewlineNormalizer()
            if mode is HashMode.TEXT and self.normalize_newlines
            else None
        )
        bytes_processed = 0

        try:
            async with aiofiles.open(file_path, mode="rb") as f:
                while chunk := await f.read(self.chunk_size):
                    bytes_processed += len(chunk)
                    if normalizer is not None:
                        chunk = normalizer.feed(chunk)
                    hasher.update(chunk)
        except OSError as e:
            logger.debug("Failed reading %s: %s", file_path, e)
            raise ReadError(str(file_path), e) from e

        if normalizer is not None:
            hasher.update(normalizer.flush())

        digest = hasher.hexdigest()
        logger.debug(
            "Hashed %s (%s, %s mode): %d bytes -> %s",
            file_path,
            algorithm,
            mode.value,
            bytes_processed,
            digest,
        )
        return digest
