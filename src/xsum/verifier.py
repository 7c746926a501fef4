"""Digest verification orchestration.

A Verifier reads and parses its digest file once per validate() call, then
hashes every requested target concurrently, one asyncio task per target.
The call is all-or-nothing: it passes only when every target matches, and
the first failure observed cancels the verifications still in flight.

Failures are returned, not raised: validate() always returns a
VerificationResult whose ``error`` holds the typed VerificationError.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
from pathlib import Path
from typing import TYPE_CHECKING

import uvloop

from xsum.config import VerifierSettings, load_settings
from xsum.exceptions import MismatchError, NoMatchError, VerificationError
from xsum.hasher import StreamingHasher
from xsum.logger import get_logger
from xsum.parser import DigestParser
from xsum.results import VerificationOutcome, VerificationResult

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from xsum.types import ChecksumEntry, DigestTable

    StrPath = str | os.PathLike[str]

logger = get_logger(__name__)


def normalize_targets(targets: StrPath | Sequence[StrPath]) -> list[str]:
    """Turn a single target or a sequence of targets into a list of keys.

    Keys are the paths exactly as supplied, which is how the digest file
    writer recorded them.
    """
    if isinstance(targets, (str, os.PathLike)):
        return [os.fspath(targets)]
    return [os.fspath(target) for target in targets]


class Verifier:
    """Verifies files against a checksum digest file."""

    def __init__(
        self,
        algorithm: str,
        digest_path: StrPath,
        *,
        settings: VerifierSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create a verifier for one digest file.

        Args:
            algorithm: Hash algorithm the digest file was written with.
                Unknown names fail at the first hash attempt.
            digest_path: Path to the digest file
            settings: Tunables (defaults when omitted)
            logger: Logger to report progress to (module logger by default)

        """
        self.algorithm = algorithm
        self.digest_path = os.fspath(digest_path)
        self.settings = settings or VerifierSettings()
        self.logger = logger or get_logger(__name__)
        self.parser = DigestParser(self.settings.encoding)
        self.hasher = StreamingHasher(
            chunk_size=self.settings.chunk_size,
            normalize_newlines=self.settings.normalize_newlines,
        )

    def _result(
        self,
        outcomes: Sequence[VerificationOutcome] = (),
        error: VerificationError | None = None,
    ) -> VerificationResult:
        return VerificationResult(
            passed=error is None,
            algorithm=self.algorithm,
            digest_file=self.digest_path,
            outcomes=tuple(outcomes),
            error=error,
        )

    async def validate(
        self,
        base_dir: StrPath,
        targets: StrPath | Sequence[StrPath],
    ) -> VerificationResult:
        """Verify target files against the digest file.

        Args:
            base_dir: Directory the target paths are relative to
            targets: One path or a list of paths, as listed in the digest

        Returns:
            Passed result, or a failed result carrying the first error

        """
        keys = normalize_targets(targets)
        self.logger.debug(
            "Validating %d file(s) against %s (%s)",
            len(keys),
            self.digest_path,
            self.algorithm,
        )

        try:
            table = await self.parser.parse_file(self.digest_path)
        except VerificationError as e:
            self.logger.error("❌ %s", e)
            return self._result(error=e)
        self.logger.debug("State: DigestLoaded (%d entries)", len(table))

        try:
            entries = self._lookup(table, keys)
        except NoMatchError as e:
            self.logger.error("❌ %s", e)
            return self._result(error=e)

        self.logger.debug("State: Verifying")
        outcomes, error = await self._verify_all(Path(base_dir), entries)

        if error is not None:
            self.logger.error("❌ %s", error)
            self.logger.debug("State: Failed")
            return self._result(outcomes, error)

        self.logger.debug("State: Succeeded")
        self.logger.info("✅ %d file(s) verified", len(outcomes))
        return self._result(outcomes)

    def _lookup(
        self, table: DigestTable, keys: list[str]
    ) -> list[tuple[str, ChecksumEntry]]:
        """Pair each target with its digest entry, in caller order.

        Raises:
            NoMatchError: For the first target missing from the table

        """
        entries = []
        for key in keys:
            entry = table.get(key)
            if entry is None:
                raise NoMatchError(key)
            entries.append((key, entry))
        return entries

    async def _verify_all(
        self,
        base_dir: Path,
        entries: list[tuple[str, ChecksumEntry]],
    ) -> tuple[list[VerificationOutcome], VerificationError | None]:
        """Run one verification task per target; first failure wins.

        Returns:
            Outcomes of the tasks that finished, and the reported error.
            When several tasks had failed by the time the first failure was
            seen, the error of the earliest target in caller order is
            reported.

        """
        if not entries:
            return [], None

        limit = self.settings.max_concurrent
        semaphore = asyncio.Semaphore(limit) if limit > 0 else None

        tasks = [
            asyncio.create_task(
                self._verify_one(base_dir, key, entry, semaphore),
                name=f"xsum-verify:{key}",
            )
            for key, entry in entries
        ]

        try:
            _, pending = await asyncio.wait(
                tasks, return_when=asyncio.FIRST_EXCEPTION
            )
            for task in pending:
                task.cancel()
            if pending:
                self.logger.debug(
                    "Cancelling %d in-flight verification(s)", len(pending)
                )
                await asyncio.gather(*pending, return_exceptions=True)
        finally:
            # Caller abandoned the call: don't leave orphaned tasks behind
            for task in tasks:
                if not task.done():
                    task.cancel()

        outcomes: list[VerificationOutcome] = []
        error: VerificationError | None = None

        for (key, entry), task in zip(entries, tasks, strict=True):
            if task.cancelled():
                continue
            exc = task.exception()
            if exc is None:
                outcomes.append(task.result())
                continue
            if not isinstance(exc, VerificationError):
                raise exc
            if error is None:
                error = exc
            outcomes.append(
                VerificationOutcome(
                    target=key,
                    path=str(_resolve(base_dir, key)),
                    passed=False,
                    expected=entry.digest_hex,
                    actual=getattr(exc, "actual", None),
                    error=exc,
                )
            )

        return outcomes, error

    async def _verify_one(
        self,
        base_dir: Path,
        key: str,
        entry: ChecksumEntry,
        semaphore: asyncio.Semaphore | None,
    ) -> VerificationOutcome:
        """Hash one target and compare it to its expected digest.

        Raises:
            MismatchError: If the digests differ
            ReadError: If the file cannot be read
            UnsupportedAlgorithmError: If the algorithm is not available

        """
        path = _resolve(base_dir, key)
        async with semaphore or contextlib.nullcontext():
            self.logger.debug("Verify file: %s (%s)", key, entry.mode.value)
            actual = await self.hasher.hash(path, self.algorithm, entry.mode)

        self.logger.debug(
            "Checksum %s: expected %s, actual %s",
            key,
            entry.digest_hex,
            actual,
        )
        if actual.lower() != entry.digest_hex.lower():
            raise MismatchError(key, entry.digest_hex, actual)

        return VerificationOutcome(
            target=key,
            path=str(path),
            passed=True,
            expected=entry.digest_hex,
            actual=actual,
        )


def _resolve(base_dir: Path, key: str) -> Path:
    """Lexically resolve a target against the base directory."""
    return Path(os.path.abspath(base_dir / key))


async def validate(
    algorithm: str,
    digest_path: StrPath,
    base_dir: StrPath,
    targets: StrPath | Sequence[StrPath],
    *,
    settings: VerifierSettings | None = None,
) -> VerificationResult:
    """Validate files against a checksum digest file.

    Digest files can be created with sha256sum, md5sum, xSum or CyberChef.

    Args:
        algorithm: Hash algorithm used in the digest file, any name
            accepted by hashlib
        digest_path: Path to the checksum digest file
        base_dir: Base directory for the files in ``targets``
        targets: One or more paths of the files to validate, relative to
            ``base_dir`` and spelled as in the digest file
        settings: Tunables; loaded from the settings file when omitted

    Returns:
        VerificationResult; ``result.error`` holds the failure, if any

    """
    if settings is None:
        settings = load_settings()
    verifier = Verifier(algorithm, digest_path, settings=settings)
    return await verifier.validate(base_dir, targets)


def validate_sync(
    algorithm: str,
    digest_path: StrPath,
    base_dir: StrPath,
    targets: StrPath | Sequence[StrPath],
    *,
    settings: VerifierSettings | None = None,
) -> VerificationResult:
    """Run validate() to completion on a uvloop event loop.

    For callers without a running event loop.
    """
    return uvloop.run(
        validate(
            algorithm,
            digest_path,
            base_dir,
            targets,
            settings=settings,
        )
    )
