"""Verification result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import orjson

from xsum.exceptions import VerificationError


@dataclass(slots=True, frozen=True)
class VerificationOutcome:
    """Result of verifying a single target file."""

    target: str
    path: str
    passed: bool
    expected: str
    actual: str | None = None
    error: VerificationError | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON reports.

        Returns:
            Dictionary representation

        """
        result: dict[str, Any] = {
            "target": self.target,
            "path": self.path,
            "passed": self.passed,
            "expected": self.expected,
        }
        if self.actual:
            result["actual"] = self.actual
        if self.error:
            result["error"] = self.error.to_dict()
        return result


@dataclass(slots=True, frozen=True)
class VerificationResult:
    """Result of one validate call.

    Attributes:
        passed: True only when every target matched its digest
        algorithm: Hash algorithm used
        digest_file: Path of the digest file
        outcomes: Outcomes of the target verifications that completed
        error: The failure that ended the call, if any

    """

    passed: bool
    algorithm: str
    digest_file: str
    outcomes: tuple[VerificationOutcome, ...] = field(default_factory=tuple)
    error: VerificationError | None = None

    def __bool__(self) -> bool:
        return self.passed

    def raise_for_error(self) -> None:
        """Raise the recorded error, if the call failed.

        Raises:
            VerificationError: The failure recorded in this result

        """
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON reports.

        Returns:
            Dictionary representation

        """
        result: dict[str, Any] = {
            "passed": self.passed,
            "algorithm": self.algorithm,
            "digest_file": self.digest_file,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result

    def to_json(self, *, indent: bool = False) -> bytes:
        """Serialize the result with orjson.

        Args:
            indent: Pretty-print with two-space indentation

        Returns:
            UTF-8 encoded JSON document

        """
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option)
