"""Exception classes for xsum verification failures.

Every failure surfaced by a verification call is one of the closed set of
VerificationError subclasses below. Each carries an ErrorKind tag and its
contextual fields, and defines ``__match_args__`` so callers can branch
with structural pattern matching::

    match result.error:
        case MismatchError(target, expected, actual):
            ...
        case NoMatchError(target):
            ...
"""

from __future__ import annotations

from typing import Any, ClassVar

from xsum.types import ErrorKind


class VerificationError(Exception):
    """Base exception for xsum verification failures."""

    error_prefix: ClassVar[str] = "Verification failed"
    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional path of the file that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Returns:
            Dictionary with the error kind, message and context fields

        """
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "message": str(self),
        }
        if self.target is not None:
            data["target"] = self.target
        return data


class ParseError(VerificationError):
    """Raised when a digest file line does not match the line grammar."""

    error_prefix = "Could not parse checksum file"
    kind = ErrorKind.PARSE
    __match_args__ = ("line_number", "line")

    def __init__(self, line_number: int, line: str) -> None:
        super().__init__(f"line #{line_number}: {line}")
        self.line_number = line_number
        self.line = line

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["line_number"] = self.line_number
        data["line"] = self.line
        return data


class NoMatchError(VerificationError):
    """Raised when a target file has no entry in the digest file."""

    error_prefix = "No checksum found in digest"
    kind = ErrorKind.NO_MATCH
    __match_args__ = ("target",)

    def __init__(self, target: str) -> None:
        super().__init__("file is not listed in the digest file", target)


class MismatchError(VerificationError):
    """Raised when a file's computed digest differs from the expected one."""

    error_prefix = "Checksum mismatch"
    kind = ErrorKind.MISMATCH
    __match_args__ = ("target", "expected", "actual")

    def __init__(self, target: str, expected: str, actual: str) -> None:
        super().__init__(
            f"expected {expected}, computed {actual}",
            target,
        )
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["expected"] = self.expected
        data["actual"] = self.actual
        return data


class ReadError(VerificationError):
    """Raised when a file cannot be opened or read."""

    error_prefix = "Could not read file"
    kind = ErrorKind.IO
    __match_args__ = ("target", "cause")

    def __init__(self, target: str, cause: OSError) -> None:
        super().__init__(cause.strerror or str(cause), target)
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errno"] = self.cause.errno
        return data


class UnsupportedAlgorithmError(VerificationError):
    """Raised when the hash algorithm name is not recognized."""

    error_prefix = "Unsupported hash algorithm"
    kind = ErrorKind.UNSUPPORTED_ALGORITHM
    __match_args__ = ("algorithm",)

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"'{algorithm}' is not available")
        self.algorithm = algorithm

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["algorithm"] = self.algorithm
        return data


class ConfigurationError(Exception):
    """Error in xsum settings or logging configuration."""
