"""Custom exceptions for stlview."""

from pathlib import Path
from typing import Any, Optional


class StlViewError(Exception):
    """Base exception for stlview."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(StlViewError):
    """Raised when configuration is invalid."""

    pass


class MeshLoadError(StlViewError):
    """Raised when an STL file cannot be opened or fully read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Failed to load STL file '{path}': {reason}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class StlParseError(StlViewError):
    """Base class for errors raised while decoding STL bytes."""

    pass


class MalformedHeaderError(StlParseError):
    """Raised when there are too few bytes to tell which STL encoding is used."""

    def __init__(self, length: int, required: int = 5):
        super().__init__(
            f"Input too short to identify STL format ({length} bytes, need {required})",
            details={"length": length, "required": required},
        )
        self.length = length
        self.required = required


class GrammarError(StlParseError):
    """Raised when ASCII STL text does not follow the facet grammar."""

    def __init__(
        self,
        message: str,
        offset: int,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ):
        super().__init__(
            f"{message} at byte {offset}",
            details={"offset": offset, "expected": expected, "found": found},
        )
        self.offset = offset
        self.expected = expected
        self.found = found


class NumericLiteralError(StlParseError):
    """Raised when a token expected to be a float cannot be parsed as one."""

    def __init__(self, token: str, offset: int):
        super().__init__(
            f"Malformed numeric literal '{token}' at byte {offset}",
            details={"token": token, "offset": offset},
        )
        self.token = token
        self.offset = offset


class TruncatedBinaryError(StlParseError):
    """Raised when a binary STL is shorter than its triangle count requires."""

    def __init__(self, declared: Optional[int], required: int, available: int):
        if declared is None:
            message = (
                f"Binary STL truncated in header: need {required} bytes, "
                f"got {available}"
            )
        else:
            message = (
                f"Binary STL declares {declared} triangles needing {required} bytes, "
                f"but only {available} are available"
            )
        super().__init__(
            message,
            details={"declared": declared, "required": required, "available": available},
        )
        self.declared = declared
        self.required = required
        self.available = available
