"""Error codes and error handling utilities for wavconvert."""

from __future__ import annotations

import errno
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for wavconvert operations."""

    # Traversal errors
    ROOT_UNREADABLE = auto()
    SUBDIRECTORY_UNREADABLE = auto()

    # Per-file errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    FILE_UNREADABLE = auto()

    # Header parse errors
    NOT_A_CONTAINER = auto()
    TRUNCATED_FORMAT_CHUNK = auto()
    FORMAT_CHUNK_NOT_FOUND = auto()

    # Operation errors
    OPERATION_CANCELLED = auto()
    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.ROOT_UNREADABLE: "The scan directory could not be read.",
    ErrorCode.SUBDIRECTORY_UNREADABLE: "A directory inside the scan tree could not be read.",

    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions.",
    ErrorCode.FILE_UNREADABLE: "The file could not be opened or read.",

    ErrorCode.NOT_A_CONTAINER: "Not a RIFF/WAVE file.",
    ErrorCode.TRUNCATED_FORMAT_CHUNK: "The fmt chunk is cut short by the end of the probed data.",
    ErrorCode.FORMAT_CHUNK_NOT_FOUND: "No fmt chunk found in the probed data.",

    ErrorCode.OPERATION_CANCELLED: "Operation was cancelled by user.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
}

SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.ROOT_UNREADABLE: "Check that the path exists, is a directory and is readable.",
    ErrorCode.SUBDIRECTORY_UNREADABLE: "Fix the directory permissions or rerun with --skip-unreadable.",
    ErrorCode.FILE_ACCESS_DENIED: "Check file permissions.",
    ErrorCode.FORMAT_CHUNK_NOT_FOUND: "Large metadata chunks may precede fmt; try a bigger --probe-size.",
}


@dataclass
class WavConvertError(Exception):
    """Base exception for wavconvert with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion:
            self.suggestion = SUGGESTIONS.get(self.code, "")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class RootUnreadableError(WavConvertError):
    """The scan root cannot be listed."""

    def __init__(self, path: Path, **kwargs: Any) -> None:
        super().__init__(ErrorCode.ROOT_UNREADABLE, path=path, **kwargs)


class SubdirectoryUnreadableError(WavConvertError):
    """A directory below the scan root cannot be listed."""

    def __init__(self, path: Path, **kwargs: Any) -> None:
        super().__init__(ErrorCode.SUBDIRECTORY_UNREADABLE, path=path, **kwargs)


class ScanFailure(WavConvertError):
    """Base for header parse failures. Never fatal to a scan."""


class NotAContainerError(ScanFailure):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(ErrorCode.NOT_A_CONTAINER, **kwargs)


class TruncatedFormatChunkError(ScanFailure):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(ErrorCode.TRUNCATED_FORMAT_CHUNK, **kwargs)


class FormatChunkNotFoundError(ScanFailure):
    def __init__(self, **kwargs: Any) -> None:
        super().__init__(ErrorCode.FORMAT_CHUNK_NOT_FOUND, **kwargs)


def classify_exception(exc: Exception, path: Path | None = None) -> WavConvertError:
    """Classify a generic exception into a WavConvertError with appropriate code."""
    if isinstance(exc, WavConvertError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or getattr(exc, "errno", None) == errno.ENOENT:
        return WavConvertError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return WavConvertError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if isinstance(exc, OSError):
        return WavConvertError(ErrorCode.FILE_UNREADABLE, path=path, details={"original": exc_str})

    return WavConvertError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: WavConvertError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, WavConvertError):
        parts = [error.message]
        if error.path:
            parts.append(f" ({error.path})")
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n{error.suggestion}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
