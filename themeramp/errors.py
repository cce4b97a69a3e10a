"""Error codes and error handling utilities for ThemeRamp."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for theme operations."""

    # Schema errors
    UNKNOWN_UI_COLOR = auto()
    UNKNOWN_RAMP_SET = auto()
    RAMP_INDEX_OUT_OF_RANGE = auto()

    # Document errors
    DOCUMENT_MALFORMED = auto()
    DOCUMENT_UNREADABLE = auto()
    DOCUMENT_TOO_LARGE = auto()

    # Invariant errors
    INVALID_RAMP = auto()
    INCOMPLETE_RAMP_SET = auto()
    EMPTY_FAMILY = auto()
    INVALID_THEME = auto()

    # Registry errors
    FAMILY_EXISTS = auto()
    THEME_NOT_FOUND = auto()
    SYSTEM_THEME_READ_ONLY = auto()

    # Persistence errors
    SAVE_FAILED = auto()
    SAVE_ACCESS_DENIED = auto()
    DISK_FULL = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.UNKNOWN_UI_COLOR: "The theme references a UI color that does not exist.",
    ErrorCode.UNKNOWN_RAMP_SET: "The theme references a color ramp set that does not exist.",
    ErrorCode.RAMP_INDEX_OUT_OF_RANGE: "Color ramp indices must be between 0 and 11.",

    ErrorCode.DOCUMENT_MALFORMED: "The theme file is not structured correctly.",
    ErrorCode.DOCUMENT_UNREADABLE: "The theme file could not be read.",
    ErrorCode.DOCUMENT_TOO_LARGE: "The theme file is too large.",

    ErrorCode.INVALID_RAMP: "A color ramp must contain exactly 12 colors.",
    ErrorCode.INCOMPLETE_RAMP_SET: "A ramp set must define all four ramps.",
    ErrorCode.EMPTY_FAMILY: "A theme family without themes must define its own ramp sets.",
    ErrorCode.INVALID_THEME: "The theme definition is invalid.",

    ErrorCode.FAMILY_EXISTS: "A theme family with this name already exists.",
    ErrorCode.THEME_NOT_FOUND: "The requested theme does not exist.",
    ErrorCode.SYSTEM_THEME_READ_ONLY: "Built-in themes cannot be changed. Edit a copy instead.",

    ErrorCode.SAVE_FAILED: "The theme could not be saved. See details for more information.",
    ErrorCode.SAVE_ACCESS_DENIED: "Access denied while saving the theme. Check folder permissions.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",
}


@dataclass
class ThemeError(Exception):
    """Base exception for ThemeRamp with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

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


class SchemaViolationError(ThemeError):
    """A reference to an unknown UI color, unknown ramp set or bad ramp index."""

    def __init__(
        self,
        code: ErrorCode,
        message: str = "",
        *,
        identifier: str | None = None,
        path: Path | None = None,
        **details: Any,
    ) -> None:
        if identifier is not None:
            details = {"identifier": identifier, **details}
        super().__init__(code, message=message, path=path, details=details)

    @property
    def identifier(self) -> str | None:
        return self.details.get("identifier")


class MalformedDocumentError(ThemeError):
    """Raised when a persisted theme document has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        code: ErrorCode = ErrorCode.DOCUMENT_MALFORMED,
    ) -> None:
        super().__init__(code, message=message, path=path)


class InvariantViolationError(ThemeError):
    """Raised when a value would be constructed in an invalid state."""

    def __init__(self, code: ErrorCode, message: str = "") -> None:
        super().__init__(code, message=message)


class NameCollisionError(ThemeError):
    """Raised for duplicate family names or unknown (family, theme) pairs."""

    def __init__(self, code: ErrorCode, message: str = "", **details: Any) -> None:
        super().__init__(code, message=message, details=details)


class PersistenceError(ThemeError):
    """Raised when a user theme cannot be written to disk."""


def classify_exception(exc: Exception, path: Path | None = None) -> PersistenceError:
    """Classify an I/O exception raised while saving into a PersistenceError."""
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, PermissionError) or "permission denied" in exc_str or "access is denied" in exc_str:
        return PersistenceError(ErrorCode.SAVE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if "disk full" in exc_str or "no space left" in exc_str:
        return PersistenceError(ErrorCode.DISK_FULL, path=path, details={"original": exc_str})

    return PersistenceError(
        ErrorCode.SAVE_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: ThemeError | Exception) -> str:
    """Format an error for display to the user with actionable suggestions."""
    if isinstance(error, ThemeError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n\n{error.suggestion}")
        identifier = error.details.get("identifier")
        if identifier:
            parts.append(f"\n\nUI color: {identifier}")
        if error.path:
            parts.append(f"\n\nFile: {error.path.name}")
        return "".join(parts)

    return format_error_for_user(classify_exception(error))
