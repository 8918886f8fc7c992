"""Error codes and error handling utilities for themed icons."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for themed icon map operations."""

    # Bundle errors
    BUNDLE_INVALID = auto()
    PACK_NOT_FOUND = auto()
    RESOURCE_NOT_FOUND = auto()

    # Document errors
    DOCUMENT_MISSING = auto()
    DOCUMENT_ACCESS_DENIED = auto()
    PARSE_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.BUNDLE_INVALID: "The resource bundle manifest is missing or invalid.",
    ErrorCode.PACK_NOT_FOUND: "The selected icon pack is not installed. Using built-in icons.",
    ErrorCode.RESOURCE_NOT_FOUND: "A resource referenced by the icon map could not be found.",
    ErrorCode.DOCUMENT_MISSING: "The icon pack does not provide a themed icon map.",
    ErrorCode.DOCUMENT_ACCESS_DENIED: "The icon map could not be read. Check file permissions.",
    ErrorCode.PARSE_FAILED: "Unable to parse the icon map. Themed icons are disabled.",
}


@dataclass
class ThemedIconError(Exception):
    """Base exception carrying an error code and context."""

    code: ErrorCode
    message: str = ""
    pack: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.pack:
            parts.append(f" (pack: {self.pack})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "pack": self.pack,
            "details": self.details,
        }


class BundleError(ThemedIconError):
    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(ErrorCode.BUNDLE_INVALID, message=message, details=details)


class PackNotFoundError(ThemedIconError):
    def __init__(self, pack: str) -> None:
        super().__init__(
            ErrorCode.PACK_NOT_FOUND,
            message=f"Themed icon pack {pack} does not exist!",
            pack=pack,
        )


class ResourceNotFoundError(ThemedIconError):
    def __init__(self, res_id: int, package: str = "") -> None:
        super().__init__(
            ErrorCode.RESOURCE_NOT_FOUND,
            message=f"Resource ID #0x{res_id:08x} not found",
            details={"package": package} if package else {},
        )


class DocumentParseError(ThemedIconError):
    def __init__(self, message: str, *, line: int = 0, column: int = 0) -> None:
        details = {"line": line, "column": column} if line else {}
        super().__init__(ErrorCode.PARSE_FAILED, message=message, details=details)


def classify_exception(exc: Exception, pack: str | None = None) -> ThemedIconError:
    """Classify a generic exception into a ThemedIconError with appropriate code."""
    if isinstance(exc, ThemedIconError):
        if pack and not exc.pack:
            exc.pack = pack
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return ThemedIconError(ErrorCode.RESOURCE_NOT_FOUND, pack=pack, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return ThemedIconError(
            ErrorCode.DOCUMENT_ACCESS_DENIED, pack=pack, details={"original": exc_str}
        )

    return ThemedIconError(
        ErrorCode.PARSE_FAILED,
        message=f"{exc_name}: {exc}",
        pack=pack,
        details={"original": exc_str},
    )
