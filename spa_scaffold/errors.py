"""Error taxonomy for SPA Deploy Scaffold.

Every error surfaced to the CLI derives from ``ScaffoldError`` and carries a
stable ``code``.  The CLI prints ``str(error)`` on a single line and exits
non-zero; nothing is retried.
"""

from __future__ import annotations

from typing import Any


class ScaffoldError(Exception):
    """Base class for all scaffold errors."""

    def __init__(self, message: str, code: str) -> None:
        self.code = code
        super().__init__(message)


class BuildToolNotFoundError(ScaffoldError):
    """Raised when none of the supported build tools could be detected."""

    def __init__(self, checked_locations: list[str]) -> None:
        self.checked_locations = list(checked_locations)
        super().__init__(
            f"No build tool detected. Checked: {', '.join(checked_locations)}. "
            "Please ensure you have vite, rollup, or esbuild installed.",
            "BUILD_TOOL_NOT_FOUND",
        )


class ConfigParseError(ScaffoldError):
    """Raised when a manifest or build-tool config cannot be parsed."""

    def __init__(self, file_path: str, cause: Any = None) -> None:
        self.file_path = str(file_path)
        self.cause = cause
        super().__init__(f"Failed to parse config file: {file_path}", "CONFIG_PARSE_ERROR")


class MissingFileError(ScaffoldError):
    """Raised when a required input file does not exist."""

    def __init__(self, file_path: str) -> None:
        self.file_path = str(file_path)
        super().__init__(f"File not found: {file_path}", "FILE_NOT_FOUND")


class ValidationError(ScaffoldError):
    """Raised when a user-supplied option fails validation."""

    def __init__(self, message: str, errors: Any = None) -> None:
        self.errors = errors
        super().__init__(message, "VALIDATION_ERROR")


class SecurityError(ScaffoldError):
    """Raised when a resolved output path escapes the project root."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "SECURITY_ERROR")
