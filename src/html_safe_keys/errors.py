"""Exceptions for html-safe-keys operations."""


class KeyMigrationError(Exception):
    """Base exception for all html-safe-keys errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CollaboratorError(KeyMigrationError):
    """Raised when an external process (git grep, rails runner) fails."""

    def __init__(self, operation: str, returncode: int | None, stderr: str = "") -> None:
        reason = "could not be started" if returncode is None else f"exited with {returncode}"
        message = f"{operation} {reason}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(
            message,
            details={"operation": operation, "returncode": returncode, "stderr": stderr},
        )
        self.operation = operation
        self.returncode = returncode


class IgnoredKeysParseError(KeyMigrationError):
    """Raised when the ignored-keys output is not a JSON array of strings."""


class ReportFormatError(KeyMigrationError):
    """Raised when a usages report is missing required columns."""

    def __init__(self, path: str, missing: list[str]) -> None:
        super().__init__(
            f"{path} is not a usages report (missing columns: {', '.join(missing)})",
            details={"path": path, "missing": missing},
        )


class ReportReadError(KeyMigrationError):
    """Raised when a usages report cannot be opened as an xlsx workbook."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Could not read usages report {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class TranslationDataError(KeyMigrationError):
    """Raised when the translation-data CSV cannot be interpreted."""
