"""Custom exceptions for patch-facts."""

from typing import Optional


class PatchFactsError(Exception):
    """Base exception for all patch-facts operations."""


class ConfigurationError(PatchFactsError):
    """Raised when configuration validation fails."""


class PrivilegeError(PatchFactsError):
    """Raised when the process lacks the root privileges it needs."""


class UnsupportedSystemError(PatchFactsError):
    """Raised when the OS family or release cannot be identified."""


class UpdateQueryFailure(PatchFactsError):
    """Raised when a package-manager refresh or update query fails.

    ``partial`` carries whatever counts could still be parsed from the
    failed command's output.
    """

    def __init__(self, message: str, partial: Optional[object] = None) -> None:
        super().__init__(message)
        self.partial = partial


class RebootCheckUnavailable(PatchFactsError):
    """Raised when the reboot-advisory tool is missing or inconclusive."""


class FactValidationError(PatchFactsError):
    """Raised when the assembled fact record fails schema validation."""


class FileProcessingError(PatchFactsError):
    """Raised when file operations fail."""


class CommandExecutionError(PatchFactsError):
    """Raised when external command execution fails."""

    def __init__(self, message: str, returncode: int = -1, stdout: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
