"""Exceptions raised by originctl."""
from typing import List, Optional


class OriginctlError(Exception):
    """Base class for all originctl errors."""


class ConfigError(OriginctlError):
    """Raised when the provisioning configuration is missing or invalid."""


class CommandError(OriginctlError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, cmd: List[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        detail = self.stderr.strip() or self.stdout.strip()
        message = f"Command '{' '.join(self.cmd)}' failed with exit code {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ApiNotReadyError(OriginctlError):
    """Raised when the master API never became ready within the attempt budget."""

    def __init__(self, attempts: int, reason: Optional[str] = None):
        self.attempts = attempts
        self.reason = reason
        message = f"OpenShift API not ready after {attempts} attempts"
        if reason:
            message = f"{message}. Last error: {reason}"
        super().__init__(message)


class StageError(OriginctlError):
    """Raised when a provisioning stage fails; its marker is not written."""

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")
