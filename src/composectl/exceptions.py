"""
Error taxonomy for composectl

Missing and malformed inputs are fatal and propagate to the caller.
Child process failures are reported and absorbed by the command forwarder.
"""

from typing import Optional


class ComposectlError(Exception):
    """Base exception for composectl operations."""
    pass


class NotFound(ComposectlError):
    """Raised when an environment or compose file does not exist."""

    def __init__(self, path: str, kind: str = "file"):
        self.path = path
        self.kind = kind
        super().__init__(f"{kind} not found: {path}")


class ParseError(ComposectlError):
    """Raised when an environment file cannot be decoded as KEY=VALUE pairs."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")


class MalformedDocument(ComposectlError):
    """Raised when a compose file does not have the expected structure."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed compose file {path}: {reason}")


class ChildProcessFailure(ComposectlError):
    """The orchestration binary exited non-zero or could not be spawned."""

    def __init__(self, command: str, exit_code: Optional[int] = None, reason: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.reason = reason
        if exit_code is not None:
            message = f"Command failed with exit code {exit_code}: {command}"
        else:
            message = f"Command could not be started: {command}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
