class ProcessError(Exception):
    """Base exception for all subprocess-related errors."""


class ProcessSpawnError(ProcessError):
    """Raised when a child process cannot be started at all."""
