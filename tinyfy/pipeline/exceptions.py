from tinyfy.pipeline.models import SkipReason


class PipelineError(Exception):
    """Base exception for all minification pipeline errors."""


class JobSkipped(PipelineError):
    """Raised when a job is refused before any subprocess is spawned."""

    def __init__(self, reason: SkipReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class InputError(PipelineError):
    """Raised when the file to minify cannot be used as input."""


class EmptyInputError(InputError):
    """Raised when the file to minify has no content."""


class UnreadableInputError(InputError):
    """Raised when the file to minify could not be read."""


class ToolFailedError(PipelineError):
    """Raised when the minifier could not run, failed, or produced nothing."""


class WriteFailedError(PipelineError):
    """Raised when minified output could not be written to disk."""
