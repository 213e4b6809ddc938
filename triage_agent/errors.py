"""
Exceptions for the Triage agent system.

Only ProcessingError crosses the pipeline boundary. The other classes are
raised and handled inside the agents and the shared memory layer.
"""


class TriageError(Exception):
    """Base exception for Triage errors."""
    pass


class ServiceUnavailableError(TriageError):
    """Inference call failed, timed out, or returned schema-invalid output."""
    pass


class StorageUnavailableError(TriageError):
    """Storage backend call failed."""
    pass


class MalformedInputError(TriageError):
    """Content does not parse as the format it was dispatched for."""
    pass


class UnsupportedFormatError(TriageError):
    """Classifier returned a format with no routing rule."""

    def __init__(self, format_name: str):
        self.format = format_name
        super().__init__(f"Unsupported format: {format_name}")


class ProcessingError(TriageError):
    """A session failed with a user-visible error."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
