"""Custom exception hierarchy for the timeline export domain."""

from __future__ import annotations


class ProcessingError(RuntimeError):
    """Raised when the processing pipeline fails."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self), "type": type(self).__name__}
        if self.details:
            payload["details"] = self.details
        return payload


class ArchiveFormatError(ProcessingError):
    """The archive container could not be opened or read."""


class EntryParseError(ProcessingError):
    """An archive entry does not contain valid UTF-8 JSON."""

    def __init__(self, message: str, *, entry: str, details: dict | None = None):
        super().__init__(message, details={"entry": entry, **(details or {})})
        self.entry = entry


class MalformedFieldError(ProcessingError):
    """A required field is missing or is not numeric."""

    def __init__(self, message: str, *, field: str, entry: str | None = None):
        details: dict = {"field": field}
        if entry is not None:
            details["entry"] = entry
        super().__init__(message, details=details)
        self.field = field
        self.entry = entry
