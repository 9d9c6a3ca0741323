"""Error types shared across the service."""


class AltTextError(Exception):
    """Base class for service errors."""


class StorageIOError(AltTextError):
    """A backing file is missing, corrupt, or cannot be written."""


class ValidationError(AltTextError):
    """
    The request cannot be processed as submitted.

    The message is safe to return to the caller.
    """


class UpstreamError(AltTextError):
    """The vision or fine-tuning API call failed."""
