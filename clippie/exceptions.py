"""Custom exceptions for Clippie."""


class ClippieError(Exception):
    """Base exception class for Clippie."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error

    def __str__(self):
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class StorageError(ClippieError):
    """Database open, schema or query failure."""
    pass


class ClipboardAccessError(ClippieError):
    """The operating system clipboard could not be read or written."""
    pass


class ConfigError(ClippieError):
    """A required path or location could not be determined."""
    pass


class ValidationError(ClippieError):
    """Invalid user input."""
    pass
