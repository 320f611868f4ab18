"""Exceptions raised by chi; the CLI maps them to exit codes."""


class ChiError(RuntimeError):
    """Base class for errors that terminate the program."""

    exit_code = 1


class ParseError(ChiError):
    """Raised when the command line contains an unknown or malformed token."""

    exit_code = 2


class ResourceOpenError(ChiError):
    """Raised when a target FILE cannot be opened for writing."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot open '{path}': {cause.strerror or cause}")
        self.path = path
        self.cause = cause


class StreamIOError(ChiError):
    """Raised when reading input or writing/flushing an output fails."""

    def __init__(self, context: str, cause: OSError) -> None:
        super().__init__(f"{context} error: {cause.strerror or cause}")
        self.context = context
        self.cause = cause
