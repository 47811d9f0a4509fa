"""ignorewalk — directory walking driven by gitignore-style include/exclude patterns."""

__version__ = "0.1.0"


class IgnoreWalkError(Exception):
    """Base class for all errors raised by ignorewalk.

    The CLI prints the message to stderr and exits with code 1.
    """


class InvalidPatternError(IgnoreWalkError):
    """A pattern is neither a string nor a well-formed compiled record."""


class RootNotADirectoryError(IgnoreWalkError):
    """The root passed to a top-level operation is missing or not a directory."""


class DirectoryUnreadableError(IgnoreWalkError):
    """A directory could not be listed during a walk.

    Attributes:
        path: The directory that failed to open.
    """

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"cannot read directory '{path}'")
