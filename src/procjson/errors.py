"""Exceptions raised while acquiring the process table."""


class ProcfsError(Exception):
    """Base class for procfs acquisition errors."""


class EnumerationFailure(ProcfsError):
    """The process directory itself could not be listed."""

    def __init__(self, root: str, cause: OSError) -> None:
        super().__init__(f"Failed to read procfs at {root}: {cause}")
        self.root = root
        self.cause = cause


class ProcessReadError(ProcfsError):
    """A single pid could not be turned into a record."""

    def __init__(self, pid: int, message: str) -> None:
        super().__init__(f"pid {pid}: {message}")
        self.pid = pid


class ProcessVanished(ProcessReadError):
    """The stat or cmdline file of a pid could not be read."""


class ParseFailure(ProcessReadError):
    """The stat line of a pid did not have the expected layout."""


class ConfigError(ValueError):
    """An environment variable holds an unusable value."""
