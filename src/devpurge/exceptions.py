"""Exceptions raised by devpurge."""


class DevPurgeError(Exception):
    """Base class for devpurge errors."""


class InvalidRootError(DevPurgeError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ScanCancelledError(DevPurgeError):
    """A size computation observed the stop signal and gave up."""
