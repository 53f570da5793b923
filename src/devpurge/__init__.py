"""devpurge - find and remove build and dependency folders."""

__version__ = "0.3.0"
