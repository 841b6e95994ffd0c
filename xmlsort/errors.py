"""Failure types raised by xmlsort components.

Components raise these and never print; the command line is the single
place where failures are turned into a message and an exit status.
"""

from __future__ import annotations

from pathlib import Path


class XmlSortError(Exception):
    """Base class for all xmlsort failures."""


class DocumentIOError(XmlSortError):
    """A document or directory could not be read or written."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DocumentParseError(XmlSortError):
    """A file's contents are not well-formed XML."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ConfigError(XmlSortError):
    """A settings file is unreadable or holds invalid values."""
