"""Custom exceptions for treediff."""

from __future__ import annotations

from typing import Optional


class TreeDiffError(Exception):
    """Base exception for treediff errors."""
    pass


class DocumentParseError(TreeDiffError):
    """Raised when a JSON or YAML document cannot be parsed."""
    def __init__(
        self,
        message: str,
        source: str = "<string>",
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        location = source
        if line is not None:
            location = f"{source}:{line}"
            if column is not None:
                location = f"{location}:{column}"
        super().__init__(f"Failed to parse {location}: {message}")
        self.message = message
        self.source = source
        self.line = line
        self.column = column


class DocumentReadError(TreeDiffError):
    """Raised when a document file exists but cannot be read."""
    def __init__(self, source: str, reason: str):
        super().__init__(f"Could not read {source}: {reason}")
        self.source = source
        self.reason = reason


class NonObjectRootError(TreeDiffError):
    """Raised when a document root is not an object."""
    def __init__(self, source: str, type_name: str):
        super().__init__(
            f"Document root of {source} must be an object, got {type_name}"
        )
        self.source = source
        self.type_name = type_name


class ConfigError(TreeDiffError):
    """Raised when a working context cannot be built from the given options."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResultStoreError(TreeDiffError):
    """Raised when saved results cannot be written or read back."""
    def __init__(self, message: str, path: str):
        super().__init__(f"{message}: {path}")
        self.message = message
        self.path = path
