"""Exception hierarchy for the string table code generator."""

from pathlib import Path
from typing import Optional, Sequence


class StringsGenError(Exception):
    """Base exception for all stringsgen errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context rendered after the message.
        fatal: Whether the error aborts generation for its table.
    """

    fatal = True

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ConfigError(StringsGenError):
    """Raised for invalid configuration or an unknown emission profile."""


class TableError(StringsGenError):
    """Base class for errors tied to one resource table entry.

    Attributes:
        key: The offending key, if any.
        path: Source file of the table, if known.
        line: 1-based line in the source file, if known.
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        path: Optional[Path] = None,
        line: Optional[int] = None,
        details: Optional[dict] = None
    ):
        details = dict(details or {})
        if key is not None:
            details.setdefault("key", key)
        if path is not None:
            details.setdefault("path", path)
        if line is not None:
            details.setdefault("line", line)
        super().__init__(message, details)
        self.key = key
        self.path = path
        self.line = line

    def with_location(self, path: Optional[Path]) -> "TableError":
        """Attach the table's source path if the error does not carry one."""
        if path is not None and self.path is None:
            self.path = path
            self.details["path"] = path
        return self


class TableFormatError(TableError):
    """Raised when a table file cannot be read or has an unsupported format."""


class MalformedKeyError(TableError):
    """Raised when a key is empty or has an invalid segment."""


class DuplicateKeyError(TableError):
    """Raised when two entries of one table share a key."""

    def __init__(
        self,
        key: str,
        line: Optional[int] = None,
        first_line: Optional[int] = None,
        path: Optional[Path] = None
    ):
        details = {"first_line": first_line} if first_line is not None else None
        super().__init__(
            f"Duplicate key '{key}'",
            key=key, path=path, line=line, details=details
        )
        self.first_line = first_line


class UnsupportedDirectiveError(TableError):
    """Raised for a format directive outside the supported conversion table."""

    def __init__(
        self,
        directive: str,
        position: int,
        key: Optional[str] = None,
        line: Optional[int] = None
    ):
        super().__init__(
            f"Unsupported format directive '{directive}' at position {position}",
            key=key, line=line
        )
        self.directive = directive
        self.position = position


class NonContiguousIndicesError(TableError):
    """Raised when positional placeholder indices are not exactly 1..N."""

    def __init__(
        self,
        indices: Sequence[int],
        key: Optional[str] = None,
        line: Optional[int] = None,
        reason: Optional[str] = None
    ):
        message = reason or (
            f"Placeholder indices {list(indices)} are not contiguous from 1"
        )
        super().__init__(message, key=key, line=line)
        self.indices = list(indices)


class IdentifierCollisionError(TableError):
    """Raised when two distinct keys derive the same identifier."""

    def __init__(self, identifier: str, keys: Sequence[str], path: Optional[Path] = None):
        keys = list(keys)
        super().__init__(
            f"Keys {', '.join(repr(k) for k in keys)} all derive identifier '{identifier}'",
            key=keys[-1], path=path
        )
        self.identifier = identifier
        self.keys = keys


class EmptyTable(TableError):
    """Notice for a table without entries. Generation still succeeds."""

    fatal = False

    def __init__(self, table: str, path: Optional[Path] = None):
        super().__init__(f"Table '{table}' has no entries", path=path)
        self.table = table


class TemplateRenderError(StringsGenError):
    """Raised when an emission template fails to load or render."""
