"""Common base for resource table parsers."""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from ..errors import DuplicateKeyError, MalformedKeyError, TableError, TableFormatError
from .models import ResourceEntry, ResourceTable

# A key segment: word characters and hyphens
SEGMENT_PATTERN = re.compile(r'^[\w-]+$')

DEFAULT_SEPARATOR = "."


def validate_key(key: str, separator: str = DEFAULT_SEPARATOR, line: Optional[int] = None) -> None:
    """Check a key against the key grammar.

    Args:
        key: The key to check.
        separator: Hierarchical delimiter between segments.
        line: Line of the entry, reported in the error.

    Raises:
        MalformedKeyError: If the key is empty or has an invalid segment.
    """
    if not key:
        raise MalformedKeyError("Empty key", key=key, line=line)

    for segment in key.split(separator):
        if not segment:
            raise MalformedKeyError(
                f"Key '{key}' has an empty segment", key=key, line=line
            )
        if not SEGMENT_PATTERN.match(segment):
            raise MalformedKeyError(
                f"Key '{key}' has invalid segment '{segment}'", key=key, line=line
            )


def validate_entries(
    entries: Iterable[ResourceEntry],
    separator: str = DEFAULT_SEPARATOR
) -> None:
    """Validate key syntax and uniqueness for a sequence of entries.

    Raises:
        MalformedKeyError: On the first malformed key.
        DuplicateKeyError: On the first repeated key.
    """
    seen: dict[str, ResourceEntry] = {}
    for entry in entries:
        validate_key(entry.key, separator, entry.line)
        if entry.key in seen:
            raise DuplicateKeyError(
                entry.key, line=entry.line, first_line=seen[entry.key].line
            )
        seen[entry.key] = entry


class TableParser(ABC):
    """Abstract base class for resource table parsers.

    Subclasses implement :meth:`parse` for their syntax; reading files,
    validation, and table construction are shared.
    """

    #: Format name used for explicit selection
    format_name: str = ""

    #: File extensions handled by the parser, without the dot
    extensions: tuple[str, ...] = ()

    def __init__(self, separator: str = DEFAULT_SEPARATOR):
        self.separator = separator

    @abstractmethod
    def parse(self, content: str) -> list[ResourceEntry]:
        """Parse table content into entries in source order.

        Args:
            content: The text of the table.

        Returns:
            List of ResourceEntry objects.
        """
        pass

    def parse_table(self, content: str, name: str, path: Optional[Path] = None) -> ResourceTable:
        """Parse and validate content into a ResourceTable.

        Raises:
            MalformedKeyError: If a key does not follow the key grammar.
            DuplicateKeyError: If a key appears twice.
        """
        try:
            entries = self.parse(content)
            validate_entries(entries, self.separator)
        except TableError as e:
            raise e.with_location(path)
        return ResourceTable(name=name, entries=entries, path=path)

    def parse_file(self, path: Path) -> ResourceTable:
        """Parse a table file.

        The table is named after the file stem.

        Args:
            path: Path to the table file.

        Returns:
            The parsed ResourceTable.
        """
        path = Path(path)
        content = self._read_file(path)
        return self.parse_table(content, name=path.stem, path=path)

    def _read_file(self, path: Path) -> str:
        """Read a table file as UTF-8 text."""
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise TableFormatError(f"Cannot read table: {e}", path=path) from e
