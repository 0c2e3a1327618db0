"""Data models for resource table entries."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ResourceEntry:
    """Represents a single entry in a resource table.

    Attributes:
        key: The hierarchical string key.
        template: The raw format string.
        comment: Optional comment associated with the entry.
        line: 1-based line of the entry in its source file, if known.
    """
    key: str
    template: str
    comment: Optional[str] = None
    line: Optional[int] = field(default=None, compare=False)

    def to_strings_format(self) -> str:
        """Convert entry to .strings file format.

        Returns:
            Formatted string entry with optional comment.
        """
        lines = []
        if self.comment:
            lines.append(f"/* {self.comment} */")

        escaped_key = self._escape(self.key)
        escaped_value = self._escape(self.template)
        lines.append(f'"{escaped_key}" = "{escaped_value}";')

        return "\n".join(lines)

    @staticmethod
    def _escape(s: str) -> str:
        """Escape special characters for .strings format."""
        return escape_control(s.replace("\\", "\\\\").replace('"', '\\"'))

    @staticmethod
    def _unescape(s: str) -> str:
        """Unescape special characters from .strings format."""
        result = []
        i = 0
        while i < len(s):
            if s[i] == '\\' and i + 1 < len(s):
                next_char = s[i + 1]
                if next_char == 'n':
                    result.append('\n')
                elif next_char == 'r':
                    result.append('\r')
                elif next_char == 't':
                    result.append('\t')
                elif next_char in ('"', "'", '\\'):
                    result.append(next_char)
                elif next_char in ('U', 'u') and _is_hex(s[i + 2:i + 6]):
                    result.append(chr(int(s[i + 2:i + 6], 16)))
                    i += 4
                else:
                    result.append(s[i])
                    result.append(next_char)
                i += 2
            else:
                result.append(s[i])
                i += 1
        return ''.join(result)


@dataclass
class ResourceTable:
    """An ordered resource table parsed from one source file.

    Attributes:
        name: Table name used by generated code at runtime.
        entries: Entries in source order.
        path: Source file path, if the table was read from disk.
    """
    name: str
    entries: list[ResourceEntry] = field(default_factory=list)
    path: Optional[Path] = None


def escape_control(s: str) -> str:
    """Escape newlines and tabs so text fits on a single line."""
    return (s
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t"))


def _is_hex(s: str) -> bool:
    return len(s) == 4 and all(c in "0123456789abcdefABCDEF" for c in s)
