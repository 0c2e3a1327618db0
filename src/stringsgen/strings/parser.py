"""Parser for Apple .strings files."""

import re
from pathlib import Path
from typing import Optional

from ..errors import TableFormatError
from .base import TableParser
from .models import ResourceEntry


class StringsParser(TableParser):
    """Parser for Apple .strings files.

    Handles both UTF-8 and UTF-16 encoded files, attaches the preceding
    comment to each entry, and properly handles escape sequences.
    """

    format_name = "strings"
    extensions = ("strings",)

    # Pattern to match string entries: "key" = "value";
    ENTRY_PATTERN = re.compile(
        r'"((?:[^"\\]|\\.)*)"\s*=\s*"((?:[^"\\]|\\.)*)"\s*;',
        re.DOTALL
    )

    # Pattern to match comments: /* ... */
    COMMENT_PATTERN = re.compile(r'/\*\s*(.*?)\s*\*/', re.DOTALL)

    # Pattern to match line comments: // ...
    LINE_COMMENT_PATTERN = re.compile(r'//[ \t]*(.*)')

    WHITESPACE_PATTERN = re.compile(r'\s*')

    def parse(self, content: str) -> list[ResourceEntry]:
        """Parse .strings content into ResourceEntry objects.

        Args:
            content: The content of a .strings file.

        Returns:
            List of ResourceEntry objects in file order.

        Raises:
            TableFormatError: If the content has text that is neither an
                entry nor a comment.
        """
        entries = []
        current_comment: Optional[str] = None

        pos = 0
        line = 1
        if content.startswith('\ufeff'):
            pos = 1

        while True:
            # Skip whitespace, keeping track of the line number
            ws_end = self.WHITESPACE_PATTERN.match(content, pos).end()
            line += content.count('\n', pos, ws_end)
            pos = ws_end
            if pos >= len(content):
                break

            # Check for block comment
            if content.startswith('/*', pos):
                comment_match = self.COMMENT_PATTERN.match(content, pos)
                if not comment_match:
                    raise TableFormatError("Unterminated comment", line=line)
                current_comment = comment_match.group(1).strip() or None
                line += content.count('\n', pos, comment_match.end())
                pos = comment_match.end()
                continue

            # Check for line comment
            if content.startswith('//', pos):
                comment_match = self.LINE_COMMENT_PATTERN.match(content, pos)
                current_comment = comment_match.group(1).strip() or None
                pos = comment_match.end()
                continue

            # Check for string entry
            entry_match = self.ENTRY_PATTERN.match(content, pos)
            if not entry_match:
                snippet = content[pos:pos + 30].split('\n')[0]
                raise TableFormatError(f"Unexpected content '{snippet}'", line=line)

            entries.append(ResourceEntry(
                key=ResourceEntry._unescape(entry_match.group(1)),
                template=ResourceEntry._unescape(entry_match.group(2)),
                comment=current_comment,
                line=line
            ))
            current_comment = None
            line += content.count('\n', pos, entry_match.end())
            pos = entry_match.end()

        return entries

    def _read_file(self, path: Path) -> str:
        """Read a .strings file with automatic encoding detection.

        Args:
            path: Path to the file.

        Returns:
            File content as string.
        """
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise TableFormatError(f"Cannot read table: {e}", path=path) from e

        # Check for UTF-16 BOM
        if raw.startswith(b'\xff\xfe') or raw.startswith(b'\xfe\xff'):
            return raw.decode('utf-16')

        # Try UTF-8 first (more common in modern iOS)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            # Fall back to UTF-16
            try:
                return raw.decode('utf-16')
            except UnicodeDecodeError as e:
                raise TableFormatError(f"Cannot decode table: {e}", path=path) from e
