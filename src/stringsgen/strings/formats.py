"""Parsers for JSON, YAML and Java-style properties resource tables."""

import json
import re
from typing import Any, Optional

import yaml

from ..errors import DuplicateKeyError, TableFormatError
from .base import TableParser
from .models import ResourceEntry


class JSONTableParser(TableParser):
    """Parser for JSON tables.

    The document is an object whose values are templates or nested objects.
    Nested objects are flattened by joining keys with the separator::

        {"apples": {"count": "You have %d apples"}}

    yields the key ``apples.count``. JSON carries no comments or line
    numbers, so entries have neither.
    """

    format_name = "json"
    extensions = ("json",)

    def parse(self, content: str) -> list[ResourceEntry]:
        if not content.strip():
            return []

        try:
            document = json.loads(content, object_pairs_hook=self._unique_pairs)
        except json.JSONDecodeError as e:
            raise TableFormatError(f"Invalid JSON: {e.msg}", line=e.lineno) from e

        if not isinstance(document, dict):
            raise TableFormatError("JSON table must be an object")

        entries: list[ResourceEntry] = []
        self._flatten(document, prefix="", entries=entries)
        return entries

    @staticmethod
    def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in pairs:
            if key in result:
                raise DuplicateKeyError(key)
            result[key] = value
        return result

    def _flatten(self, node: dict, prefix: str, entries: list[ResourceEntry]) -> None:
        for key, value in node.items():
            full_key = flatten_key(prefix, key, self.separator)
            if isinstance(value, dict):
                self._flatten(value, full_key, entries)
            elif isinstance(value, str):
                entries.append(ResourceEntry(key=full_key, template=value))
            else:
                raise TableFormatError(
                    f"Value of '{full_key}' must be a string or an object",
                    key=full_key
                )


class YAMLTableParser(TableParser):
    """Parser for YAML tables.

    Uses the same nested mapping shape as :class:`JSONTableParser`. The
    document is composed rather than loaded so entries keep the line of
    their key.
    """

    format_name = "yaml"
    extensions = ("yml", "yaml")

    def parse(self, content: str) -> list[ResourceEntry]:
        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            line = mark.line + 1 if mark is not None else None
            raise TableFormatError(f"Invalid YAML: {e}", line=line) from e

        if root is None:
            return []
        if not isinstance(root, yaml.MappingNode):
            raise TableFormatError(
                "YAML table must be a mapping", line=root.start_mark.line + 1
            )

        entries: list[ResourceEntry] = []
        self._flatten(root, prefix="", entries=entries)
        return entries

    def _flatten(self, node: yaml.MappingNode, prefix: str, entries: list[ResourceEntry]) -> None:
        seen: dict[str, int] = {}
        for key_node, value_node in node.value:
            line = key_node.start_mark.line + 1
            if not isinstance(key_node, yaml.ScalarNode):
                raise TableFormatError("YAML keys must be scalars", line=line)

            key = key_node.value
            full_key = flatten_key(prefix, key, self.separator)
            if key in seen:
                raise DuplicateKeyError(full_key, line=line, first_line=seen[key])
            seen[key] = line

            if isinstance(value_node, yaml.MappingNode):
                self._flatten(value_node, full_key, entries)
            elif isinstance(value_node, yaml.ScalarNode) and value_node.tag != "tag:yaml.org,2002:null":
                entries.append(ResourceEntry(
                    key=full_key,
                    template=value_node.value,
                    line=line
                ))
            else:
                raise TableFormatError(
                    f"Value of '{full_key}' must be a string or a mapping",
                    key=full_key, line=line
                )


class PropertiesParser(TableParser):
    """Parser for Java-style .properties tables.

    Supports ``key=value``, ``key: value`` and ``key value`` entries,
    ``#``/``!`` comment lines attached to the next entry, backslash line
    continuations and ``\\uXXXX`` escapes. A blank line discards a pending
    comment.
    """

    format_name = "properties"
    extensions = ("properties",)

    # Key runs until the first unescaped separator or whitespace
    KEY_PATTERN = re.compile(r'((?:[^\\=:\s]|\\.)+)\s*[=:]?\s*', re.DOTALL)

    ESCAPES = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}

    def parse(self, content: str) -> list[ResourceEntry]:
        entries = []
        comment_lines: list[str] = []

        for line_no, logical in self._logical_lines(content):
            stripped = logical.lstrip()
            if not stripped:
                comment_lines = []
                continue
            if stripped[0] in '#!':
                comment_lines.append(stripped[1:].strip())
                continue

            match = self.KEY_PATTERN.match(stripped)
            if not match:
                raise TableFormatError(f"Malformed property line '{stripped}'", line=line_no)

            entries.append(ResourceEntry(
                key=self._unescape(match.group(1)),
                template=self._unescape(stripped[match.end():]),
                comment="\n".join(comment_lines) or None,
                line=line_no
            ))
            comment_lines = []

        return entries

    @staticmethod
    def _logical_lines(content: str):
        """Yield (first physical line number, joined text) pairs."""
        physical = content.splitlines()
        i = 0
        while i < len(physical):
            start = i
            text = physical[i]
            while PropertiesParser._continues(text) and i + 1 < len(physical):
                i += 1
                text = text[:-1] + physical[i].lstrip()
            if PropertiesParser._continues(text):
                text = text[:-1]
            yield start + 1, text
            i += 1

    @staticmethod
    def _continues(text: str) -> bool:
        trailing = len(text) - len(text.rstrip('\\'))
        return trailing % 2 == 1 and not text.lstrip().startswith(('#', '!'))

    @classmethod
    def _unescape(cls, s: str) -> str:
        result = []
        i = 0
        while i < len(s):
            char = s[i]
            if char == '\\' and i + 1 < len(s):
                next_char = s[i + 1]
                if next_char == 'u' and re.fullmatch(r'[0-9a-fA-F]{4}', s[i + 2:i + 6]):
                    result.append(chr(int(s[i + 2:i + 6], 16)))
                    i += 6
                    continue
                result.append(cls.ESCAPES.get(next_char, next_char))
                i += 2
            else:
                result.append(char)
                i += 1
        return ''.join(result)


def flatten_key(prefix: Optional[str], key: str, separator: str) -> str:
    """Join a nested key onto its parent prefix."""
    return f"{prefix}{separator}{key}" if prefix else key
