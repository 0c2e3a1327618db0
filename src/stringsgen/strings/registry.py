"""Parser selection by file extension or format name."""

from pathlib import Path
from typing import Optional, Union

from ..errors import TableFormatError
from .base import DEFAULT_SEPARATOR, TableParser
from .formats import JSONTableParser, PropertiesParser, YAMLTableParser
from .models import ResourceTable
from .parser import StringsParser

PARSERS: tuple[type[TableParser], ...] = (
    StringsParser,
    JSONTableParser,
    YAMLTableParser,
    PropertiesParser,
)


def available_formats() -> list[str]:
    """Names accepted by :func:`get_parser`'s ``fmt`` argument."""
    return [parser.format_name for parser in PARSERS]


def get_parser(
    path: Optional[Union[str, Path]] = None,
    fmt: Optional[str] = None,
    separator: str = DEFAULT_SEPARATOR
) -> TableParser:
    """Pick the parser for a table.

    Args:
        path: Table path; its extension selects the parser.
        fmt: Explicit format name, overriding the extension.
        separator: Key separator passed to the parser.

    Returns:
        A parser instance.

    Raises:
        TableFormatError: If no parser handles the format or extension.
    """
    if fmt:
        for parser_cls in PARSERS:
            if parser_cls.format_name == fmt:
                return parser_cls(separator=separator)
        raise TableFormatError(
            f"Unknown table format '{fmt}' (expected one of: {', '.join(available_formats())})"
        )

    if path is None:
        raise TableFormatError("Either a path or a format is required")

    extension = Path(path).suffix.lstrip('.').lower()
    for parser_cls in PARSERS:
        if extension in parser_cls.extensions:
            return parser_cls(separator=separator)

    raise TableFormatError(
        f"Unsupported table extension '.{extension}'", path=Path(path)
    )


def load_table(
    path: Union[str, Path],
    fmt: Optional[str] = None,
    separator: str = DEFAULT_SEPARATOR
) -> ResourceTable:
    """Parse a table file with the parser matching its format."""
    path = Path(path)
    return get_parser(path, fmt, separator).parse_file(path)
