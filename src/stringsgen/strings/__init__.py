"""Resource table parsing and models."""

from .base import TableParser, validate_entries, validate_key
from .formats import JSONTableParser, PropertiesParser, YAMLTableParser
from .models import ResourceEntry, ResourceTable
from .parser import StringsParser
from .registry import available_formats, get_parser, load_table

__all__ = [
    "ResourceEntry",
    "ResourceTable",
    "TableParser",
    "StringsParser",
    "JSONTableParser",
    "YAMLTableParser",
    "PropertiesParser",
    "available_formats",
    "get_parser",
    "load_table",
    "validate_entries",
    "validate_key",
]
