"""
Identifier derivation for generated accessors.

Keys are hierarchical (``settings.user__profile_section.HEADER_TITLE``).
Each segment is split into words on ``_``, ``-`` and other non-word
characters; the first segment is lower-camel-cased and every following
segment Pascal-cased, giving ``settingsUserProfileSectionHeaderTitle``.
"""

import re
from dataclasses import dataclass, field

from .analysis import PlaceholderSpec, analyze_template
from .errors import IdentifierCollisionError, MalformedKeyError, TableError
from .strings.base import DEFAULT_SEPARATOR
from .strings.models import ResourceEntry, ResourceTable

# Characters outside these classes are stripped from derived identifiers
ASCII_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")
UNICODE_IDENTIFIER = re.compile(r"[^\w]")

WORD_SPLIT = re.compile(r"[\W_]+")


@dataclass(frozen=True)
class AccessorSignature:
    """Call signature of one generated accessor.

    Attributes:
        identifier: Flat identifier derived from the key.
        parameters: Placeholders in argument order.
        entry: The resource entry the accessor returns.
    """
    identifier: str
    parameters: tuple[PlaceholderSpec, ...]
    entry: ResourceEntry
    returns_formatted_string: bool = field(default=True, init=False)

    @property
    def key(self) -> str:
        return self.entry.key

    @property
    def arity(self) -> int:
        return len(self.parameters)


def split_words(segment: str) -> list[str]:
    """Split a key segment into words."""
    return [word for word in WORD_SPLIT.split(segment) if word]


def lower_first_word(word: str) -> str:
    """Lowercase the leading capital run of a word.

    ``URLString`` becomes ``urlString``, ``Object`` becomes ``object`` and
    an all-caps word is lowered entirely.
    """
    if word.isupper():
        return word.lower()

    run = 0
    while run < len(word) and word[run].isupper():
        run += 1

    if run == 0:
        return word
    if run == 1:
        return word[0].lower() + word[1:]
    return word[:run - 1].lower() + word[run - 1:]


def capitalize_word(word: str) -> str:
    """Uppercase the first letter, lowering all-caps words first."""
    if word.isupper():
        word = word.lower()
    return word[:1].upper() + word[1:]


def camel_case(segment: str) -> str:
    """Lower camel case form of one key segment."""
    words = split_words(segment)
    if not words:
        return ""
    return lower_first_word(words[0]) + "".join(capitalize_word(w) for w in words[1:])


def pascal_case(segment: str) -> str:
    """Pascal case form of one key segment."""
    return "".join(capitalize_word(w) for w in split_words(segment))


def sanitize_identifier(name: str, charset: re.Pattern = ASCII_IDENTIFIER) -> str:
    """Strip characters outside ``charset`` and guard a leading digit."""
    name = charset.sub("", name)
    if name[:1].isdigit():
        name = "_" + name
    return name


def derive_identifier(
    key: str,
    separator: str = DEFAULT_SEPARATOR,
    charset: re.Pattern = ASCII_IDENTIFIER
) -> str:
    """Derive the accessor identifier for a key.

    Args:
        key: The hierarchical key.
        separator: Delimiter between key segments.
        charset: Pattern matching characters to strip.

    Returns:
        The identifier.

    Raises:
        MalformedKeyError: If nothing of the key survives derivation.
    """
    segments = key.split(separator)
    name = camel_case(segments[0]) + "".join(pascal_case(s) for s in segments[1:])
    identifier = sanitize_identifier(name, charset)
    if not identifier:
        raise MalformedKeyError(f"Key '{key}' does not yield an identifier", key=key)
    return identifier


def derive_signatures(
    table: ResourceTable,
    separator: str = DEFAULT_SEPARATOR,
    charset: re.Pattern = ASCII_IDENTIFIER
) -> list[AccessorSignature]:
    """Build the accessor signatures of a table in table order.

    Args:
        table: The parsed table.
        separator: Delimiter between key segments.
        charset: Pattern matching characters to strip from identifiers.

    Returns:
        One AccessorSignature per entry.

    Raises:
        UnsupportedDirectiveError: From placeholder analysis.
        NonContiguousIndicesError: From placeholder analysis.
        IdentifierCollisionError: When two keys derive one identifier.
    """
    signatures = []
    owners: dict[str, str] = {}

    for entry in table.entries:
        try:
            parameters = analyze_template(entry.template, key=entry.key, line=entry.line)
            identifier = derive_identifier(entry.key, separator, charset)
        except TableError as e:
            raise e.with_location(table.path)

        if identifier in owners:
            raise IdentifierCollisionError(
                identifier, [owners[identifier], entry.key], path=table.path
            )
        owners[identifier] = entry.key

        signatures.append(AccessorSignature(
            identifier=identifier,
            parameters=parameters,
            entry=entry
        ))

    return signatures

