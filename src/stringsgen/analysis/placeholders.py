"""Format directive scanning and placeholder kind inference."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import NonContiguousIndicesError, UnsupportedDirectiveError


class PlaceholderKind(Enum):
    """Kind of value substituted for a placeholder."""
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    OBJECT = "object"


@dataclass(frozen=True)
class PlaceholderSpec:
    """A placeholder of a template.

    Attributes:
        index: 1-based argument position.
        kind: Kind of the substituted value.
    """
    index: int
    kind: PlaceholderKind


# Conversion character -> placeholder kind. Characters and pointers travel
# through varargs as machine integers.
CONVERSION_KINDS: dict[str, PlaceholderKind] = {
    **dict.fromkeys("diouxXDOUcCp", PlaceholderKind.INTEGER),
    **dict.fromkeys("fFeEgGaA", PlaceholderKind.FLOAT),
    **dict.fromkeys("sS", PlaceholderKind.STRING),
    **dict.fromkeys("@", PlaceholderKind.OBJECT),
}

# printf / Foundation format directive
DIRECTIVE_PATTERN = re.compile(
    r"%"
    r"(?:(?P<position>\d+)\$)?"
    r"(?P<flags>[-+ 0#']*)"
    r"(?P<width>\d+|\*)?"
    r"(?:\.(?P<precision>\d*|\*))?"
    r"(?P<length>hh|h|ll|l|q|L|z|t|j)?"
    r"(?P<conversion>.)?",
    re.DOTALL
)


def analyze_template(
    template: str,
    key: Optional[str] = None,
    line: Optional[int] = None
) -> tuple[PlaceholderSpec, ...]:
    """Derive the placeholders of a template.

    Directives are scanned left to right. ``%%`` is a literal percent sign.
    Sequential directives are numbered in order of appearance; explicitly
    positional ones (``%2$@``) must cover exactly 1..N.

    Args:
        template: The raw format string.
        key: Key of the entry, reported in errors.
        line: Source line of the entry, reported in errors.

    Returns:
        Placeholders sorted by index.

    Raises:
        UnsupportedDirectiveError: For a conversion outside the supported
            table, a ``*`` width or precision, or a trailing ``%``.
        NonContiguousIndicesError: When positional indices have a gap or a
            repeat, or positional and sequential directives are mixed.
    """
    positional: list[PlaceholderSpec] = []
    sequential: list[PlaceholderKind] = []

    for match in DIRECTIVE_PATTERN.finditer(template):
        conversion = match.group("conversion")
        if conversion == "%":
            continue

        directive = match.group(0)
        if conversion is None:
            raise UnsupportedDirectiveError(directive, match.start(), key=key, line=line)
        if match.group("width") == "*" or match.group("precision") == "*":
            raise UnsupportedDirectiveError(directive, match.start(), key=key, line=line)

        kind = CONVERSION_KINDS.get(conversion)
        if kind is None:
            raise UnsupportedDirectiveError(directive, match.start(), key=key, line=line)

        position = match.group("position")
        if position is not None:
            positional.append(PlaceholderSpec(index=int(position), kind=kind))
        else:
            sequential.append(kind)

    if positional and sequential:
        raise NonContiguousIndicesError(
            [spec.index for spec in positional],
            key=key,
            line=line,
            reason="Template mixes positional and sequential placeholders"
        )

    if not positional:
        return tuple(
            PlaceholderSpec(index=i, kind=kind)
            for i, kind in enumerate(sequential, 1)
        )

    indices = [spec.index for spec in positional]
    if sorted(indices) != list(range(1, len(indices) + 1)):
        raise NonContiguousIndicesError(indices, key=key, line=line)

    return tuple(sorted(positional, key=lambda spec: spec.index))
