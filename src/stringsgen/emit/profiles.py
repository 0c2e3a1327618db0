"""Emission profiles: target-language rendering rules."""

import dataclasses
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..analysis import PlaceholderKind, PlaceholderSpec
from ..errors import ConfigError
from ..naming import ASCII_IDENTIFIER, UNICODE_IDENTIFIER


@dataclass(frozen=True)
class EmissionProfile:
    """Rendering rules for one target language.

    Attributes:
        name: Profile name used for selection.
        template: Built-in Jinja2 template file name.
        filename: Output file name pattern, formatted with ``table`` and the
            resolved template parameters.
        types: Parameter type name per placeholder kind.
        arguments: Call-site expression per placeholder kind, formatted with
            ``name``; kinds without an entry pass the parameter unchanged.
        comment_prefix: Line comment syntax of the target language.
        charset: Pattern of characters stripped from identifiers.
        reserved_words: Identifiers that must be escaped.
        reserved_escape: Escape pattern for reserved identifiers.
        params: Template parameters and their defaults.
        string_as_object: Render STRING placeholders with the OBJECT type
            and argument expression. None defers to the generator setting.
        template_path: Custom template replacing the built-in one.
        description: One-line summary shown by the CLI.
    """
    name: str
    template: str
    filename: str
    types: dict[PlaceholderKind, str]
    arguments: dict[PlaceholderKind, str] = field(default_factory=dict)
    comment_prefix: str = "//"
    charset: re.Pattern = ASCII_IDENTIFIER
    reserved_words: frozenset[str] = frozenset()
    reserved_escape: str = "{name}_"
    params: dict[str, Any] = field(default_factory=dict)
    string_as_object: Optional[bool] = None
    template_path: Optional[Path] = None
    description: str = ""

    def _bucket(self, kind: PlaceholderKind) -> PlaceholderKind:
        if self.string_as_object and kind is PlaceholderKind.STRING:
            return PlaceholderKind.OBJECT
        return kind

    def type_for(self, kind: PlaceholderKind) -> str:
        """Parameter type name for a placeholder kind."""
        return self.types[self._bucket(kind)]

    def argument_for(self, spec: PlaceholderSpec) -> str:
        """Call-site expression passing a placeholder's parameter."""
        pattern = self.arguments.get(self._bucket(spec.kind), "{name}")
        return pattern.format(name=f"p{spec.index}")

    def escape_identifier(self, name: str) -> str:
        """Escape a name that collides with a reserved word."""
        if name in self.reserved_words:
            return self.reserved_escape.format(name=name)
        return name

    def with_options(
        self,
        params: Optional[dict[str, Any]] = None,
        string_as_object: Optional[bool] = None,
        template_path: Optional[Path] = None
    ) -> "EmissionProfile":
        """Copy of the profile with overridden options.

        Args:
            params: Template parameters merged over the defaults.
            string_as_object: Override of the kind bucket option.
            template_path: Custom template file.

        Raises:
            ConfigError: If a parameter is unknown or the template is missing.
        """
        changes: dict[str, Any] = {}
        if params:
            unknown = sorted(set(params) - set(self.params))
            if unknown:
                raise ConfigError(
                    f"Unknown parameter(s) for profile '{self.name}': {', '.join(unknown)}",
                    {"accepted": ", ".join(sorted(self.params))}
                )
            merged = dict(self.params)
            for key, value in params.items():
                if isinstance(self.params[key], bool) and isinstance(value, str):
                    value = _parse_bool(key, value)
                merged[key] = value
            changes["params"] = merged
        if string_as_object is not None:
            changes["string_as_object"] = string_as_object
        if template_path is not None:
            template_path = Path(template_path)
            if not template_path.is_file():
                raise ConfigError(f"Template not found: {template_path}")
            changes["template_path"] = template_path
        return dataclasses.replace(self, **changes)


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Parameter '{key}' expects a boolean, got '{value}'")


SWIFT_RESERVED_WORDS = frozenset({
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "protocol", "public", "rethrows", "static", "struct",
    "subscript", "typealias", "var", "break", "case", "continue", "default",
    "defer", "do", "else", "fallthrough", "for", "guard", "if", "in",
    "repeat", "return", "switch", "where", "while", "as", "Any", "catch",
    "false", "is", "nil", "super", "self", "Self", "throw", "throws",
    "true", "try",
})

OBJC_TYPES = {
    PlaceholderKind.INTEGER: "NSInteger",
    PlaceholderKind.FLOAT: "double",
    PlaceholderKind.STRING: "const char*",
    PlaceholderKind.OBJECT: "id",
}

SWIFT_TYPES = {
    PlaceholderKind.INTEGER: "Int",
    PlaceholderKind.FLOAT: "Float",
    PlaceholderKind.STRING: "UnsafePointer<CChar>",
    PlaceholderKind.OBJECT: "Any",
}

SWIFT_ARGUMENTS = {
    PlaceholderKind.OBJECT: "String(describing: {name})",
}

SWIFT_PARAMS = {
    "enum_name": "L10n",
    "public_access": False,
    "bundle": None,
}

PROFILES: dict[str, EmissionProfile] = {
    profile.name: profile for profile in (
        EmissionProfile(
            name="objc-h",
            template="objc-h.j2",
            filename="{class_name}.h",
            types=OBJC_TYPES,
            params={"class_name": "Loc{table}"},
            description="Objective-C header declaring class methods",
        ),
        EmissionProfile(
            name="objc-m",
            template="objc-m.j2",
            filename="{class_name}.m",
            types=OBJC_TYPES,
            params={"class_name": "Loc{table}"},
            description="Objective-C implementation of the objc-h accessors",
        ),
        EmissionProfile(
            name="swift5",
            template="swift5.j2",
            filename="{table}.swift",
            types=SWIFT_TYPES,
            arguments=SWIFT_ARGUMENTS,
            charset=UNICODE_IDENTIFIER,
            reserved_words=SWIFT_RESERVED_WORDS,
            reserved_escape="`{name}`",
            params=SWIFT_PARAMS,
            description="Swift 5 enum with one flat accessor per key",
        ),
        EmissionProfile(
            name="swift5-structured",
            template="swift5-structured.j2",
            filename="{table}.swift",
            types=SWIFT_TYPES,
            arguments=SWIFT_ARGUMENTS,
            charset=UNICODE_IDENTIFIER,
            reserved_words=SWIFT_RESERVED_WORDS,
            reserved_escape="`{name}`",
            params=SWIFT_PARAMS,
            description="Swift 5 enums nested along key segments",
        ),
    )
}


def get_profile(name: str) -> EmissionProfile:
    """Look up a built-in emission profile.

    Raises:
        ConfigError: If no profile has that name.
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise ConfigError(
            f"Unknown profile '{name}' (expected one of: {', '.join(PROFILES)})"
        ) from None


def list_profiles() -> list[EmissionProfile]:
    """Built-in profiles in registration order."""
    return list(PROFILES.values())
