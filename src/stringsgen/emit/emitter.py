"""Jinja2-based emission of accessor source files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import jinja2

from ..errors import TemplateRenderError
from ..naming import AccessorSignature, camel_case, pascal_case, sanitize_identifier
from ..strings.base import DEFAULT_SEPARATOR
from ..strings.models import ResourceTable, escape_control
from ..utils.logging import get_logger
from .profiles import EmissionProfile

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

TOOL_NAME = "stringsgen"


@dataclass
class GenerationUnit:
    """Everything emitted for one resource table.

    Attributes:
        table: The parsed table.
        signatures: Accessor signatures in table order.
        generator_version: Version tag written in the header.
        separator: Key separator, used to nest structured output.
    """
    table: ResourceTable
    signatures: list[AccessorSignature]
    generator_version: str
    separator: str = DEFAULT_SEPARATOR

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def source_path(self) -> Optional[str]:
        if self.table.path is None:
            return None
        return Path(self.table.path).as_posix()


@dataclass
class StructuredNode:
    """One enum level of structured output."""
    name: str
    leaves: list[tuple[str, AccessorSignature]] = field(default_factory=list)
    children: list["StructuredNode"] = field(default_factory=list)

    def child(self, name: str) -> "StructuredNode":
        for node in self.children:
            if node.name == name:
                return node
        node = StructuredNode(name)
        self.children.append(node)
        return node


class Emitter:
    """Renders a GenerationUnit with an emission profile's template."""

    def __init__(self, profile: EmissionProfile):
        self.profile = profile
        self.env = self._setup_jinja_env()

    def _setup_jinja_env(self) -> jinja2.Environment:
        """Setup Jinja2 environment."""
        search_path = [str(TEMPLATE_DIR)]
        if self.profile.template_path is not None:
            search_path.insert(0, str(Path(self.profile.template_path).parent))

        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(search_path),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

        profile = self.profile
        env.filters["ctype"] = lambda spec: profile.type_for(spec.kind)
        env.filters["argument"] = profile.argument_for
        env.filters["escape_identifier"] = profile.escape_identifier
        env.filters["string_literal"] = string_literal
        env.filters["chomp"] = lambda text: str(text).rstrip("\n")
        return env

    @property
    def template_name(self) -> str:
        if self.profile.template_path is not None:
            return Path(self.profile.template_path).name
        return self.profile.template

    def emit(self, unit: GenerationUnit) -> str:
        """Render the source text for a unit.

        Args:
            unit: The table and its signatures.

        Returns:
            Source text ending with a single newline.

        Raises:
            TemplateRenderError: If the template fails to load or render.
        """
        try:
            template = self.env.get_template(self.template_name)
            text = template.render(**self._get_template_context(unit))
        except jinja2.TemplateError as e:
            raise TemplateRenderError(
                f"Template rendering failed: {e}",
                {"profile": self.profile.name, "template": self.template_name}
            ) from e

        logger.debug(
            "Rendered %d accessor(s) for table %s with %s",
            len(unit.signatures), unit.name, self.template_name
        )
        return text.replace("\r\n", "\n").rstrip("\n") + "\n"

    def resolve_params(self, table: ResourceTable) -> dict[str, Any]:
        """Template parameters with ``{table}`` placeholders filled in."""
        table_name = pascal_case(table.name) or table.name
        return {
            key: value.replace("{table}", table_name) if isinstance(value, str) else value
            for key, value in self.profile.params.items()
        }

    def output_filename(self, table: ResourceTable) -> str:
        """File name of the generated source for a table."""
        return self.profile.filename.format(table=table.name, **self.resolve_params(table))

    def _get_template_context(self, unit: GenerationUnit) -> dict[str, Any]:
        params = self.resolve_params(unit.table)
        return {
            **params,
            "access": "public" if params.get("public_access") else "internal",
            "header": self._header_lines(unit),
            "comment": self.profile.comment_prefix,
            "table_name": unit.name,
            "signatures": unit.signatures,
            "tree": self.build_tree(unit),
            "trace_comment": trace_comment,
            "profile": self.profile,
        }

    def _header_lines(self, unit: GenerationUnit) -> list[str]:
        origin = f" from {unit.source_path}" if unit.source_path else ""
        return [
            f"Generated by {TOOL_NAME} {unit.generator_version}{origin}",
            "Do not edit: changes are overwritten when the file is regenerated.",
        ]

    def build_tree(self, unit: GenerationUnit) -> StructuredNode:
        """Nest signatures along key segments for structured output.

        Leaves keep table order within their level; child levels appear in
        order of first use.
        """
        root = StructuredNode(name="")
        charset = self.profile.charset
        for signature in unit.signatures:
            *parents, last = signature.key.split(unit.separator)
            node = root
            for segment in parents:
                name = sanitize_identifier(pascal_case(segment), charset)
                node = node.child(self.profile.escape_identifier(name))
            name = sanitize_identifier(camel_case(last), charset) or signature.identifier
            node.leaves.append((self.profile.escape_identifier(name), signature))
        return root


def trace_comment(signature: AccessorSignature) -> str:
    """The ``<key> --> "<template>"`` line preceding an accessor."""
    return f'{signature.key} --> "{escape_control(signature.entry.template)}"'


def string_literal(text: str) -> str:
    """Escape text for a double-quoted C, Objective-C or Swift literal."""
    return escape_control(str(text).replace("\\", "\\\\").replace('"', '\\"'))
