"""Configuration for the string table code generator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .emit.profiles import EmissionProfile, get_profile
from .errors import ConfigError

DEFAULT_CONFIG_FILE = "stringsgen.yml"


@dataclass
class GeneratorConfig:
    """Configuration shared by every table of a run.

    Attributes:
        separator: Delimiter between hierarchical key segments.
        jobs: Number of tables processed in parallel.
        string_as_object: Render string placeholders with the object type.
        input_format: Table format overriding extension detection.
        log_level: Logging level name, or None for the environment default.
    """
    separator: str = "."
    jobs: int = 1
    string_as_object: bool = False
    input_format: Optional[str] = None
    log_level: Optional[str] = None

    def __post_init__(self):
        if not self.separator:
            raise ConfigError("Key separator must not be empty")
        if not isinstance(self.jobs, int) or self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")


@dataclass
class OutputConfig:
    """One generated output of a configuration file.

    Attributes:
        profile: Emission profile name.
        output: Output file, or directory when several tables are generated.
        params: Template parameters for the profile.
        template_path: Custom template replacing the profile's built-in one.
        string_as_object: Per-output override of the kind bucket option.
    """
    profile: str
    output: Path
    params: dict[str, Any] = field(default_factory=dict)
    template_path: Optional[Path] = None
    string_as_object: Optional[bool] = None

    def build_profile(self) -> EmissionProfile:
        """Resolve the emission profile with this output's options."""
        return get_profile(self.profile).with_options(
            params=self.params,
            string_as_object=self.string_as_object,
            template_path=self.template_path
        )


@dataclass
class RunConfig:
    """A configuration file: generator settings, inputs and outputs."""
    generator: GeneratorConfig
    inputs: list[Path]
    outputs: list[OutputConfig]


GENERATOR_KEYS = {"separator", "jobs", "string_as_object", "input_format", "log_level"}
OUTPUT_KEYS = {"profile", "output", "params", "template_path", "string_as_object"}


def load_config(path: Union[str, Path]) -> RunConfig:
    """Load a stringsgen.yml configuration file.

    Relative input, output and template paths are resolved against the
    directory holding the configuration file.

    Args:
        path: Path to the YAML configuration.

    Returns:
        The parsed RunConfig.

    Raises:
        ConfigError: If the file is missing, invalid YAML, or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(content, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {path}")

    return parse_config(content, base_dir=path.parent)


def parse_config(content: dict[str, Any], base_dir: Path = Path(".")) -> RunConfig:
    """Build a RunConfig from an already loaded mapping."""
    strings = content.get("strings")
    if not isinstance(strings, dict):
        raise ConfigError("Configuration needs a 'strings' mapping")

    unknown = sorted(set(content) - GENERATOR_KEYS - {"strings"})
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
    generator = GeneratorConfig(**{k: v for k, v in content.items() if k in GENERATOR_KEYS})

    inputs = strings.get("inputs")
    if isinstance(inputs, str):
        inputs = [inputs]
    if not inputs or not isinstance(inputs, list):
        raise ConfigError("'strings.inputs' must list at least one table")

    outputs = strings.get("outputs")
    if isinstance(outputs, dict):
        outputs = [outputs]
    if not outputs or not isinstance(outputs, list):
        raise ConfigError("'strings.outputs' must list at least one output")

    return RunConfig(
        generator=generator,
        inputs=[base_dir / Path(p) for p in inputs],
        outputs=[_parse_output(entry, base_dir) for entry in outputs]
    )


def _parse_output(entry: Any, base_dir: Path) -> OutputConfig:
    if not isinstance(entry, dict):
        raise ConfigError(f"Output entry must be a mapping, got {entry!r}")

    unknown = sorted(set(entry) - OUTPUT_KEYS)
    if unknown:
        raise ConfigError(f"Unknown output key(s): {', '.join(unknown)}")
    for required in ("profile", "output"):
        if required not in entry:
            raise ConfigError(f"Output entry is missing '{required}'")

    params = entry.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigError("'params' must be a mapping")

    template_path = entry.get("template_path")
    return OutputConfig(
        profile=entry["profile"],
        output=base_dir / Path(entry["output"]),
        params=params,
        template_path=base_dir / Path(template_path) if template_path else None,
        string_as_object=entry.get("string_as_object")
    )
