"""Typed accessor code generation for localization string tables."""

__version__ = "0.1.0"

from .config import GeneratorConfig, load_config
from .core import GenerationResult, generate, generate_files, write_outputs
from .emit import EmissionProfile, get_profile, list_profiles
from .strings import ResourceEntry, ResourceTable, load_table

__all__ = [
    "__version__",
    "EmissionProfile",
    "GenerationResult",
    "GeneratorConfig",
    "ResourceEntry",
    "ResourceTable",
    "generate",
    "generate_files",
    "get_profile",
    "list_profiles",
    "load_config",
    "load_table",
    "write_outputs",
]
