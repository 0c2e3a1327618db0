"""Generation pipeline."""

from .service import (
    GeneratedOutput,
    GenerationResult,
    GenerationService,
    generate,
    generate_files,
    write_outputs,
)

__all__ = [
    "GeneratedOutput",
    "GenerationResult",
    "GenerationService",
    "generate",
    "generate_files",
    "write_outputs",
]
