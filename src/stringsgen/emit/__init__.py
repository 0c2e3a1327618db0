"""Source emission for target languages."""

from .emitter import Emitter, GenerationUnit, StructuredNode, trace_comment
from .profiles import EmissionProfile, get_profile, list_profiles

__all__ = [
    "Emitter",
    "EmissionProfile",
    "GenerationUnit",
    "StructuredNode",
    "get_profile",
    "list_profiles",
    "trace_comment",
]
