"""Placeholder analysis of format templates."""

from .placeholders import (
    CONVERSION_KINDS,
    PlaceholderKind,
    PlaceholderSpec,
    analyze_template,
)

__all__ = ["CONVERSION_KINDS", "PlaceholderKind", "PlaceholderSpec", "analyze_template"]
