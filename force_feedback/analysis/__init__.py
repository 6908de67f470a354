"""Method-length analysis: scanning, tier resolution and occurrence caching.

TreeSitterSyntaxProvider is resolved on first attribute access, so the core
runs against any host-supplied syntax provider without tree-sitter or the C#
grammar installed.
"""

from typing import Any

from .occurrences import (
    EMPTY_OCCURRENCES,
    Occurrence,
    OccurrenceCache,
    OccurrenceSet,
    build_occurrences,
)
from .scanner import SyntaxScanner, count_body_lines
from .thresholds import resolve_tier

__all__ = [
    "EMPTY_OCCURRENCES",
    "Occurrence",
    "OccurrenceCache",
    "OccurrenceSet",
    "SyntaxScanner",
    "TreeSitterSyntaxProvider",
    "build_occurrences",
    "count_body_lines",
    "resolve_tier",
]


def __getattr__(name: str) -> Any:
    if name == "TreeSitterSyntaxProvider":
        from .tree_sitter_provider import TreeSitterSyntaxProvider

        return TreeSitterSyntaxProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
