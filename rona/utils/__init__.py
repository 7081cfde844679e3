# Rona Utilities Module
# Helper functions for glob pattern matching

from rona.utils.patterns import (
    ExclusionPattern,
    compile_patterns,
    matches_any,
)

__all__ = [
    "ExclusionPattern",
    "compile_patterns",
    "matches_any",
]
