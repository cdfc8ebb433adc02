"""Name-list comparison helpers."""

from .compare import (
    ComparisonResult,
    NameCount,
    compare_lists,
    compare_names,
    parse_name_list,
)

__all__ = [
    "ComparisonResult",
    "NameCount",
    "compare_lists",
    "compare_names",
    "parse_name_list",
]
