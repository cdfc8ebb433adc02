from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(frozen=True)
class NameCount:
    name: str
    count: int


@dataclass
class ComparisonResult:
    only_in_list1: List[str] = field(default_factory=list)
    only_in_list2: List[str] = field(default_factory=list)
    duplicates_in_both: List[NameCount] = field(default_factory=list)


def parse_name_list(text: str) -> List[str]:
    """One name per line; blank lines dropped, inner whitespace collapsed."""
    names: List[str] = []
    for line in (text or "").splitlines():
        name = re.sub(r"\s+", " ", line.strip())
        if name:
            names.append(name)
    return names


def compare_names(names1: Sequence[str], names2: Sequence[str]) -> ComparisonResult:
    """Compare two name lists.

    Names missing from the other list keep their order and repeats. Every name
    seen more than once across both lists is reported with its combined count,
    highest first; ties keep first-seen order.
    """
    set1, set2 = set(names1), set(names2)
    combined = list(names1) + list(names2)
    counts = Counter(combined)
    seen = list(dict.fromkeys(combined))
    repeated = [NameCount(name=n, count=counts[n]) for n in seen if counts[n] > 1]
    repeated.sort(key=lambda nc: -nc.count)
    return ComparisonResult(
        only_in_list1=[n for n in names1 if n not in set2],
        only_in_list2=[n for n in names2 if n not in set1],
        duplicates_in_both=repeated,
    )


def compare_lists(text1: str, text2: str) -> ComparisonResult:
    return compare_names(parse_name_list(text1), parse_name_list(text2))
