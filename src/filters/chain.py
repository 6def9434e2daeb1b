"""Filter chain construction.

The order is fixed here, not inside the finders: file name, included
path, excluded path, then contents. Excludes run after includes so they
always win, and the content filter runs last because it is the only one
that reads.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from core.interfaces import Filter
from core.models import FilterCriteria
from filters.contents import ContentsFilter
from filters.pattern import ExcludePathFilter, FilePatternFilter, PathFilter

T = TypeVar("T")


def build_structural_chain(criteria: FilterCriteria, *, case_sensitive: bool = True) -> List[Filter]:
    chain: List[Filter] = []
    if criteria.name:
        chain.append(FilePatternFilter(criteria.name, case_sensitive=case_sensitive))
    if criteria.path:
        chain.append(PathFilter(criteria.path))
    if criteria.not_path:
        chain.append(ExcludePathFilter(criteria.not_path))
    return chain


def build_filter_chain(criteria: FilterCriteria, *, case_sensitive: bool = True) -> List[Filter]:
    chain = build_structural_chain(criteria, case_sensitive=case_sensitive)
    if criteria.contains or criteria.not_contains:
        chain.append(ContentsFilter(contains=criteria.contains, not_contains=criteria.not_contains))
    return chain


def apply_filters(chain: Sequence[Filter], items: Sequence[T]) -> List[T]:
    out = list(items)
    for f in chain:
        if not out:
            break
        out = f.apply(out)
    return out
