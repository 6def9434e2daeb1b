from __future__ import annotations

import re
from typing import List, Optional, Pattern, Sequence, Tuple, TypeVar

from core.paths import PatternInput, as_patterns

T = TypeVar("T")

_REGEX_RE = re.compile(r"^/(.+)/([imsx]*)$", re.DOTALL)
_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _as_regex(pattern: str) -> Optional[Pattern[str]]:
    # "/expr/flags" is a regular expression, anything else a plain substring
    m = _REGEX_RE.match(pattern)
    if not m:
        return None
    flags = 0
    for ch in m.group(2):
        flags |= _FLAGS[ch]
    try:
        return re.compile(m.group(1), flags)
    except re.error:
        return None


class _Matcher:
    def __init__(self, pattern: str) -> None:
        self._needle = pattern
        self._regex = _as_regex(pattern)

    def __call__(self, content: str) -> bool:
        if self._regex is not None:
            return self._regex.search(content) is not None
        return self._needle in content


class ContentsFilter:
    """Keep items whose content holds every `contains` and no `not_contains`.

    The only filter that reads content; with no patterns it is a no-op and
    performs no reads.
    """

    def __init__(self, *, contains: PatternInput = None, not_contains: PatternInput = None) -> None:
        self._contains: Tuple[_Matcher, ...] = tuple(_Matcher(p) for p in as_patterns(contains))
        self._not_contains: Tuple[_Matcher, ...] = tuple(_Matcher(p) for p in as_patterns(not_contains))

    @property
    def is_noop(self) -> bool:
        return not self._contains and not self._not_contains

    def _keep(self, content: str) -> bool:
        if not all(m(content) for m in self._contains):
            return False
        return not any(m(content) for m in self._not_contains)

    def apply(self, items: Sequence[T]) -> List[T]:
        if self.is_noop:
            return list(items)
        return [item for item in items if self._keep(item.read())]
