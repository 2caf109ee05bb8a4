"""Include/exclude filtering of table names with shell globs."""

from __future__ import annotations

import fnmatch
from typing import Iterable, Tuple

from dbgrep.errors import PatternError
from dbgrep.utils.logging import get_logger

logger = get_logger(__name__)


def validate_pattern(pattern: str) -> None:
    """Check that every ``[`` in a glob opens a closed character class.

    ``fnmatch`` silently treats an unclosed ``[`` as a literal, which would
    turn a typo into a pattern that never matches.

    Raises:
        PatternError: If the pattern is malformed
    """
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] != "[":
            i += 1
            continue

        j = i + 1
        if j < n and pattern[j] in "!^":
            j += 1
        # A leading "]" is a literal member of the class
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            raise PatternError(pattern)
        i = j + 1


def _normalize(pattern: str) -> str:
    # fnmatch spells negation "[!...]"; accept the "[^...]" spelling as well
    return pattern.replace("[^", "[!")


def is_included(name: str, include: Iterable[str]) -> bool:
    """True if the table matches at least one include pattern.

    Matching is anchored and case-sensitive.
    """
    for pattern in include:
        validate_pattern(pattern)
        if fnmatch.fnmatchcase(name, _normalize(pattern)):
            return True
    return False


def is_excluded(name: str, exclude: Iterable[str]) -> bool:
    """True if the table matches any exclude pattern."""
    for pattern in exclude:
        validate_pattern(pattern)
        if fnmatch.fnmatchcase(name, _normalize(pattern)):
            return True
    return False


class TableFilter:
    """Decides which tables are searched.

    Patterns are validated up front so that a bad pattern aborts the run
    before any table is touched. Exclude always wins over include.

    Example:
        >>> table_filter = TableFilter(include=["users*", "orders"])
        >>> table_filter.accepts("users_backup")
        True
        >>> table_filter.accepts("logs")
        False
    """

    def __init__(self, include: Iterable[str] = (), exclude: Iterable[str] = ()):
        self.include: Tuple[str, ...] = tuple(include)
        self.exclude: Tuple[str, ...] = tuple(exclude)

        for pattern in self.include + self.exclude:
            validate_pattern(pattern)

    def accepts(self, name: str) -> bool:
        """Return True if the table survives the include and exclude lists."""
        if self.include and not is_included(name, self.include):
            logger.debug(f"Skipping {name}: not in include list")
            return False
        if self.exclude and is_excluded(name, self.exclude):
            logger.debug(f"Skipping {name}: excluded")
            return False
        return True

    def __repr__(self) -> str:
        return f"TableFilter(include={list(self.include)}, exclude={list(self.exclude)})"
