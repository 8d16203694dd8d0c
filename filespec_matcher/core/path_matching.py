"""Utilities for matching single path segments against `*`/`?` wildcards."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from filespec_matcher.core.constants import (
    ALL_FILES_PATTERN,
    REGEX_ANY_BUT_DOT,
    REGEX_ANY_NON_SEPARATOR,
    REGEX_SINGLE_BUT_DOT,
    REGEX_SINGLE_NON_SEPARATOR,
    WILDCARD_CHARS,
)


def has_wildcards(value: str) -> bool:
    """Return True if value contains `*` or `?`."""
    return any(c in WILDCARD_CHARS for c in value)


@lru_cache(maxsize=None)
def segment_regex(pattern: str) -> str:
    """
    Translate one path segment pattern into a regular expression source.

    Semantics:
    - '*' matches zero or more characters, '?' exactly one; neither crosses
      a path separator.
    - '*.*' matches any name, including names with no dot at all.
    - A pattern ending in '.' matches names without an extension: the dot is
      dropped and wildcards no longer match '.'.
    """
    no_extension = pattern.endswith(".")
    if no_extension:
        pattern = pattern[:-1]
        any_chars, single_char = REGEX_ANY_BUT_DOT, REGEX_SINGLE_BUT_DOT
    else:
        any_chars, single_char = REGEX_ANY_NON_SEPARATOR, REGEX_SINGLE_NON_SEPARATOR

    out = []
    i = 0
    while i < len(pattern):
        if not no_extension and pattern.startswith(ALL_FILES_PATTERN, i):
            out.append(any_chars)
            i += len(ALL_FILES_PATTERN)
            continue

        c = pattern[i]
        if c == "*":
            out.append(any_chars)
        elif c == "?":
            out.append(single_char)
        else:
            out.append(re.escape(c))
        i += 1

    return "".join(out)


@lru_cache(maxsize=None)
def _compiled_segment(pattern: str) -> re.Pattern:
    return re.compile(segment_regex(pattern), re.IGNORECASE)


def segment_match(name: str, pattern: Optional[str]) -> bool:
    """
    Match a single file or directory name against a segment pattern.

    A pattern of None matches every name. Matching is case-insensitive.

    Example:
        >>> segment_match("File.TXT", "*.txt")
        True
        >>> segment_match("bing.txt", "*.")
        False
    """
    if pattern is None:
        return True
    return _compiled_segment(pattern).fullmatch(name) is not None

