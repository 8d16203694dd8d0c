"""Decompose a filespec into fixed directory, wildcard directory and filename."""

from typing import Optional, Tuple

from filespec_matcher.core.constants import (
    ALL_FILES_PATTERN,
    DIRECTORY_SEPARATORS,
    RECURSIVE_DIRECTORY_MATCH,
    WILDCARD_CHARS,
)
from filespec_matcher.core.models import FileSpec, GetFileSystemEntries
from filespec_matcher.paths.short_paths import get_long_path_name


def _last_separator(value: str, end: Optional[int] = None) -> int:
    end = len(value) if end is None else end
    return max(value.rfind(sep, 0, end) for sep in DIRECTORY_SEPARATORS)


def _first_wildcard(value: str) -> int:
    for i, c in enumerate(value):
        if c in WILDCARD_CHARS:
            return i
    return -1


def _split_parts(filespec: str) -> Tuple[str, str, str]:
    last_separator = _last_separator(filespec)
    if last_separator == -1:
        return "", "", filespec

    first_wildcard = _first_wildcard(filespec)
    if first_wildcard == -1 or first_wildcard > last_separator:
        return filespec[: last_separator + 1], "", filespec[last_separator + 1 :]

    fixed_end = _last_separator(filespec, first_wildcard) + 1
    return (
        filespec[:fixed_end],
        filespec[fixed_end : last_separator + 1],
        filespec[last_separator + 1 :],
    )


def split_file_spec(
    filespec: str,
    get_entries: Optional[GetFileSystemEntries] = None,
    default_separator: str = "\\",
) -> FileSpec:
    """
    Split a filespec at its fixed/wildcard boundary.

    The fixed part ends at the last separator before the first wildcard, the
    wildcard part at the last separator overall. A trailing ``**`` filename
    is rewritten to ``*.*`` under one more ``**`` directory level, since
    ``dir\\**`` means everything below ``dir``.

    Args:
        filespec: Pattern to split
        get_entries: When given, short names in the fixed part are expanded
        default_separator: Separator appended after a trailing ``**`` when
            the pattern itself has none

    Returns:
        FileSpec with the three parts

    Example:
        >>> split_file_spec("f:\\\\dir?\\\\foo.cs")
        FileSpec(fixed_directory_part='f:\\\\', wildcard_directory_part='dir?\\\\', filename_part='foo.cs')
        >>> split_file_spec("**\\\\test\\\\**")
        FileSpec(fixed_directory_part='', wildcard_directory_part='**\\\\test\\\\**\\\\', filename_part='*.*')
    """
    fixed, wildcard, filename = _split_parts(filespec)

    if filename == RECURSIVE_DIRECTORY_MATCH:
        last_separator = _last_separator(filespec)
        separator = filespec[last_separator] if last_separator != -1 else default_separator
        wildcard += RECURSIVE_DIRECTORY_MATCH + separator
        filename = ALL_FILES_PATTERN

    if get_entries is not None and fixed:
        fixed = get_long_path_name(fixed, get_entries)

    return FileSpec(fixed, wildcard, filename)
