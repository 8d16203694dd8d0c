"""
Path normalization helpers.

Both '\\' and '/' are accepted as separators everywhere. Normalization
collapses separator runs, drops '.' segments and rewrites separators to a
canonical one; '..' segments are always preserved since they change which
directory a path names.
"""

import re
from typing import List, Tuple

from filespec_matcher.core.constants import (
    CURRENT_DIRECTORY,
    DIRECTORY_SEPARATOR_CHARS,
    SEPARATOR_PATTERN,
    SEPARATOR_RUN_PATTERN,
)

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def is_separator(c: str) -> bool:
    return c in DIRECTORY_SEPARATOR_CHARS


def ends_with_separator(path: str) -> bool:
    return bool(path) and is_separator(path[-1])


def is_unc(path: str) -> bool:
    """Return True for paths starting with two separators (\\\\server\\share)."""
    return len(path) >= 2 and is_separator(path[0]) and is_separator(path[1])


def split_root(path: str) -> Tuple[str, str]:
    """
    Split a path into its root and the remainder.

    The root is one of: a UNC prefix (two separators), a drive ('c:' plus
    the separator that follows it, if any), a single leading separator, or
    the empty string for relative paths.

    Example:
        >>> split_root("c:\\\\dir\\\\file.txt")
        ('c:\\\\', 'dir\\\\file.txt')
        >>> split_root("\\\\\\\\server\\\\share")
        ('\\\\\\\\', 'server\\\\share')
    """
    if is_unc(path):
        return path[:2], path[2:]
    if path[:1] and is_separator(path[0]):
        return path[:1], path[1:]
    if _DRIVE_PATTERN.match(path):
        if len(path) > 2 and is_separator(path[2]):
            return path[:3], path[3:]
        return path[:2], path[2:]
    return "", path


def is_rooted(path: str) -> bool:
    return split_root(path)[0] != ""


def split_segments(path: str) -> List[str]:
    """Split on single separators, keeping empty segments for doubled ones."""
    return SEPARATOR_PATTERN.split(path)


def path_segments(path: str) -> List[str]:
    """Split on separator runs, dropping empty segments."""
    return [s for s in SEPARATOR_RUN_PATTERN.split(path) if s]


def canonical_root(root: str, separator: str) -> str:
    return "".join(separator if is_separator(c) else c for c in root)


def reduce_segments(segments: List[str], keep_leading_dot: bool) -> List[str]:
    """
    Drop '.' segments. A leading '.' of a relative path is kept once when
    keep_leading_dot is set, so '.\\.\\dir' reduces to '.\\dir'.
    """
    reduced = []
    for i, segment in enumerate(segments):
        if segment == CURRENT_DIRECTORY and not (keep_leading_dot and i == 0):
            continue
        reduced.append(segment)
    return reduced


def normalize_path(path: str, separator: str) -> str:
    """
    Canonicalize separators, collapse separator runs and resolve '.'.

    A leading UNC double separator and a trailing separator survive;
    '..' segments are left alone.

    Example:
        >>> normalize_path("f:\\\\\\\\dir1\\\\.\\\\dir2/", "\\\\")
        'f:\\\\dir1\\\\dir2\\\\'
    """
    if not path:
        return path

    root, rest = split_root(path)
    segments = reduce_segments(path_segments(rest), keep_leading_dot=not root)
    normalized = canonical_root(root, separator) + separator.join(segments)
    if segments and ends_with_separator(rest):
        normalized += separator
    return normalized


def join_path(directory: str, name: str, separator: str) -> str:
    """Append name to directory, adding a separator only when needed."""
    if not directory:
        return name
    if ends_with_separator(directory):
        return directory + name
    return directory + separator + name


def combine_paths(base: str, relative: str, separator: str) -> str:
    """
    Combine two paths; a rooted second path replaces the first entirely.

    Example:
        >>> combine_paths("c:\\\\proj", "src\\\\", "\\\\")
        'c:\\\\proj\\\\src\\\\'
        >>> combine_paths("c:\\\\proj", "d:\\\\other\\\\", "\\\\")
        'd:\\\\other\\\\'
    """
    if not relative:
        return base
    if not base or is_rooted(relative):
        return relative
    return join_path(base, relative, separator)


def file_name(path: str) -> str:
    """Return the last segment of path (empty if path ends in a separator)."""
    return split_segments(path)[-1] if path else ""


def strip_trailing_separators(path: str) -> str:
    root, rest = split_root(path)
    return root + rest.rstrip("\\/")
