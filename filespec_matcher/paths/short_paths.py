"""
Short (8.3) name handling.

Legacy file systems expose an abbreviated alias such as ``LONGDI~1`` next to
each long name. This module expands such aliases back to long names by
probing each path segment through an enumeration callback, and generates
aliases for file systems that do not store them.
"""

import logging
import re
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from filespec_matcher.core.constants import (
    SHORT_NAME_EXTENSION_LENGTH,
    SHORT_NAME_INVALID_CHARS,
    SHORT_NAME_MARKER,
    SHORT_NAME_PATTERN,
    SHORT_NAME_STEM_LENGTH,
)
from filespec_matcher.core.exceptions import ShortPathResolutionError
from filespec_matcher.core.models import FileSystemEntity, GetFileSystemEntries
from filespec_matcher.core.path_matching import has_wildcards, segment_match
from filespec_matcher.paths.normalizer import (
    file_name,
    is_separator,
    is_unc,
    join_path,
    split_root,
    strip_trailing_separators,
)

logger = logging.getLogger(__name__)

_SEPARATOR_TOKEN = re.compile(r"([\\/])")


def looks_like_short_name(segment: str) -> bool:
    """Return True if segment ends in ~N with an optional extension."""
    return SHORT_NAME_PATTERN.search(segment) is not None


def _long_path_root(path: str) -> Tuple[str, str]:
    """
    Split off the portion of path that is never probed.

    UNC paths keep '\\\\server\\share\\' as their root; local paths keep the
    drive or leading separator; relative paths have no root.
    """
    if not is_unc(path):
        return split_root(path)

    # Skip '\\', then the server and share names.
    position = 2
    for _ in range(2):
        while position < len(path) and not is_separator(path[position]):
            position += 1
        if position < len(path):
            position += 1
    return path[:position], path[position:]


def get_long_path_name(path: str, get_entries: GetFileSystemEntries) -> str:
    """
    Expand short-name segments of path to their long names.

    Segments are resolved left to right. A short-looking segment is looked
    up in the directory resolved so far; when nothing answers, that segment
    and everything after it are kept as written, since a path that does not
    exist yet has nothing to expand. Separators, doubled or trailing ones
    included, come back exactly as they went in.

    Args:
        path: Path possibly containing short-name segments
        get_entries: Enumeration callback used for the probes

    Returns:
        The expanded path (``path`` itself when it holds no short names)

    Raises:
        ShortPathResolutionError: If a probe returns more than one entry

    Example:
        >>> get_long_path_name("D:\\\\LONGDI~1\\\\file.txt", get_entries)
        'D:\\\\LongDirectoryName\\\\file.txt'
    """
    if SHORT_NAME_MARKER not in path:
        return path

    if has_wildcards(path):
        logger.debug(f"Not expanding short names in wildcard path: {path}")
        return path

    root, rest = _long_path_root(path)
    tokens = _SEPARATOR_TOKEN.split(rest)
    resolved = root

    for i in range(0, len(tokens), 2):
        segment = tokens[i]
        if not segment:
            continue

        if not looks_like_short_name(segment):
            resolved = resolved + segment if i == 0 else join_path(resolved, segment, tokens[i - 1])
            continue

        entries = get_entries(FileSystemEntity.FILES_AND_DIRECTORIES, resolved, segment, None, False)
        if not entries:
            logger.debug(f"No entry for '{segment}' under '{resolved}', keeping remainder as is")
            break
        if len(entries) > 1:
            raise ShortPathResolutionError(
                f"Ambiguous short name '{segment}'",
                f"{len(entries)} entries found under '{resolved}'",
            )

        resolved = entries[0]
        tokens[i] = file_name(strip_trailing_separators(entries[0]))
        logger.debug(f"Resolved short name '{segment}' to '{tokens[i]}'")

    return root + "".join(tokens)


def is_short_name_form(name: str) -> bool:
    """Return True if name already fits the 8.3 format."""
    if not name or name in (".", "..") or name.count(".") > 1:
        return False
    stem, _, extension = name.partition(".")
    if not stem or len(stem) > SHORT_NAME_STEM_LENGTH:
        return False
    if len(extension) > SHORT_NAME_EXTENSION_LENGTH:
        return False
    return not any(c in SHORT_NAME_INVALID_CHARS for c in name)


def _clean(part: str) -> str:
    cleaned = []
    for c in part:
        if c in (" ", "."):
            continue
        cleaned.append("_" if c in SHORT_NAME_INVALID_CHARS else c)
    return "".join(cleaned).upper()


def _split_long_name(name: str) -> Tuple[str, str]:
    stem, dot, extension = name.rpartition(".")
    if not dot:
        stem, extension = name, ""
    stem, extension = _clean(stem), _clean(extension)
    if not stem:
        stem, extension = extension, ""
    return stem, extension[:SHORT_NAME_EXTENSION_LENGTH]


def generate_short_name(name: str, ordinal: int = 1) -> str:
    """
    Build the 8.3 alias for a long name.

    Example:
        >>> generate_short_name("LongFileName.txt")
        'LONGFI~1.TXT'
        >>> generate_short_name("pomegranate", 2)
        'POMEGR~2'
    """
    if is_short_name_form(name):
        return name.upper()

    stem, extension = _split_long_name(name)
    tail = f"{SHORT_NAME_MARKER}{ordinal}"
    alias = stem[: SHORT_NAME_STEM_LENGTH - len(tail)] + tail
    if extension:
        alias += "." + extension
    return alias


def assign_short_names(names: Iterable[str]) -> Dict[str, str]:
    """
    Assign aliases to every name of one directory.

    Names sharing a truncated stem and extension are numbered in
    case-insensitive name order, the way the aliases are handed out when
    entries are created in that order.

    Returns:
        Mapping of long name to alias
    """
    aliases: Dict[str, str] = {}
    used = set()
    counters: Dict[Tuple[str, str], int] = defaultdict(int)

    for name in sorted(names, key=str.lower):
        if is_short_name_form(name):
            aliases[name] = name.upper()
            used.add(aliases[name])
            continue

        key = _split_long_name(name)
        while True:
            counters[key] += 1
            alias = generate_short_name(name, counters[key])
            if alias not in used:
                break
        aliases[name] = alias
        used.add(alias)

    return aliases


def names_matching(names: List[str], pattern: Optional[str]) -> List[str]:
    """
    Filter directory entry names by a single-segment pattern.

    A wildcard-free pattern shaped like a short name also matches the entry
    whose generated alias equals it.
    """
    if pattern is None:
        return list(names)

    aliases: Dict[str, str] = {}
    if not has_wildcards(pattern) and looks_like_short_name(pattern):
        aliases = assign_short_names(names)

    folded = pattern.upper()
    return [
        name
        for name in names
        if segment_match(name, pattern) or aliases.get(name) == folded
    ]
