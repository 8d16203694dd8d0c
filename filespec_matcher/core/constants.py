"""
Constants for filespec-matcher.

This module centralizes separator tables, wildcard characters, illegal
character sets and regular expression fragments so that the splitter,
compiler and walker all agree on them.
"""

import re
import sys
from typing import FrozenSet, Tuple

# ============================================================================
# Separators
# ============================================================================

DIRECTORY_SEPARATORS: Tuple[str, ...] = ("\\", "/")
"""Characters accepted as directory separators on every platform"""

DIRECTORY_SEPARATOR_CHARS: FrozenSet[str] = frozenset(DIRECTORY_SEPARATORS)
"""Set form of DIRECTORY_SEPARATORS for membership tests"""

SEPARATOR_RUN_PATTERN = re.compile(r"[\\/]+")
"""Matches one or more consecutive separators"""

SEPARATOR_PATTERN = re.compile(r"[\\/]")
"""Matches exactly one separator"""

# ============================================================================
# Wildcards
# ============================================================================

WILDCARD_CHARS: FrozenSet[str] = frozenset("*?")
"""Characters that make a filespec a pattern rather than a literal path"""

RECURSIVE_DIRECTORY_MATCH: str = "**"
"""Segment that matches zero or more directory levels"""

ALL_FILES_PATTERN: str = "*.*"
"""Filename pattern substituted when a filespec ends in **"""

CURRENT_DIRECTORY: str = "."
PARENT_DIRECTORY: str = ".."

# ============================================================================
# Legality
# ============================================================================

INVALID_PATH_CHARS: FrozenSet[str] = frozenset('"<>|' + "".join(chr(i) for i in range(32)))
"""Characters that can never appear in a path"""

URI_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
"""Recognizes scheme://... prefixes, which are never file specs"""

DOT_RUN_SEGMENT_PATTERN = re.compile(r"^\.{3,}$")
"""A segment made of three or more dots"""

DRIVE_COLON_INDEX: int = 1
"""The only position at which ':' may appear (as in 'c:')"""

MAX_PATH_LENGTH: int = 260 if sys.platform == "win32" else 4096
"""Default upper bound on filespec and enumerated path length"""

# ============================================================================
# Short (8.3) Names
# ============================================================================

SHORT_NAME_MARKER: str = "~"
"""Every generated short name contains this character"""

SHORT_NAME_PATTERN = re.compile(r"~\d+(\.[^.~\\/]*)?$")
"""A segment ending in ~N with an optional extension looks like a short name"""

SHORT_NAME_STEM_LENGTH: int = 8
SHORT_NAME_EXTENSION_LENGTH: int = 3

SHORT_NAME_INVALID_CHARS: FrozenSet[str] = frozenset('+,;=[] "*?<>|:/\\')
"""Characters replaced by '_' when generating a short name"""

# ============================================================================
# Regular Expression Fragments
# ============================================================================

REGEX_SEPARATOR: str = r"[/\\]+"
"""One or more separators; doubled separators in candidates are tolerated"""

REGEX_UNC_PREFIX: str = r"[/\\]{2}"
"""The leading double separator of a UNC path"""

REGEX_ANY_NON_SEPARATOR: str = r"[^/\\]*"
REGEX_SINGLE_NON_SEPARATOR: str = r"[^/\\]"
REGEX_ANY_BUT_DOT: str = r"[^./\\]*"
REGEX_SINGLE_BUT_DOT: str = r"[^./\\]"
REGEX_ANY_DIRECTORIES: str = r"(?:.*[/\\])?"
"""Zero or more whole directory levels, each ending in a separator"""

REGEX_NON_EMPTY_NAME: str = r"(?=[^/\\])"
"""Lookahead keeping a wildcard filename from matching an empty name"""
