"""
Pattern compilation.

Turns a filespec into a ``CompiledPattern``: legality classification,
recursion classification and the regular expressions used to match whole
paths and paths relative to the fixed directory.
"""

import logging
import re
from typing import Dict, List, Optional

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.constants import (
    CURRENT_DIRECTORY,
    DOT_RUN_SEGMENT_PATTERN,
    DRIVE_COLON_INDEX,
    INVALID_PATH_CHARS,
    PARENT_DIRECTORY,
    RECURSIVE_DIRECTORY_MATCH,
    REGEX_ANY_DIRECTORIES,
    REGEX_NON_EMPTY_NAME,
    REGEX_SEPARATOR,
    REGEX_UNC_PREFIX,
    SHORT_NAME_MARKER,
    URI_SCHEME_PATTERN,
)
from filespec_matcher.core.models import CompiledPattern, FileSpec, GetFileSystemEntries
from filespec_matcher.core.path_matching import has_wildcards, segment_regex
from filespec_matcher.matching.splitter import split_file_spec
from filespec_matcher.paths.normalizer import (
    is_unc,
    path_segments,
    reduce_segments,
    split_root,
    split_segments,
)

logger = logging.getLogger(__name__)


def wildcard_segments(wildcard_directory_part: str) -> List[str]:
    """
    Segments of the wildcard directory part with runs of ``**`` collapsed.

    Empty and '.' segments are dropped, so ``**/.\\*.cs`` and ``**\\*.cs``
    produce the same list.
    """
    segments: List[str] = []
    for segment in path_segments(wildcard_directory_part):
        if segment == CURRENT_DIRECTORY:
            continue
        if segment == RECURSIVE_DIRECTORY_MATCH and segments and segments[-1] == segment:
            continue
        segments.append(segment)
    return segments


class PatternCompiler:
    """
    Compiles filespecs into matchers.

    Compilation never raises for pattern content: an unusable pattern comes
    back with ``is_legal`` False and no regular expressions.

    Attributes:
        settings: Matcher settings (path length limit, caching)

    Example:
        >>> compiler = PatternCompiler(MatcherSettings())
        >>> pattern = compiler.compile("src\\\\**\\\\*.cs")
        >>> pattern.is_recursive
        True
        >>> bool(pattern.match("src\\\\a\\\\b.cs"))
        True
    """

    def __init__(self, settings: Optional[MatcherSettings] = None):
        self.settings = settings or MatcherSettings()
        self._cache: Dict[str, CompiledPattern] = {}

    def compile(
        self, filespec: str, get_entries: Optional[GetFileSystemEntries] = None
    ) -> CompiledPattern:
        """
        Compile a filespec, consulting the cache first.

        Patterns containing '~' are never cached because short-name expansion
        of their fixed part depends on the file system.

        Args:
            filespec: Pattern to compile
            get_entries: Enumeration callback for short-name expansion

        Returns:
            CompiledPattern for filespec
        """
        cacheable = self.settings.cache_patterns and SHORT_NAME_MARKER not in filespec
        if cacheable:
            cached = self._cache.get(filespec)
            if cached is not None:
                logger.debug(f"Pattern cache hit: {filespec}")
                return cached

        compiled = self._compile(filespec, get_entries)
        if cacheable:
            compiled = self._cache.setdefault(filespec, compiled)
        return compiled

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compile(
        self, filespec: str, get_entries: Optional[GetFileSystemEntries]
    ) -> CompiledPattern:
        separator = self.settings.directory_separator

        reason = self._illegal_filespec_reason(filespec)
        if reason is not None:
            logger.debug(f"Illegal filespec '{filespec}': {reason}")
            return CompiledPattern(filespec, split_file_spec(filespec, None, separator), False)

        file_spec = split_file_spec(filespec, get_entries, separator)
        segments = wildcard_segments(file_spec.wildcard_directory_part)

        reason = self._illegal_parts_reason(file_spec, segments)
        if reason is not None:
            logger.debug(f"Illegal filespec '{filespec}': {reason}")
            return CompiledPattern(filespec, file_spec, False)

        wildcard_regex = "".join(self._wildcard_segment_regex(s) for s in segments)
        filename_regex = segment_regex(file_spec.filename_part)
        if has_wildcards(file_spec.filename_part):
            # A directory path ending in a separator has no filename to match
            filename_regex = REGEX_NON_EMPTY_NAME + filename_regex
        tail = f"(?P<wildcard>{wildcard_regex})(?P<filename>{filename_regex})"

        regex = re.compile(
            f"(?P<fixed>{self._fixed_regex(file_spec.fixed_directory_part)}){tail}",
            re.IGNORECASE,
        )
        relative_regex = re.compile(tail, re.IGNORECASE)

        return CompiledPattern(
            filespec=filespec,
            file_spec=file_spec,
            is_legal=True,
            is_recursive=RECURSIVE_DIRECTORY_MATCH in segments,
            regex=regex,
            relative_regex=relative_regex,
            wildcard_segments=tuple(segments),
            filename_pattern=file_spec.filename_part,
        )

    def _illegal_filespec_reason(self, filespec: str) -> Optional[str]:
        """Checks that apply to the raw pattern text."""
        if len(filespec) > self.settings.max_path_length:
            return f"longer than {self.settings.max_path_length} characters"

        if any(c in INVALID_PATH_CHARS for c in filespec):
            return "contains characters that are invalid in paths"

        if URI_SCHEME_PATTERN.match(filespec):
            return "looks like a URI"

        if any(c == ":" and i != DRIVE_COLON_INDEX for i, c in enumerate(filespec)):
            return "':' outside the drive position"

        if any(DOT_RUN_SEGMENT_PATTERN.match(s) for s in split_segments(filespec)):
            return "segment made of three or more dots"

        return None

    @staticmethod
    def _illegal_parts_reason(file_spec: FileSpec, segments: List[str]) -> Optional[str]:
        """Checks that depend on where a token falls after splitting."""
        if PARENT_DIRECTORY in segments:
            return "'..' inside the wildcard directory part"

        for segment in segments:
            if RECURSIVE_DIRECTORY_MATCH in segment and segment != RECURSIVE_DIRECTORY_MATCH:
                return f"'**' is not a whole segment in '{segment}'"

        if RECURSIVE_DIRECTORY_MATCH in file_spec.filename_part:
            return f"'**' inside the filename '{file_spec.filename_part}'"

        return None

    @staticmethod
    def _root_regex(root: str) -> str:
        if is_unc(root):
            return REGEX_UNC_PREFIX
        if len(root) == 1:
            return r"[/\\]"
        # Drive, with or without a separator
        drive = re.escape(root[:2])
        return drive + REGEX_SEPARATOR if len(root) > 2 else drive

    def _fixed_regex(self, fixed_directory_part: str) -> str:
        root, rest = split_root(fixed_directory_part)
        parts = [self._root_regex(root)] if root else []
        for segment in reduce_segments(path_segments(rest), keep_leading_dot=not root):
            parts.append(re.escape(segment) + REGEX_SEPARATOR)
        return "".join(parts)

    @staticmethod
    def _wildcard_segment_regex(segment: str) -> str:
        if segment == RECURSIVE_DIRECTORY_MATCH:
            return REGEX_ANY_DIRECTORIES
        return segment_regex(segment) + REGEX_SEPARATOR
