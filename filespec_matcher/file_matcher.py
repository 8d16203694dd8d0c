"""
Public entry points for filespec matching.

``FileMatcher`` bundles the compiler, walker and path helpers behind one
object bound to a settings instance and a file system. The module-level
functions call through to a shared default ``FileMatcher`` that uses the
local file system.
"""

import logging
from typing import List, Optional

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.models import (
    DirectoryExists,
    FileSpec,
    FileSpecInfo,
    FileSystem,
    FileSystemEntity,
    GetFileSystemEntries,
    MatchResult,
    group_or_empty,
)
from filespec_matcher.filesystem.local import LocalFileSystem
from filespec_matcher.matching.compiler import PatternCompiler
from filespec_matcher.matching.splitter import split_file_spec as _split_file_spec
from filespec_matcher.matching.walker import DirectoryWalker
from filespec_matcher.paths import project_paths, short_paths

logger = logging.getLogger(__name__)


class FileMatcher:
    """
    Matches filespecs against paths and expands them against a file system.

    Every method taking ``get_entries`` falls back to the bound file
    system's enumeration when it is omitted.

    Attributes:
        settings: Matcher settings
        file_system: Default source of enumeration/existence callbacks
        compiler: Pattern compiler (owns the pattern cache)
        walker: Directory walker

    Example:
        >>> matcher = FileMatcher(MatcherSettings(directory_separator="\\\\"))
        >>> matcher.file_match("src\\\\**\\\\*.cs", "src\\\\a\\\\b.cs").is_match
        True
        >>> matcher.get_files("c:\\\\project", "**\\\\*.cs")
        ['a.cs', 'sub\\\\b.cs']
    """

    def __init__(
        self,
        settings: Optional[MatcherSettings] = None,
        file_system: Optional[FileSystem] = None,
    ):
        self.settings = settings or MatcherSettings()
        self.file_system = file_system or LocalFileSystem(self.settings)
        self.compiler = PatternCompiler(self.settings)
        self.walker = DirectoryWalker(self.settings, self.compiler)

    def _entries(self, get_entries: Optional[GetFileSystemEntries]) -> GetFileSystemEntries:
        return get_entries or self.file_system.get_file_system_entries

    def get_files(
        self,
        project_directory: Optional[str],
        filespec: str,
        get_entries: Optional[GetFileSystemEntries] = None,
        directory_exists: Optional[DirectoryExists] = None,
        entity: FileSystemEntity = FileSystemEntity.FILES,
    ) -> List[str]:
        """
        Expand filespec into the paths it matches.

        Malformed patterns never raise; they come back as ``[filespec]``.
        Errors raised by the callbacks themselves propagate.

        Args:
            project_directory: Directory relative patterns resolve against
            filespec: Pattern to expand
            get_entries: Enumeration callback
            directory_exists: Existence predicate
            entity: Kind of entries to return

        Returns:
            Matching paths without duplicates
        """
        return self.walker.get_files(
            project_directory,
            filespec,
            self._entries(get_entries),
            directory_exists or self.file_system.directory_exists,
            entity,
        )

    def get_file_spec_info(
        self, filespec: str, get_entries: Optional[GetFileSystemEntries] = None
    ) -> FileSpecInfo:
        """Classify filespec without walking any directories."""
        pattern = self.compiler.compile(filespec, self._entries(get_entries))
        return FileSpecInfo(pattern.regex, pattern.is_recursive, pattern.is_legal)

    def split_file_spec(
        self, filespec: str, get_entries: Optional[GetFileSystemEntries] = None
    ) -> FileSpec:
        """Split filespec into fixed directory, wildcard directory and filename."""
        return _split_file_spec(
            filespec, self._entries(get_entries), self.settings.directory_separator
        )

    def get_long_path_name(
        self, path: str, get_entries: Optional[GetFileSystemEntries] = None
    ) -> str:
        """Expand short (8.3) name segments of path."""
        return short_paths.get_long_path_name(path, self._entries(get_entries))

    @staticmethod
    def remove_project_directory(paths: List[str], project_directory: str) -> List[str]:
        """Strip project_directory from each path, in place."""
        return project_paths.remove_project_directory(paths, project_directory)

    def file_match(
        self,
        filespec: str,
        file_to_match: str,
        get_entries: Optional[GetFileSystemEntries] = None,
    ) -> MatchResult:
        """
        Match one candidate path against filespec.

        Short names in the filespec's fixed directory and in the candidate
        are expanded before matching. An illegal filespec only matches a
        candidate equal to it character for character.

        Args:
            filespec: Pattern to match with
            file_to_match: Candidate path
            get_entries: Enumeration callback for short-name expansion

        Returns:
            MatchResult, including the portions of the candidate consumed
            by each part of the pattern

        Example:
            >>> matcher.file_match("***", "***")
            MatchResult(is_match=True, is_legal_file_spec=False, ...)
        """
        get_entries = self._entries(get_entries)
        pattern = self.compiler.compile(filespec, get_entries)
        if not pattern.is_legal:
            return MatchResult(
                is_match=filespec == file_to_match,
                is_legal_file_spec=False,
                is_file_spec_recursive=False,
            )

        candidate = short_paths.get_long_path_name(file_to_match, get_entries)
        match = pattern.match(candidate)
        return MatchResult(
            is_match=match is not None,
            is_legal_file_spec=True,
            is_file_spec_recursive=pattern.is_recursive,
            fixed_directory_part=group_or_empty(match, "fixed"),
            wildcard_directory_part=group_or_empty(match, "wildcard"),
            filename_part=group_or_empty(match, "filename"),
        )


_default_matcher: Optional[FileMatcher] = None


def default_matcher() -> FileMatcher:
    """Return the shared FileMatcher, creating it on first use."""
    global _default_matcher
    if _default_matcher is None:
        _default_matcher = FileMatcher()
    return _default_matcher


def get_files(
    project_directory: Optional[str],
    filespec: str,
    get_entries: Optional[GetFileSystemEntries] = None,
    directory_exists: Optional[DirectoryExists] = None,
    entity: FileSystemEntity = FileSystemEntity.FILES,
) -> List[str]:
    return default_matcher().get_files(
        project_directory, filespec, get_entries, directory_exists, entity
    )


def get_file_spec_info(
    filespec: str, get_entries: Optional[GetFileSystemEntries] = None
) -> FileSpecInfo:
    return default_matcher().get_file_spec_info(filespec, get_entries)


def split_file_spec(
    filespec: str, get_entries: Optional[GetFileSystemEntries] = None
) -> FileSpec:
    return default_matcher().split_file_spec(filespec, get_entries)


def get_long_path_name(path: str, get_entries: Optional[GetFileSystemEntries] = None) -> str:
    return default_matcher().get_long_path_name(path, get_entries)


def remove_project_directory(paths: List[str], project_directory: str) -> List[str]:
    return project_paths.remove_project_directory(paths, project_directory)


def file_match(
    filespec: str, file_to_match: str, get_entries: Optional[GetFileSystemEntries] = None
) -> MatchResult:
    return default_matcher().file_match(filespec, file_to_match, get_entries)
