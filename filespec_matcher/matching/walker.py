"""
Directory walking for filespec expansion.

The walker drives two injected callbacks, an entry enumerator and a
directory-existence predicate, and never touches the file system itself.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.constants import RECURSIVE_DIRECTORY_MATCH
from filespec_matcher.core.exceptions import PathTooLongError
from filespec_matcher.core.models import (
    CompiledPattern,
    DirectoryExists,
    FileSystemEntity,
    GetFileSystemEntries,
)
from filespec_matcher.core.path_matching import has_wildcards, segment_match
from filespec_matcher.matching.compiler import PatternCompiler
from filespec_matcher.paths.normalizer import (
    combine_paths,
    file_name,
    normalize_path,
    strip_trailing_separators,
)

logger = logging.getLogger(__name__)


@dataclass
class _WalkState:
    """Everything one get_files call threads through the recursion."""

    pattern: CompiledPattern
    entity: FileSystemEntity
    get_entries: GetFileSystemEntries
    project_directory: Optional[str]
    strip_project_directory: bool
    results: List[str] = field(default_factory=list)
    visited: Set[Tuple[str, Tuple[int, ...]]] = field(default_factory=set)


class DirectoryWalker:
    """
    Expands a filespec into the paths it matches.

    The walk carries the set of wildcard segments each directory can be at.
    Non-``**`` segments only enter subdirectories whose names they accept,
    ``**`` enters every subdirectory, and files are listed only in
    directories where the whole wildcard part has been consumed. Every
    directory is visited once, so chains such as ``**\\**\\**`` or
    ``**\\x\\**`` never re-enumerate a subtree.

    Attributes:
        settings: Matcher settings
        compiler: Compiler used to obtain matcher state

    Example:
        >>> walker = DirectoryWalker(MatcherSettings(), PatternCompiler())
        >>> walker.get_files("", "src\\\\**\\\\*.cs", fs.get_file_system_entries, fs.directory_exists)
        ['src\\\\main.cs', 'src\\\\util\\\\helpers.cs']
    """

    def __init__(
        self, settings: Optional[MatcherSettings] = None, compiler: Optional[PatternCompiler] = None
    ):
        self.settings = settings or MatcherSettings()
        self.compiler = compiler or PatternCompiler(self.settings)

    def get_files(
        self,
        project_directory: Optional[str],
        filespec: str,
        get_entries: GetFileSystemEntries,
        directory_exists: DirectoryExists,
        entity: FileSystemEntity = FileSystemEntity.FILES,
    ) -> List[str]:
        """
        Enumerate the entries matching filespec.

        Args:
            project_directory: Directory relative patterns are resolved
                against; results under it are reported relative to it
            filespec: Pattern to expand
            get_entries: Enumeration callback
            directory_exists: Existence predicate used to prune the walk
            entity: Kind of entries to return

        Returns:
            Matching paths without duplicates, in discovery order. Patterns
            without wildcards, illegal patterns and patterns whose walk
            exceeds the path length limit come back as ``[filespec]``.
        """
        if not has_wildcards(filespec):
            return [filespec]

        pattern = self.compiler.compile(filespec, get_entries)
        if not pattern.is_legal:
            return [filespec]

        separator = self.settings.directory_separator
        fixed = normalize_path(pattern.file_spec.fixed_directory_part, separator)
        base = fixed
        strip_project_directory = False
        if project_directory:
            base = combine_paths(project_directory, fixed, separator)
            strip_project_directory = base != fixed

        if base and not directory_exists(base):
            logger.debug(f"Base directory '{base}' does not exist, nothing to match")
            return []

        state = _WalkState(
            pattern=pattern,
            entity=entity,
            get_entries=get_entries,
            project_directory=project_directory if strip_project_directory else None,
            strip_project_directory=strip_project_directory,
        )

        try:
            self._walk(state, base, (0,), [])
        except PathTooLongError as e:
            logger.warning(f"Returning '{filespec}' unexpanded: {e}")
            return [filespec]

        return self._deduplicate(state.results)

    def _enumerate(
        self,
        state: _WalkState,
        entity: FileSystemEntity,
        directory: str,
        pattern: Optional[str],
        for_results: bool = False,
    ) -> List[str]:
        if len(directory) > self.settings.max_path_length:
            raise PathTooLongError(
                "Path too long", f"{len(directory)} characters in '{directory[:80]}...'"
            )
        if for_results:
            return state.get_entries(
                entity, directory, pattern, state.project_directory, state.strip_project_directory
            )
        return state.get_entries(entity, directory, pattern, None, False)

    def _relative(self, relative_directories: List[str], name: str) -> str:
        return self.settings.directory_separator.join(relative_directories + [name])

    def _collect(self, state: _WalkState, directory: str, relative_directories: List[str]) -> None:
        """Add entries of one directory that the relative matcher accepts."""
        entries = self._enumerate(
            state, state.entity, directory, state.pattern.filename_pattern, for_results=True
        )
        for entry in entries:
            name = file_name(strip_trailing_separators(entry))
            if state.pattern.match_relative(self._relative(relative_directories, name)):
                state.results.append(entry)

    @staticmethod
    def _closure(segments: Tuple[str, ...], positions: Iterable[int]) -> Tuple[int, ...]:
        """Add the positions reached by letting each ``**`` match no directories."""
        reached: Set[int] = set()
        pending = list(positions)
        while pending:
            position = pending.pop()
            if position in reached:
                continue
            reached.add(position)
            if position < len(segments) and segments[position] == RECURSIVE_DIRECTORY_MATCH:
                pending.append(position + 1)
        return tuple(sorted(reached))

    @staticmethod
    def _directory_pattern(segments: Tuple[str, ...], positions: List[int]) -> Optional[str]:
        """Pattern to enumerate subdirectories with, or None to list them all."""
        patterns = {segments[p] for p in positions}
        if len(patterns) == 1 and RECURSIVE_DIRECTORY_MATCH not in patterns:
            return patterns.pop()
        return None

    def _walk(
        self,
        state: _WalkState,
        directory: str,
        positions: Iterable[int],
        relative_directories: List[str],
    ) -> None:
        """
        Visit directory with the wildcard segments still to be matched.

        positions holds every index into the wildcard segments the walk can be
        at in this directory. Files are listed only where the wildcard part
        can end, and a subdirectory is entered only when some position
        accepts its name.
        """
        segments = state.pattern.wildcard_segments
        positions = self._closure(segments, positions)

        key = (self._dedup_key(directory), positions)
        if key in state.visited:
            return
        state.visited.add(key)

        if len(segments) in positions:
            self._collect(state, directory, relative_directories)

        pending = [p for p in positions if p < len(segments)]
        if not pending:
            return

        directory_pattern = self._directory_pattern(segments, pending)
        for subdirectory in self._enumerate(
            state, FileSystemEntity.DIRECTORIES, directory, directory_pattern
        ):
            name = file_name(strip_trailing_separators(subdirectory))
            advanced = set()
            for position in pending:
                if segments[position] == RECURSIVE_DIRECTORY_MATCH:
                    advanced.add(position)
                elif segment_match(name, segments[position]):
                    advanced.add(position + 1)
            if advanced:
                self._walk(state, subdirectory, advanced, relative_directories + [name])

    def _dedup_key(self, path: str) -> str:
        key = strip_trailing_separators(normalize_path(path, self.settings.directory_separator))
        if self.settings.case_insensitive_file_system:
            key = key.casefold()
        return key

    def _deduplicate(self, paths: List[str]) -> List[str]:
        unique: Dict[str, str] = {}
        for path in paths:
            unique.setdefault(self._dedup_key(path), path)
        return list(unique.values())
