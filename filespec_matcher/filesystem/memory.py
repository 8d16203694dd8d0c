"""
In-memory file system.

Serves the enumeration and existence callbacks from a fixed list of paths
and records every call, so tests can check which parts of a tree a walk
actually read.
"""

from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from filespec_matcher.core.constants import CURRENT_DIRECTORY, PARENT_DIRECTORY
from filespec_matcher.core.models import FileSystemEntity
from filespec_matcher.paths.normalizer import (
    canonical_root,
    join_path,
    path_segments,
    split_root,
)
from filespec_matcher.paths.project_paths import remove_project_directory
from filespec_matcher.paths.short_paths import names_matching


class _Entry(NamedTuple):
    name: str
    is_directory: bool


class EnumerationCall(NamedTuple):
    entity: FileSystemEntity
    path: str
    pattern: Optional[str]


class MemoryFileSystem:
    """
    A directory tree held in memory.

    Files and directories may be given with either separator, with doubled
    separators or '.' segments; all of those name the same entry. Every
    ancestor of a listed path exists as a directory. '..' segments are
    stored as written but never listed as children.

    Attributes:
        separator: Separator used when composing returned paths
        case_sensitive: Whether names differing only in case are distinct
        calls: Every enumeration request, in order
        returned: Every file path handed back by an enumeration

    Example:
        >>> fs = MemoryFileSystem(["c:\\\\src\\\\a.cs", "c:\\\\src\\\\b.txt"])
        >>> fs.get_file_system_entries(FileSystemEntity.FILES, "c:\\\\src", "*.cs")
        ['c:\\\\src\\\\a.cs']
    """

    def __init__(
        self,
        files: Iterable[str] = (),
        directories: Iterable[str] = (),
        separator: str = "\\",
        case_sensitive: bool = False,
    ):
        self.separator = separator
        self.case_sensitive = case_sensitive
        self.calls: List[EnumerationCall] = []
        self.returned: List[str] = []
        self._children: Dict[Tuple[str, ...], Dict[str, _Entry]] = {}

        for directory in directories:
            self.add_directory(directory)
        for path in files:
            self.add_file(path)

    def _fold(self, value: str) -> str:
        return value if self.case_sensitive else value.lower()

    def _parts(self, path: str) -> Tuple[str, List[str]]:
        root, rest = split_root(path)
        segments = [s for s in path_segments(rest) if s != CURRENT_DIRECTORY]
        return canonical_root(root, self.separator), segments

    def _key(self, root: str, segments: List[str]) -> Tuple[str, ...]:
        return (self._fold(root),) + tuple(self._fold(s) for s in segments)

    def _add(self, path: str, is_directory: bool) -> None:
        root, segments = self._parts(path)
        self._children.setdefault(self._key(root, []), {})

        for depth, segment in enumerate(segments):
            parent = self._children[self._key(root, segments[:depth])]
            is_last = depth == len(segments) - 1
            entry = _Entry(segment, is_directory or not is_last)
            existing = parent.get(self._fold(segment))
            if existing is None or (entry.is_directory and not existing.is_directory):
                parent[self._fold(segment)] = entry
            if entry.is_directory:
                self._children.setdefault(self._key(root, segments[: depth + 1]), {})

    def add_file(self, path: str) -> None:
        self._add(path, is_directory=False)

    def add_directory(self, path: str) -> None:
        self._add(path, is_directory=True)

    def directory_exists(self, path: str) -> bool:
        root, segments = self._parts(path)
        return self._key(root, segments) in self._children

    def get_file_system_entries(
        self,
        entity: FileSystemEntity,
        path: str,
        pattern: Optional[str] = None,
        project_directory: Optional[str] = None,
        strip_project_directory: bool = False,
    ) -> List[str]:
        """List the immediate children of path that match pattern."""
        self.calls.append(EnumerationCall(entity, path, pattern))

        root, segments = self._parts(path)
        children = self._children.get(self._key(root, segments), {})

        candidates = []
        for entry in sorted(children.values(), key=lambda e: e.name.lower()):
            if entry.name == PARENT_DIRECTORY:
                continue
            if entry.is_directory and entity.includes_directories:
                candidates.append(entry)
            elif not entry.is_directory and entity.includes_files:
                candidates.append(entry)

        matched = set(names_matching([e.name for e in candidates], pattern))
        results = []
        for entry in candidates:
            if entry.name not in matched:
                continue
            result = join_path(path, entry.name, self.separator)
            if not entry.is_directory:
                self.returned.append(result)
            results.append(result)

        if strip_project_directory and project_directory:
            remove_project_directory(results, project_directory)
        return results

    def normalize(self, path: str) -> str:
        """
        Canonical form used to compare paths in assertions.

        All '.' segments and separator runs are dropped, so '.\\\\a\\\\\\\\b'
        and 'a/b' compare equal; '..' segments and a UNC prefix are kept.
        """
        root, segments = self._parts(path)
        return self._fold(root + self.separator.join(segments))

    def was_returned(self, path: str) -> bool:
        target = self.normalize(path)
        return any(self.normalize(p) == target for p in self.returned)
