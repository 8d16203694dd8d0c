"""Value types shared across the matching engine."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Protocol, Tuple


class FileSystemEntity(Enum):
    """Which kind of entries an enumeration callback should return."""

    FILES = "files"
    DIRECTORIES = "directories"
    FILES_AND_DIRECTORIES = "files_and_directories"

    @property
    def includes_files(self) -> bool:
        return self is not FileSystemEntity.DIRECTORIES

    @property
    def includes_directories(self) -> bool:
        return self is not FileSystemEntity.FILES


GetFileSystemEntries = Callable[[FileSystemEntity, str, Optional[str], Optional[str], bool], List[str]]
"""
(entity, directory, pattern, project_directory, strip_project_directory) -> paths

Returns the immediate children of `directory` only. A `pattern` of None
means every entry of the requested kind.
"""

DirectoryExists = Callable[[str], bool]


class FileSystem(Protocol):
    """The two callbacks the engine needs, bundled as one object."""

    def get_file_system_entries(
        self,
        entity: FileSystemEntity,
        path: str,
        pattern: Optional[str] = None,
        project_directory: Optional[str] = None,
        strip_project_directory: bool = False,
    ) -> List[str]: ...

    def directory_exists(self, path: str) -> bool: ...


class FileSpec(NamedTuple):
    """A filespec decomposed into fixed, wildcard and filename parts."""

    fixed_directory_part: str
    wildcard_directory_part: str
    filename_part: str

    def __str__(self) -> str:
        return self.fixed_directory_part + self.wildcard_directory_part + self.filename_part


class FileSpecInfo(NamedTuple):
    """Legality and recursion classification of a filespec."""

    matcher: Optional[re.Pattern]
    needs_recursion: bool
    is_legal_file_spec: bool


@dataclass(frozen=True)
class CompiledPattern:
    """
    Matcher state derived from one filespec.

    `regex` matches a whole candidate path; `relative_regex` matches the
    portion of a path below the fixed directory. Both are None when the
    filespec is illegal.
    """

    filespec: str
    file_spec: FileSpec
    is_legal: bool
    is_recursive: bool = False
    regex: Optional[re.Pattern] = None
    relative_regex: Optional[re.Pattern] = None
    wildcard_segments: Tuple[str, ...] = field(default_factory=tuple)
    filename_pattern: str = ""

    def match(self, path: str) -> Optional[re.Match]:
        """Match a whole path; illegal patterns never match through here."""
        if self.regex is None:
            return None
        return self.regex.fullmatch(path)

    def match_relative(self, relative_path: str) -> bool:
        if self.relative_regex is None:
            return False
        return self.relative_regex.fullmatch(relative_path) is not None


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one candidate path against one filespec."""

    is_match: bool
    is_legal_file_spec: bool
    is_file_spec_recursive: bool
    fixed_directory_part: str = ""
    wildcard_directory_part: str = ""
    filename_part: str = ""


def group_or_empty(match: Optional[re.Match], name: str) -> str:
    if match is None:
        return ""
    return match.group(name) or ""
