"""Shared fixtures and helpers for filespec-matcher tests."""

from typing import List, Optional

import pytest

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.models import FileSystemEntity
from filespec_matcher.file_matcher import FileMatcher
from filespec_matcher.filesystem.memory import MemoryFileSystem


@pytest.fixture
def windows_settings():
    """Settings that compose paths with backslashes and a 260 character limit."""
    return MatcherSettings(
        directory_separator="\\",
        case_insensitive_file_system=True,
        max_path_length=260,
    )


@pytest.fixture
def matcher(windows_settings):
    """FileMatcher whose default file system is empty and in memory."""
    return FileMatcher(windows_settings, MemoryFileSystem())


@pytest.fixture
def no_entries():
    """Enumeration callback that fails the test if it is ever called."""

    def get_entries(
        entity: FileSystemEntity,
        path: str,
        pattern: Optional[str],
        project_directory: Optional[str],
        strip_project_directory: bool,
    ) -> List[str]:
        pytest.fail(f"Unexpected enumeration of '{path}' with pattern {pattern!r}")

    return get_entries
