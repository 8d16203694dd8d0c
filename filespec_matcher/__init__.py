"""
filespec_matcher - File Specification Matching Engine
=====================================================

Matches and expands glob-style file specifications supporting `*`, `?`,
the recursive `**` wildcard, short (8.3) names, UNC paths and relative
segments.

Main Components:
    - core: Configuration, constants, exceptions and value types
    - paths: Normalization, short-name expansion, project-relative paths
    - matching: Filespec splitting, pattern compilation, directory walking
    - filesystem: Local and in-memory enumeration callbacks

Example:
    >>> from filespec_matcher import FileMatcher, MatcherSettings
    >>>
    >>> matcher = FileMatcher(MatcherSettings(directory_separator="/"))
    >>> matcher.file_match("src/**/*.py", "src/pkg/mod.py").is_match
    True
    >>> files = matcher.get_files("/work/project", "**/*.py")

Version: 1.0.0
Author: Filespec-Matcher Contributors
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Filespec-Matcher Contributors"
__license__ = "MIT"

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.exceptions import FileMatcherError
from filespec_matcher.core.models import FileSpec, FileSpecInfo, FileSystemEntity, MatchResult
from filespec_matcher.file_matcher import (
    FileMatcher,
    file_match,
    get_file_spec_info,
    get_files,
    get_long_path_name,
    remove_project_directory,
    split_file_spec,
)

__all__ = [
    "FileMatcher",
    "FileMatcherError",
    "FileSpec",
    "FileSpecInfo",
    "FileSystemEntity",
    "MatchResult",
    "MatcherSettings",
    "__version__",
    "file_match",
    "get_file_spec_info",
    "get_files",
    "get_long_path_name",
    "remove_project_directory",
    "split_file_spec",
]
