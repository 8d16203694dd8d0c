"""
Local file system access.

Implements the enumeration and existence callbacks on top of ``os.scandir``.
"""

import errno
import logging
import os
from typing import List, Optional

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.exceptions import PathTooLongError
from filespec_matcher.core.models import FileSystemEntity
from filespec_matcher.paths.normalizer import join_path
from filespec_matcher.paths.project_paths import remove_project_directory
from filespec_matcher.paths.short_paths import names_matching

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    Enumerates real directories.

    Paths may use either separator; they are converted to the native one
    before reaching the OS. Returned paths are built from the directory as
    given plus the entry name, joined with the configured separator, and
    entries are sorted by name so results are stable between runs.

    Attributes:
        settings: Matcher settings (separator)

    Example:
        >>> fs = LocalFileSystem()
        >>> fs.get_file_system_entries(FileSystemEntity.FILES, "src", "*.py")
        ['src/__init__.py', 'src/main.py']
    """

    def __init__(self, settings: Optional[MatcherSettings] = None):
        self.settings = settings or MatcherSettings()

    @staticmethod
    def _native(path: str) -> str:
        if not path:
            return os.curdir
        if os.altsep is None:
            # POSIX: treat '\' as a separator too
            return path.replace("\\", os.sep)
        return path

    def get_file_system_entries(
        self,
        entity: FileSystemEntity,
        path: str,
        pattern: Optional[str] = None,
        project_directory: Optional[str] = None,
        strip_project_directory: bool = False,
    ) -> List[str]:
        """
        List the immediate children of path.

        Args:
            entity: Kind of entries to return
            path: Directory to list
            pattern: Single-segment pattern, or None for every entry
            project_directory: Prefix removed from results when stripping
            strip_project_directory: Whether to remove project_directory

        Returns:
            Matching child paths (empty when path is not a directory)

        Raises:
            PathTooLongError: If the OS rejects the path as too long
        """
        native = self._native(path)
        if not os.path.isdir(native):
            return []

        try:
            with os.scandir(native) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            if e.errno == errno.ENAMETOOLONG:
                raise PathTooLongError(f"Path too long: {path}", str(e))
            raise

        names = []
        for entry in entries:
            is_directory = entry.is_dir()
            if is_directory and entity.includes_directories:
                names.append(entry.name)
            elif not is_directory and entity.includes_files:
                names.append(entry.name)

        separator = self.settings.directory_separator
        results = [join_path(path, name, separator) for name in names_matching(names, pattern)]
        logger.debug(f"{len(results)} {entity.value} under '{path}' match {pattern!r}")

        if strip_project_directory and project_directory:
            remove_project_directory(results, project_directory)
        return results

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(self._native(path))
