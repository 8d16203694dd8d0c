"""
Integration tests running the matcher against real directories.
"""

import os

import pytest

from filespec_matcher import FileMatcher, FileSystemEntity, MatcherSettings
from filespec_matcher.filesystem.local import LocalFileSystem


@pytest.fixture
def settings():
    """Settings matching the host separator."""
    return MatcherSettings(directory_separator=os.sep, case_insensitive_file_system=False)


@pytest.fixture
def matcher(settings):
    """FileMatcher over the local file system."""
    return FileMatcher(settings, LocalFileSystem(settings))


@pytest.fixture
def workspace(tmp_path):
    """A directory tree with a few source files."""
    for relative in [
        "MyFile.txt",
        "src/app.py",
        "src/app.pyc",
        "src/pkg/__init__.py",
        "src/pkg/core.py",
        "docs/index.md",
    ]:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("content\n", encoding="utf-8")
    return tmp_path


def join(*parts):
    return os.sep.join(parts)


class TestLocalExpansion:
    """Test get_files over real directories."""

    def test_recursive_relative_to_project(self, matcher, workspace):
        """Test ** below the project directory yields project-relative paths."""
        files = matcher.get_files(str(workspace), "src/**/*.py")
        assert files == [
            join("src", "app.py"),
            join("src", "pkg", "__init__.py"),
            join("src", "pkg", "core.py"),
        ]

    def test_absolute_pattern(self, matcher, workspace):
        """Test an absolute pattern yields absolute paths."""
        files = matcher.get_files(str(workspace), join(str(workspace), "docs", "*.md"))
        assert files == [join(str(workspace), "docs", "index.md")]

    def test_star_star_slash_star_star_is_not_literal(self, matcher, workspace):
        """Test dir/**/** expands instead of leaking '**' into results."""
        files = matcher.get_files(str(workspace), join(str(workspace), "**", "**"))
        result = ", ".join(files)
        assert "**" not in result
        assert "MyFile.txt" in result

    def test_trailing_dot_matches_no_extension(self, matcher, tmp_path):
        """Test **/sub*/*. finds only the extensionless file."""
        subdir = tmp_path / "subdir"
        subdir.mkdir()
        (subdir / "bing").write_text("y", encoding="utf-8")
        (subdir / "bing.txt").write_text("y", encoding="utf-8")

        files = matcher.get_files(str(tmp_path), join(str(tmp_path), "**", "sub*", "*."))

        assert files == [join(str(tmp_path), "subdir", "bing")]

    def test_star_dot_dot_does_not_crash(self, matcher, tmp_path):
        """Test a '..' after a wildcard is returned literally."""
        (tmp_path / "SubDir").mkdir()
        pattern = join(str(tmp_path), "*", "..", "bar")

        assert matcher.get_files(str(tmp_path), pattern) == [pattern]

    def test_missing_directory(self, matcher, tmp_path):
        """Test a missing fixed directory yields nothing."""
        assert matcher.get_files(str(tmp_path), "missing/**/*.py") == []

    def test_directories(self, matcher, workspace):
        """Test enumerating directories."""
        result = matcher.get_files(
            str(workspace), "**/p*", entity=FileSystemEntity.DIRECTORIES
        )
        assert result == [join("src", "pkg")]

    def test_file_match_and_get_files_agree(self, matcher, workspace):
        """Test every enumerated path also matches through file_match."""
        pattern = join(str(workspace), "**", "*.py")
        files = matcher.get_files("", pattern)

        assert len(files) == 3
        for path in files:
            assert matcher.file_match(pattern, path).is_match


class TestLocalFileSystem:
    """Test the local enumeration callbacks."""

    def test_entries_are_sorted(self, settings, workspace):
        """Test entries come back in name order."""
        fs = LocalFileSystem(settings)
        entries = fs.get_file_system_entries(FileSystemEntity.FILES_AND_DIRECTORIES, str(workspace))
        names = [os.path.basename(e) for e in entries]
        assert names == sorted(names)

    def test_not_a_directory(self, settings, workspace):
        """Test listing a file yields nothing."""
        fs = LocalFileSystem(settings)
        assert fs.get_file_system_entries(FileSystemEntity.FILES, str(workspace / "MyFile.txt")) == []

    def test_short_name_probe(self, settings, tmp_path):
        """Test generated aliases resolve to long names."""
        (tmp_path / "LongDirectoryName").mkdir()
        fs = LocalFileSystem(settings)

        assert fs.get_file_system_entries(
            FileSystemEntity.FILES_AND_DIRECTORIES, str(tmp_path), "LONGDI~1"
        ) == [join(str(tmp_path), "LongDirectoryName")]

    def test_directory_exists(self, settings, workspace):
        """Test existence checks."""
        fs = LocalFileSystem(settings)
        assert fs.directory_exists(str(workspace / "src"))
        assert not fs.directory_exists(str(workspace / "MyFile.txt"))
