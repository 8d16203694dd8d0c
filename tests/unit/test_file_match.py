"""
Regression tests for single-path matching and simulated enumeration.

Each matching case is checked twice: once through ``file_match`` and once by
expanding the pattern over an in-memory tree that holds only the candidate.
"""

from typing import Iterable

import pytest

from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.file_matcher import FileMatcher
from filespec_matcher.filesystem.memory import MemoryFileSystem


def match_driver(
    settings: MatcherSettings,
    filespec: str,
    matching: Iterable[str] = (),
    nonmatching: Iterable[str] = (),
    untouchable: Iterable[str] = (),
) -> None:
    """
    Expand filespec over a simulated tree and check the results.

    Every matching file must be found exactly once, no nonmatching file may
    be found, and no untouchable file may ever be handed out by the
    enumeration callback.
    """
    matching, nonmatching, untouchable = list(matching), list(nonmatching), list(untouchable)
    fs = MemoryFileSystem(matching + nonmatching + untouchable, separator="\\")
    files = FileMatcher(settings, fs).get_files("", filespec)
    found = [fs.normalize(f) for f in files]

    for path in matching:
        assert found.count(fs.normalize(path)) == 1, f"{path} not found exactly once in {files}"
    for path in nonmatching:
        assert fs.normalize(path) not in found, f"{path} unexpectedly matched"
    for path in untouchable:
        assert not fs.was_returned(path), f"{path} was enumerated"


@pytest.fixture
def validate_match(matcher, windows_settings):
    """Assert that filespec matches the candidate, by regex and by enumeration."""

    def validate(filespec, candidate, recursive, simulate=True):
        result = matcher.file_match(filespec, candidate)
        assert result.is_legal_file_spec, f"'{filespec}' should be legal"
        assert result.is_file_spec_recursive is recursive
        assert result.is_match, f"'{filespec}' should match '{candidate}'"
        if simulate:
            match_driver(windows_settings, filespec, matching=[candidate])

    return validate


@pytest.fixture
def validate_no_match(matcher, windows_settings):
    """Assert that filespec does not match the candidate."""

    def validate(filespec, candidate, recursive):
        result = matcher.file_match(filespec, candidate)
        assert result.is_legal_file_spec, f"'{filespec}' should be legal"
        assert result.is_file_spec_recursive is recursive
        assert not result.is_match, f"'{filespec}' should not match '{candidate}'"
        match_driver(windows_settings, filespec, nonmatching=[candidate])

    return validate


@pytest.fixture
def validate_illegal(matcher, windows_settings):
    """Assert that filespec is illegal and comes back verbatim from get_files."""

    def validate(filespec):
        info = matcher.get_file_spec_info(filespec)
        assert not info.is_legal_file_spec, f"'{filespec}' should be illegal"
        match_driver(windows_settings, filespec, matching=[filespec])

    return validate


class TestMatchDriver:
    """Test enumeration over a simulated tree."""

    def test_basic(self, windows_settings):
        """Test a trailing ** under a fixed directory."""
        match_driver(
            windows_settings,
            "Source\\**",
            matching=["Source\\Bart.txt", "Source\\Sub\\Homer.txt"],
            nonmatching=["Destination\\Bart.txt", "Destination\\Sub\\Homer.txt"],
        )

    def test_single_level_wildcard_does_not_recurse(self, windows_settings):
        """Test ?emp only looks one level down."""
        match_driver(
            windows_settings,
            "c:\\?emp\\foo.txt",
            matching=["c:\\temp\\foo.txt"],
            nonmatching=["c:\\timp\\foo.txt"],
            untouchable=["c:\\temp\\sub\\foo.txt"],
        )

    def test_outside_fixed_directory_is_untouched(self, windows_settings):
        """Test files outside the fixed directory are never enumerated."""
        match_driver(
            windows_settings,
            "c:\\src\\**\\*.cs",
            matching=["c:\\src\\a.cs", "c:\\src\\lib\\b.cs"],
            nonmatching=["c:\\src\\lib\\b.txt"],
            untouchable=["c:\\other\\c.cs", "c:\\d.cs"],
        )

    def test_levels_before_a_literal_after_star_star_are_untouched(self, windows_settings):
        """Test files are only listed where the rest of the pattern can still match."""
        match_driver(
            windows_settings,
            "c:\\src\\**\\x\\*.cs",
            matching=["c:\\src\\x\\a.cs", "c:\\src\\y\\x\\b.cs"],
            nonmatching=["c:\\src\\x\\a.txt"],
            untouchable=["c:\\src\\y\\z.cs", "c:\\src\\top.cs", "c:\\src\\x\\deep\\c.cs"],
        )

    def test_star_star_between_literals_skips_unrelated_levels(self, windows_settings):
        """Test files are listed only one level below each lib directory."""
        match_driver(
            windows_settings,
            "c:\\src\\**\\lib\\*\\*.cs",
            matching=["c:\\src\\lib\\core\\a.cs", "c:\\src\\pkg\\lib\\util\\b.cs"],
            untouchable=["c:\\src\\lib\\c.cs", "c:\\src\\pkg\\d.cs", "c:\\src\\e.cs"],
        )


class TestSimpleMatches:
    """Test non-recursive matching."""

    def test_basic_match(self, validate_match, validate_no_match):
        """Test literal names match case-insensitively."""
        validate_match("file.txt", "File.txt", False)
        validate_no_match("file.txt", "File.bin", False)

    def test_match_single_character(self, validate_match, validate_no_match):
        """Test ? matches one character."""
        validate_match("file.?xt", "File.txt", False)
        validate_no_match("file.?xt", "File.bin", False)

    def test_match_multiple_characters(self, validate_match, validate_no_match):
        """Test * matches a run of characters, including a literal star."""
        validate_match("*.txt", "*.txt", False)
        validate_no_match("*.txt", "*.bin", False)

    def test_dot_for_current_directory(self, validate_match, validate_no_match):
        """Test a leading .\\ segment."""
        validate_match(".\\file.txt", ".\\File.txt", False)
        validate_no_match(".\\file.txt", ".\\File.bin", False)

    def test_dot_dot_for_parent_directory(self, validate_match, validate_no_match):
        """Test leading ..\\ segments."""
        validate_match("..\\..\\*.*", "..\\..\\File.txt", False)
        validate_match("..\\..\\*.*", "..\\..\\File", False)
        validate_no_match("..\\..\\*.*", "..\\..\\dir1\\dir2\\File.txt", False)
        validate_no_match("..\\..\\*.*", "..\\..\\dir1\\dir2\\File", False)


class TestSeparators:
    """Test doubled separators and '.' segments."""

    def test_reduce_double_slashes_baseline(self, validate_match):
        """Test the baseline without doubled separators."""
        validate_match("f:\\dir1\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("**\\*.cs", "dir1\\dir2\\file.cs", True)
        validate_match("**\\*.cs", "file.cs", True)

    def test_reduce_double_slashes(self, validate_match):
        """Test doubled separators in the pattern."""
        validate_match("f:\\\\dir1\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\\\dir1\\\\\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\\\dir1\\\\\\dir2\\\\\\\\\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("..\\**/\\*.cs", "..\\dir1\\dir2\\file.cs", True)
        validate_match("..\\**/.\\*.cs", "..\\dir1\\dir2\\file.cs", True)
        validate_match("..\\**\\./.\\*.cs", "..\\dir1\\dir2\\file.cs", True)

    def test_double_slashes_on_both_sides(self, validate_match):
        """Test doubled separators in pattern and candidate."""
        validate_match("f:\\\\dir1\\dir2\\file.txt", "f:\\\\dir1\\dir2\\file.txt", False, False)
        validate_match("f:\\\\dir1\\\\\\dir2\\file.txt", "f:\\\\dir1\\\\\\dir2\\file.txt", False, False)
        validate_match(
            "f:\\\\dir1\\\\\\dir2\\\\\\\\\\file.txt",
            "f:\\\\dir1\\\\\\dir2\\\\\\\\\\file.txt",
            False,
            False,
        )
        validate_match("..\\**/\\*.cs", "..\\dir1\\dir2\\\\file.cs", True, False)
        validate_match("..\\**/.\\*.cs", "..\\dir1\\dir2//\\file.cs", True, False)
        validate_match("..\\**\\./.\\*.cs", "..\\dir1/\\/\\/dir2\\file.cs", True, False)

    def test_decompose_dot_slash(self, validate_match):
        """Test '.' segments vanish."""
        validate_match("f:\\.\\dir1\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\dir1\\.\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\dir1\\dir2\\.\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\.//dir1\\dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\dir1\\.//dir2\\file.txt", "f:\\dir1\\dir2\\file.txt", False)
        validate_match("f:\\dir1\\dir2\\.//file.txt", "f:\\dir1\\dir2\\file.txt", False)

        validate_match(".\\dir1\\dir2\\file.txt", ".\\dir1\\dir2\\file.txt", False)
        validate_match(".\\.\\dir1\\dir2\\file.txt", ".\\dir1\\dir2\\file.txt", False)
        validate_match(".//dir1\\dir2\\file.txt", ".\\dir1\\dir2\\file.txt", False)
        validate_match(".//.//dir1\\dir2\\file.txt", ".\\dir1\\dir2\\file.txt", False)


class TestRecursion:
    """Test ** semantics."""

    def test_simple_recursive(self, validate_match):
        """Test a bare ** matches a file in the current directory."""
        validate_match("**", ".\\File.txt", True)

    def test_recursive_dir_recursive(self, validate_match):
        """Test **\\x\\** in the middle of a pattern."""
        pattern = "c:\\foo\\**\\x\\**\\*.*"
        validate_match(pattern, "c:\\foo\\x\\file.txt", True)
        validate_match(pattern, "c:\\foo\\y\\x\\file.txt", True)
        validate_match(pattern, "c:\\foo\\x\\y\\file.txt", True)
        validate_match(pattern, "c:\\foo\\y\\x\\y\\file.txt", True)
        validate_match(pattern, "c:\\foo\\x\\x\\file.txt", True)
        validate_match(pattern, "c:\\foo\\x\\x\\x\\file.txt", True)

    def test_star_star_chains_collapse(self, validate_match):
        """Test runs of ** behave like one."""
        validate_match("a\\b\\**\\**\\**\\**\\**\\e\\*", "a\\b\\c\\d\\e\\f.txt", True)
        validate_match("a\\b\\**\\e\\*", "a\\b\\c\\d\\e\\f.txt", True)
        validate_match("a\\b\\**\\**\\e\\*", "a\\b\\c\\d\\e\\f.txt", True)
        validate_match("a\\b\\**\\**\\**\\e\\*", "a\\b\\c\\d\\e\\f.txt", True)
        validate_match("a\\b\\**\\**\\**\\**\\e\\*", "a\\b\\c\\d\\e\\f.txt", True)

    def test_star_star_matches_zero_directories(self, validate_match):
        """Test ** may stand for no directory at all."""
        validate_match("a\\b\\**\\e\\*", "a\\b\\e\\f.txt", True)

    def test_parent_without_slash(self, validate_no_match):
        """Test dir\\** never matches dir itself."""
        validate_no_match("C:\\foo\\**", "C:\\foo", True)
        validate_no_match(
            "\\\\server\\c$\\Documents and Settings\\User\\**",
            "\\\\server\\c$\\Documents and Settings\\User",
            True,
        )

    def test_item_recursion(self, validate_match):
        """Test c:\\foo\\** reaches nested files."""
        validate_match("c:\\foo\\**", "c:\\foo\\two\\subfile.txt", True)

    def test_multiple_star_star(self, validate_match, validate_no_match):
        """Test two ** segments around a literal directory."""
        validate_match(
            "c:\\**\\user\\**\\*.*", "c:\\Documents and Settings\\user\\NTUSER.DAT", True
        )
        validate_no_match(
            "c:\\**\\user1\\**\\*.*", "c:\\Documents and Settings\\user\\NTUSER.DAT", True
        )
        validate_match(
            "c:\\**\\user\\**\\*.*", "c://Documents and Settings\\user\\NTUSER.DAT", True
        )
        validate_no_match(
            "c:\\**\\user1\\**\\*.*", "c:\\Documents and Settings//user\\NTUSER.DAT", True
        )

    def test_trailing_dot_matches_no_extension(self, validate_match, validate_no_match):
        """Test *. under ** matches only extensionless files."""
        validate_match("c:\\mydir\\**\\*.", "c:\\mydir\\subdir\\bing", True, False)
        validate_no_match("c:\\mydir\\**\\*.", "c:\\mydir\\subdir\\bing.txt", True)


class TestUnc:
    """Test UNC paths."""

    def test_unc(self, validate_match, validate_no_match):
        """Test UNC patterns and candidates."""
        validate_match(
            "\\\\server\\c$\\**\\*.cs",
            "\\\\server\\c$\\Documents and Settings\\User\\Source.cs",
            True,
        )
        validate_no_match(
            "\\\\server\\c$\\**\\*.cs",
            "\\\\server\\c$\\Documents and Settings\\User\\Source.txt",
            True,
        )
        validate_match("\\\\**", "\\\\server\\c$\\Documents and Settings\\User\\Source.cs", True)
        validate_match(
            "\\\\**\\*.*", "\\\\server\\c$\\Documents and Settings\\User\\Source.cs", True
        )

    def test_relative_star_star_matches_unc_candidate(self, validate_match):
        """Test a relative ** matches a UNC path textually."""
        validate_match(
            "**", "\\\\server\\c$\\Documents and Settings\\User\\Source.cs", True, False
        )


class TestAntCompatibility:
    """Test patterns taken from Ant's documentation."""

    def test_source_safe(self, validate_match, validate_no_match):
        """Test **/SourceSafe/*."""
        validate_match("**/SourceSafe/*", "./SourceSafe/Repository", True)
        validate_match("**\\SourceSafe/*", "./SourceSafe/Repository", True)
        validate_match("**/SourceSafe/*", ".\\SourceSafe\\Repository", True)
        validate_match("**/SourceSafe/*", "./org/IIS/SourceSafe/Entries", True)
        validate_match("**/SourceSafe/*", "./org/IIS/pluggin/tools/tool/SourceSafe/Entries", True)
        validate_no_match("**/SourceSafe/*", "./org/IIS/SourceSafe/foo/bar/Entries", True)
        validate_no_match("**/SourceSafe/*", "./SourceSafeRepository", True)
        validate_no_match("**/SourceSafe/*", "./aSourceSafe/Repository", True)

    def test_trailing_star_star(self, validate_match, validate_no_match):
        """Test org/IIS/pluggin/**."""
        validate_match("org/IIS/pluggin/**", "org/IIS/pluggin/tools/tool/docs/index.html", True)
        validate_match("org/IIS/pluggin/**", "org/IIS/pluggin/test.xml", True)
        validate_match("org/IIS/pluggin/**", "org/IIS/pluggin\\test.xml", True)
        validate_no_match("org/IIS/pluggin/**", "org/IIS/abc.cs", True)

    def test_star_star_in_the_middle(self, validate_match, validate_no_match):
        """Test org/IIS/**/SourceSafe/*."""
        validate_match("org/IIS/**/SourceSafe/*", "org/IIS/SourceSafe/Entries", True)
        validate_match("org/IIS/**/SourceSafe/*", "org\\IIS/SourceSafe/Entries", True)
        validate_match("org/IIS/**/SourceSafe/*", "org/IIS\\SourceSafe/Entries", True)
        validate_match(
            "org/IIS/**/SourceSafe/*", "org/IIS/pluggin/tools/tool/SourceSafe/Entries", True
        )
        validate_no_match("org/IIS/**/SourceSafe/*", "org/IIS/SourceSafe/foo/bar/Entries", True)
        validate_no_match("org/IIS/**/SourceSafe/*", "org/IISSourceSage/Entries", True)

    def test_deliberate_incompatibilities(self, validate_no_match):
        """Test a trailing separator names a directory, not its contents."""
        validate_no_match("**/test/**", ".\\test", True)
        validate_no_match("org/", "org/IISSourceSage/Entries", False)
        validate_no_match("org\\", "org/IISSourceSage/Entries", False)


class TestIllegal:
    """Test illegal patterns."""

    @pytest.mark.parametrize(
        "filespec",
        [
            "**.cs",
            "***",
            "****",
            "*.cs**",
            "...\\*.cs",
            "http://www.website.com",
            "<:tag:>",
            "<:\\**",
        ],
    )
    def test_illegal_paths(self, validate_illegal, filespec):
        """Test illegal patterns are returned verbatim."""
        validate_illegal(filespec)

    def test_illegal_matches_itself_literally(self, matcher):
        """Test an illegal pattern only matches the identical string."""
        result = matcher.file_match("***", "***")
        assert result.is_match
        assert not result.is_legal_file_spec
        assert not result.is_file_spec_recursive

        assert not matcher.file_match("***", "abc").is_match
        assert not matcher.file_match("**.cs", "a.cs").is_match

    def test_too_long_path(self, matcher):
        """Test an overlong pattern is returned unchanged instead of failing."""
        long_string = "X" * 500 + "*"
        assert matcher.get_files("c:\\", long_string) == [long_string]


class TestMatchResultParts:
    """Test the captured parts of a match."""

    def test_parts(self, matcher):
        """Test fixed, wildcard and filename portions of the candidate."""
        result = matcher.file_match("c:\\src\\**\\*.cs", "c:\\src\\a\\b\\main.cs")
        assert result.fixed_directory_part == "c:\\src\\"
        assert result.wildcard_directory_part == "a\\b\\"
        assert result.filename_part == "main.cs"

    def test_no_match_has_empty_parts(self, matcher):
        """Test parts are empty when nothing matched."""
        result = matcher.file_match("c:\\src\\**\\*.cs", "d:\\other.txt")
        assert not result.is_match
        assert result.fixed_directory_part == ""
        assert result.filename_part == ""

    def test_short_names_in_candidate_are_expanded(self, windows_settings):
        """Test the candidate goes through short-name expansion first."""
        fs = MemoryFileSystem(["c:\\LongDirectoryName\\file.cs"])
        matcher = FileMatcher(windows_settings, fs)

        result = matcher.file_match("c:\\LongDirectoryName\\*.cs", "c:\\LONGDI~1\\file.cs")

        assert result.is_match
        assert result.fixed_directory_part == "c:\\LongDirectoryName\\"

    def test_short_names_in_filespec_are_expanded(self, windows_settings):
        """Test a short fixed directory in the filespec matches its long form."""
        fs = MemoryFileSystem(["D:\\LongDirectoryName\\a.cs"])
        matcher = FileMatcher(windows_settings, fs)

        result = matcher.file_match("D:\\LONGDI~1\\*.cs", "D:\\LongDirectoryName\\a.cs")

        assert result.is_match
        assert result.fixed_directory_part == "D:\\LongDirectoryName\\"
        assert result.filename_part == "a.cs"
        assert matcher.get_files("", "D:\\LONGDI~1\\*.cs") == ["D:\\LongDirectoryName\\a.cs"]

    def test_trailing_star_star_needs_a_name(self, matcher):
        """Test the directory itself, written with a trailing separator, is not its contents."""
        result = matcher.file_match("C:\\foo\\**", "C:\\foo\\")
        assert not result.is_match
        assert result.filename_part == ""
        assert not matcher.file_match("C:\\foo\\*.", "C:\\foo\\").is_match

    def test_literal_directory_pattern_still_matches_itself(self, matcher):
        """Test a wildcard-free pattern ending in a separator matches that directory."""
        assert matcher.file_match("c:\\foo\\", "c:\\foo\\").is_match
