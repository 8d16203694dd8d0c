"""Rewrite result paths relative to a project directory."""

from typing import List

from filespec_matcher.paths.normalizer import ends_with_separator, is_separator


def remove_project_directory(paths: List[str], project_directory: str) -> List[str]:
    """
    Strip a leading project directory from each path, in place.

    A path loses the prefix only when the project directory is followed
    immediately by a separator, so sibling directories sharing a name
    prefix are left alone. Comparison is ordinal and case-insensitive.

    Args:
        paths: Paths to rewrite (modified in place)
        project_directory: Directory prefix to remove

    Returns:
        The same list object

    Example:
        >>> remove_project_directory(["c:\\\\directory\\\\1.file"], "c:\\\\directory")
        ['1.file']
        >>> remove_project_directory(["c:\\\\directorymorechars\\\\1.file"], "c:\\\\directory")
        ['c:\\\\directorymorechars\\\\1.file']
    """
    if not project_directory:
        return paths

    prefix_length = len(project_directory)
    folded_prefix = project_directory.lower()
    has_trailing_separator = ends_with_separator(project_directory)

    for i, path in enumerate(paths):
        if len(path) <= prefix_length:
            continue
        if path[:prefix_length].lower() != folded_prefix:
            continue

        if has_trailing_separator:
            paths[i] = path[prefix_length:]
        elif is_separator(path[prefix_length]):
            paths[i] = path[prefix_length + 1 :]

    return paths
