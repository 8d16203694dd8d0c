"""
Command-line interface for filespec-matcher.

Results go to stdout, one per line; log records go to stderr.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from filespec_matcher import __version__
from filespec_matcher.core.config import MatcherSettings
from filespec_matcher.core.exceptions import FileMatcherError
from filespec_matcher.core.models import FileSystemEntity
from filespec_matcher.file_matcher import FileMatcher


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure logging based on verbosity level.

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Enable quiet mode (WARNING+ only)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filespec-matcher",
        description="Match and expand file specifications with *, ? and ** wildcards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every C# file below src
  filespec-matcher files "src/**/*.cs"

  # Relative to a project directory, with Windows separators
  filespec-matcher -c settings.yaml files "**\\*.cs" --project-dir c:\\project

  # Does a path match?
  filespec-matcher match "c:\\foo\\**" "c:\\foo\\two\\subfile.txt"
        """,
    )

    parser.add_argument("-c", "--config", type=Path, help="Path to settings YAML file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output (DEBUG level)"
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", required=True)

    files = commands.add_parser("files", help="List paths matching a pattern")
    files.add_argument("pattern")
    files.add_argument("--project-dir", default="", help="Directory relative patterns resolve against")
    files.add_argument(
        "--directories", action="store_true", help="Also return matching directories"
    )

    match = commands.add_parser("match", help="Check one path against a pattern")
    match.add_argument("pattern")
    match.add_argument("path")

    info = commands.add_parser("info", help="Show whether a pattern is legal and recursive")
    info.add_argument("pattern")

    split = commands.add_parser("split", help="Show the fixed, wildcard and filename parts")
    split.add_argument("pattern")

    long_path = commands.add_parser("long-path", help="Expand short (8.3) names in a path")
    long_path.add_argument("path")

    return parser


def run(args: argparse.Namespace, matcher: FileMatcher) -> int:
    if args.command == "files":
        entity = (
            FileSystemEntity.FILES_AND_DIRECTORIES if args.directories else FileSystemEntity.FILES
        )
        for path in matcher.get_files(args.project_dir, args.pattern, entity=entity):
            print(path)
        return 0

    if args.command == "match":
        result = matcher.file_match(args.pattern, args.path)
        print(f"match: {result.is_match}")
        print(f"legal: {result.is_legal_file_spec}")
        print(f"recursive: {result.is_file_spec_recursive}")
        if result.is_match:
            print(f"fixed: {result.fixed_directory_part}")
            print(f"wildcard: {result.wildcard_directory_part}")
            print(f"filename: {result.filename_part}")
        return 0 if result.is_match else 1

    if args.command == "info":
        info = matcher.get_file_spec_info(args.pattern)
        print(f"legal: {info.is_legal_file_spec}")
        print(f"recursive: {info.needs_recursion}")
        return 0

    if args.command == "split":
        parts = matcher.split_file_spec(args.pattern)
        print(f"fixed: {parts.fixed_directory_part}")
        print(f"wildcard: {parts.wildcard_directory_part}")
        print(f"filename: {parts.filename_part}")
        return 0

    print(matcher.get_long_path_name(args.path))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    logger = logging.getLogger(__name__)

    try:
        if args.config:
            logger.debug(f"Loading settings from: {args.config}")
            settings = MatcherSettings.from_yaml(args.config)
        else:
            settings = MatcherSettings()

        return run(args, FileMatcher(settings))

    except FileMatcherError as e:
        logger.error(f"{e.message}")
        if e.details and args.verbose:
            logger.error(f"Details: {e.details}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
