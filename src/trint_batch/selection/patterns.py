"""Glob pattern expansion and pattern file parsing."""

import glob
import logging
import os
import re
from pathlib import Path

from trint_batch.errors import ResolutionError

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"


def expand_home(pattern: str) -> str:
    """Replace a leading ~ with the user's home directory."""
    if not pattern.startswith("~"):
        return pattern
    rest = pattern[1:].lstrip("/\\")
    home = str(Path.home())
    return os.path.join(home, rest) if rest else home


def _match_files(pattern: str) -> list[str]:
    try:
        matches = [
            os.path.abspath(p) for p in glob.iglob(pattern, recursive=True) if os.path.isfile(p)
        ]
    except (re.error, OSError) as e:
        raise ResolutionError(f"Invalid pattern {pattern!r}: {e}") from e
    return sorted(matches)


def expand_patterns(patterns: list[str], debug: bool = False) -> list[str]:
    """
    Find the files matching a list of glob patterns.

    A leading ``~`` expands to the home directory and ``**`` matches across
    directories. Only regular files are returned, as absolute paths. Hidden
    files are skipped unless a pattern component itself starts with a dot.

    Matches of each pattern are sorted and appended in pattern order. The
    same file matched by several patterns appears once per match.

    Args:
        patterns: Glob patterns, processed in order
        debug: Log per-pattern match counts

    Returns:
        Absolute paths of all matched files

    Raises:
        ResolutionError: If a pattern cannot be evaluated
    """
    all_files: list[str] = []

    for pattern in patterns:
        expanded = expand_home(pattern)

        if debug:
            logger.debug("Processing pattern: %s", pattern)
            if expanded != pattern:
                logger.debug("Expanded to: %s", expanded)

        matched = _match_files(expanded)

        if debug:
            logger.debug("Found %d files for pattern: %s", len(matched), pattern)

        all_files.extend(matched)

    if debug:
        logger.debug("Total files found from patterns: %d", len(all_files))

    return all_files


def parse_patterns_file(file_path: str | Path) -> list[str]:
    """
    Parse glob patterns from a text file.

    One pattern per line. Everything after a ``#`` is a comment, surrounding
    whitespace is stripped, and blank lines are skipped.

    Raises:
        ResolutionError: If the file cannot be read
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResolutionError(f"Cannot read pattern file {file_path}: {e}") from e

    patterns = []
    for line in content.split("\n"):
        pattern = line.split(COMMENT_CHAR, 1)[0].strip()
        if pattern:
            patterns.append(pattern)

    return patterns
