"""Path utilities for walking project trees and filtering excluded paths."""

import os
import re
from pathlib import Path
from typing import Callable, FrozenSet, Iterable, Iterator, List, Optional, Pattern


def walk_files(
    root_path: Path,
    skip_dirs: Iterable[str] = (),
    predicate: Optional[Callable[[str], bool]] = None
) -> Iterator[Path]:
    """Lazily walk a directory tree, pruning noise directories.

    Only directories below ``root_path`` are pruned, so a root that itself
    lives inside e.g. a ``build`` directory is still scanned. Directory and
    file names are visited in sorted order so results are deterministic.

    Args:
        root_path: Root directory to walk
        skip_dirs: Directory names never descended into
        predicate: Optional filter on the file name

    Yields:
        Paths of matching files
    """
    root_path = Path(root_path)
    if not root_path.is_dir():
        return

    skipped: FrozenSet[str] = frozenset(skip_dirs)

    for dir_path, dir_names, file_names in os.walk(root_path):
        dir_names[:] = sorted(name for name in dir_names if name not in skipped)
        for file_name in sorted(file_names):
            if predicate is None or predicate(file_name):
                yield Path(dir_path) / file_name


def relative_posix_path(file_path: Path, root_path: Path) -> str:
    """Return ``file_path`` relative to ``root_path`` with forward slashes."""
    return Path(os.path.relpath(file_path, root_path)).as_posix()


def glob_to_regex(pattern: str) -> Pattern[str]:
    """Translate an exclude glob into a compiled regular expression.

    ``**`` matches across path separators, ``*`` within one segment and
    ``?`` exactly one character. Matching is anchored and case-insensitive.

    Args:
        pattern: Glob pattern such as ``vendor/**``

    Returns:
        Compiled pattern
    """
    regex = (
        re.escape(pattern)
        .replace(r"\*\*", ".*")
        .replace(r"\*", "[^/]*")
        .replace(r"\?", ".")
    )
    return re.compile(f"^{regex}$", re.IGNORECASE)


class PathFilter:
    """Filters paths based on exclude glob patterns."""

    def __init__(self, exclude_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            exclude_patterns: Glob patterns matched against root-relative paths
        """
        self.exclude_patterns = list(exclude_patterns or [])
        self._compiled = [(pattern, glob_to_regex(pattern)) for pattern in self.exclude_patterns]

    def matching_pattern(self, relative_path: str) -> Optional[str]:
        """Return the first pattern matching a root-relative path, if any."""
        normalized = relative_path.replace("\\", "/")
        for pattern, regex in self._compiled:
            if regex.match(normalized):
                return pattern
        return None

    def is_excluded(self, relative_path: str) -> bool:
        """Check if a root-relative path is excluded.

        Args:
            relative_path: Path relative to the scan root

        Returns:
            True if any exclude pattern matches
        """
        return self.matching_pattern(relative_path) is not None


def is_excluded_path(
    file_path: Path,
    root_path: Path,
    exclude_patterns: Optional[List[str]] = None
) -> bool:
    """Convenience check of a single file against exclude patterns.

    Args:
        file_path: File to check
        root_path: Scan root the patterns are relative to
        exclude_patterns: Glob patterns

    Returns:
        True if the file is excluded
    """
    return PathFilter(exclude_patterns).is_excluded(relative_posix_path(file_path, root_path))
