"""Utility functions and helpers for DepVerify."""

from .logging import setup_logging, get_logger
from .path_utils import PathFilter, walk_files, relative_posix_path, is_excluded_path

__all__ = [
    "setup_logging",
    "get_logger",
    "PathFilter",
    "walk_files",
    "relative_posix_path",
    "is_excluded_path",
]
