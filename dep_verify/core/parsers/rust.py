"""Rust dependency file parsers."""

import re
from pathlib import Path
from typing import Iterator, Optional

from .base import BaseParser, Dependency, DependencyType, PathLike

# name = "1.0"
SIMPLE_DEPENDENCY_RE = re.compile(r'^([a-zA-Z0-9_-]+)\s*=\s*"([^"]+)"')

# name = { version = "1.0", features = [...] }
INLINE_TABLE_DEPENDENCY_RE = re.compile(r'^([a-zA-Z0-9_-]+)\s*=\s*\{.*?version\s*=\s*"([^"]+)"')

# name.version = "1.0"
DOTTED_DEPENDENCY_RE = re.compile(r'^([a-zA-Z0-9_-]+)\.version\s*=\s*"([^"]+)"')

# [dependencies.name], [target.'cfg(unix)'.dependencies.name]
TABLE_HEADER_RE = re.compile(r"\[(?:.*\.)?dependencies\.([a-zA-Z0-9_-]+)\]")

TABLE_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"')

DIGIT_RE = re.compile(r"\d")


def is_local_or_git_dependency(line: str) -> bool:
    """Check whether a declaration points at a path, a git repo or the workspace."""
    return "path" in line or "git" in line or "workspace = true" in line


def looks_like_version(value: str) -> bool:
    """Heuristic for ``name = "value"``: versions have digits, paths have separators."""
    return bool(DIGIT_RE.search(value)) and "/" not in value and "\\" not in value


class CargoTomlParser(BaseParser):
    """Parser for Cargo.toml files.

    A line-oriented reader for the dependency tables only; it does not
    implement TOML. ``[dependencies]``, ``[dev-dependencies]``,
    ``[build-dependencies]`` and target-specific variants are recognised, as
    are ``[dependencies.<name>]`` tables.
    """

    def __init__(self) -> None:
        """Initialize the Cargo.toml parser."""
        super().__init__()
        self.ecosystem = DependencyType.CRATES
        self.file_patterns = ["Cargo.toml"]
        self.skip_dirs += ["target"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file is a Cargo.toml file
        """
        return self._file_name(file_path) == "cargo.toml"

    def _parse_content(self, content: str, file_path: Path) -> Iterator[Dependency]:
        in_dependency_section = False
        table_dependency: Optional[str] = None

        for raw_line in content.splitlines():
            line = raw_line.strip()

            if not line or line.startswith("#"):
                continue

            if line.startswith("["):
                in_dependency_section = "dependencies" in line.lower() and "[[" not in line
                table_match = TABLE_HEADER_RE.search(line)
                table_dependency = table_match.group(1) if table_match and "[[" not in line else None
                continue

            if not in_dependency_section:
                continue

            if table_dependency is not None:
                version_match = TABLE_VERSION_RE.match(line)
                if version_match:
                    yield self._create_dependency(table_dependency, version_match.group(1), file_path)
                continue

            dependency = self._parse_inline_declaration(line, file_path)
            if dependency:
                yield dependency

    def _parse_inline_declaration(self, line: str, file_path: Path) -> Optional[Dependency]:
        """Parse one ``name = ...`` line of a dependency table.

        Args:
            line: Stripped line
            file_path: Source manifest

        Returns:
            Dependency, or None for local, git, workspace or unversioned entries
        """
        match = DOTTED_DEPENDENCY_RE.match(line) or INLINE_TABLE_DEPENDENCY_RE.match(line)
        if match:
            if is_local_or_git_dependency(line):
                return None
            return self._create_dependency(match.group(1), match.group(2), file_path)

        match = SIMPLE_DEPENDENCY_RE.match(line)
        if match and looks_like_version(match.group(2)):
            return self._create_dependency(match.group(1), match.group(2), file_path)

        return None
