"""Python dependency file parsers."""

import re
from pathlib import Path
from typing import Iterator, Optional, Tuple

from .base import BaseParser, Dependency, DependencyType, PathLike

# Leading distribution name; extras and specifiers are not part of it
PACKAGE_NAME_RE = re.compile(r"^([a-zA-Z0-9][-a-zA-Z0-9._]*)")

# Text following the first version operator
VERSION_RE = re.compile(r"(?:===|==|>=|<=|~=|!=|<|>)\s*([^\s,;#\]]+)")

# Quoted strings inside a TOML array
QUOTED_STRING_RE = re.compile(r"\"([^\"]+)\"|'([^']+)'")

# Requirement lines that do not name a registry package
NON_REGISTRY_PREFIXES = ("git+", "http://", "https://", "file:", ".", "/")


def parse_requirement_spec(spec: str) -> Optional[Tuple[str, Optional[str]]]:
    """Split a PEP 508-ish requirement into name and version.

    Args:
        spec: Requirement string such as ``flask[async]>=2.0; python_version>"3.8"``

    Returns:
        ``(name, version)`` or None when no package name is present
    """
    spec = spec.strip()
    name_match = PACKAGE_NAME_RE.match(spec)
    if not name_match:
        return None

    # Environment markers may contain operators of their own
    requirement = spec.split(";", 1)[0]
    version_match = VERSION_RE.search(requirement)
    version = version_match.group(1) if version_match else None

    return name_match.group(1), version


class PyPiParser(BaseParser):
    """Parser for requirements*.txt and pyproject.toml files."""

    def __init__(self) -> None:
        """Initialize the Python parser."""
        super().__init__()
        self.ecosystem = DependencyType.PYPI
        self.file_patterns = ["requirements*.txt", "pyproject.toml"]
        self.skip_dirs += ["venv", ".venv", "env", ".env", "__pycache__", ".tox", "site-packages"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file is a requirements file or pyproject.toml
        """
        filename = self._file_name(file_path)
        return (
            (filename.startswith("requirements") and filename.endswith(".txt"))
            or filename == "pyproject.toml"
        )

    def _parse_content(self, content: str, file_path: Path) -> Iterator[Dependency]:
        if file_path.name.lower() == "pyproject.toml":
            return self._parse_pyproject(content, file_path)
        return self._parse_requirements(content, file_path)

    def _parse_requirements(self, content: str, file_path: Path) -> Iterator[Dependency]:
        """Parse requirements.txt content line by line.

        Args:
            content: File content
            file_path: Source manifest

        Yields:
            Registry dependencies
        """
        for raw_line in content.splitlines():
            line = raw_line.strip()

            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue

            # -r/-c includes, -e editable installs and --options
            if line.startswith("-"):
                continue

            if line.startswith(NON_REGISTRY_PREFIXES):
                continue

            # Remove inline comments
            line = line.split("#", 1)[0].strip()

            parsed = parse_requirement_spec(line)
            if parsed:
                name, version = parsed
                yield self._create_dependency(name, version, file_path)

    def _parse_pyproject(self, content: str, file_path: Path) -> Iterator[Dependency]:
        """Parse the ``dependencies = [...]`` arrays of pyproject.toml.

        Any section whose header is ``[project]`` or mentions
        ``dependencies`` is searched.

        Args:
            content: File content
            file_path: Source manifest

        Yields:
            Dependencies listed in the arrays
        """
        in_dependency_section = False
        in_array = False

        for raw_line in content.splitlines():
            line = raw_line.strip()

            if line.startswith("["):
                header = line.lower()
                in_dependency_section = header == "[project]" or "dependencies" in header
                in_array = False
                continue

            if not in_dependency_section or line.startswith("#"):
                continue

            if line.lower().startswith("dependencies") and "[" in line:
                array_text = line.split("[", 1)[1]
                yield from self._extract_from_array_line(array_text, file_path)
                in_array = not self._closes_array(array_text)
                continue

            if in_array:
                yield from self._extract_from_array_line(line, file_path)
                if self._closes_array(line):
                    in_array = False

    @staticmethod
    def _closes_array(line: str) -> bool:
        """True if ``]`` appears outside quoted strings (extras are quoted)."""
        return "]" in QUOTED_STRING_RE.sub("", line)

    def _extract_from_array_line(self, line: str, file_path: Path) -> Iterator[Dependency]:
        """Extract requirements from quoted strings on one array line."""
        for match in QUOTED_STRING_RE.finditer(line):
            spec = match.group(1) if match.group(1) is not None else match.group(2)
            parsed = parse_requirement_spec(spec)
            if parsed:
                name, version = parsed
                yield self._create_dependency(name, version, file_path)
