"""Node.js dependency file parsers."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

from .base import BaseParser, Dependency, DependencyType, PathLike

# Version specs pointing outside the npm registry
NON_REGISTRY_PREFIXES = (
    "file:",
    "link:",
    "git:",
    "git+",
    "github:",
    "http:",
    "https:",
)


class NpmPackageParser(BaseParser):
    """Parser for Node.js package.json files."""

    DEPENDENCY_SECTIONS = (
        "dependencies",
        "devDependencies",
        "peerDependencies",
        "optionalDependencies",
    )

    def __init__(self) -> None:
        """Initialize the package.json parser."""
        super().__init__()
        self.ecosystem = DependencyType.NPM
        self.file_patterns = ["package.json"]
        self.skip_dirs += ["node_modules"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file is a package.json file
        """
        return self._file_name(file_path) == "package.json"

    def _parse_content(self, content: str, file_path: Path) -> Iterator[Dependency]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            self.logger.debug(f"Invalid JSON in {file_path}: {e}")
            return

        if not isinstance(data, dict):
            return

        for section_name in self.DEPENDENCY_SECTIONS:
            yield from self._parse_section(data.get(section_name), file_path)

    def _parse_section(self, section: Any, file_path: Path) -> Iterator[Dependency]:
        """Parse one dependency section of package.json.

        Args:
            section: Section value (expected to map names to version specs)
            file_path: Source manifest

        Yields:
            Registry dependencies of the section
        """
        if not isinstance(section, dict):
            return

        entries: Dict[str, Any] = section
        for name, version_spec in entries.items():
            if not name or not name.strip():
                continue

            version = version_spec if isinstance(version_spec, str) else None
            if version and version.startswith(NON_REGISTRY_PREFIXES):
                continue

            yield self._create_dependency(name, version, file_path)
