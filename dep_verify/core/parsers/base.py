"""Base parser class and data models for dependency parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from ...utils.logging import get_logger
from ...utils.path_utils import walk_files

PathLike = Union[str, Path]

# Directories no ecosystem wants scanned
COMMON_SKIP_DIRS = (".git",)


class DependencyType(Enum):
    """Package ecosystem a dependency belongs to."""

    NPM = "Npm"
    NUGET = "NuGet"
    PYPI = "PyPi"
    CRATES = "Crates"
    MAVEN = "Maven"
    GRADLE = "Gradle"

    def __str__(self) -> str:
        return self.value


def dependency_key(ecosystem: DependencyType, name: str) -> str:
    """Build the deduplication key for a package name in an ecosystem.

    Args:
        ecosystem: Package ecosystem
        name: Package name as declared

    Returns:
        ``<ecosystem>:<lowercased name>``
    """
    return f"{ecosystem.value}:{name.lower()}"


@dataclass(frozen=True)
class Dependency:
    """A single declared dependency.

    Version and source file are informational; two declarations of the same
    package in one ecosystem share a :attr:`key`.
    """

    name: str
    version: Optional[str]
    ecosystem: DependencyType
    source_file: Path

    def __post_init__(self) -> None:
        """Validate the dependency."""
        if not self.name or not self.name.strip():
            raise ValueError("Dependency name cannot be empty")

    @property
    def key(self) -> str:
        """Deduplication key: ecosystem plus lowercased name."""
        return dependency_key(self.ecosystem, self.name)


class BaseParser(ABC):
    """Abstract base class for manifest parsers.

    Subclasses declare their ecosystem and noise directories and implement
    :meth:`can_parse` and :meth:`_parse_content`. :meth:`parse` never raises.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self.ecosystem: DependencyType = DependencyType.NPM
        self.file_patterns: List[str] = []
        self.skip_dirs: List[str] = list(COMMON_SKIP_DIRS)
        self.logger = get_logger(type(self).__name__)

    @abstractmethod
    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the given file.

        Args:
            file_path: Path (or bare file name) to check

        Returns:
            True if parser can handle the file
        """
        pass

    @abstractmethod
    def _parse_content(self, content: Union[str, bytes], file_path: Path) -> Iterable[Dependency]:
        """Extract dependencies from content returned by :meth:`_read_content`."""
        pass

    def find_files(self, root_path: PathLike) -> Iterator[Path]:
        """Find manifest files below a root directory.

        Args:
            root_path: Directory to search recursively

        Yields:
            Manifest paths outside this ecosystem's noise directories
        """
        return walk_files(Path(root_path), self.skip_dirs, self.can_parse)

    def parse(self, file_path: PathLike) -> Iterator[Dependency]:
        """Parse a manifest file.

        Unreadable or malformed files yield nothing instead of raising.

        Args:
            file_path: Path to the manifest

        Yields:
            Declared dependencies in file order
        """
        file_path = Path(file_path)
        content = self._read_content(file_path)
        if content is None:
            return
        yield from self._parse_content(content, file_path)

    def _read_content(self, file_path: Path) -> Optional[Union[str, bytes]]:
        """Read the manifest in the form :meth:`_parse_content` expects (text)."""
        return self._read_text(file_path)

    def _read_bytes(self, file_path: Path) -> Optional[bytes]:
        """Read a manifest undecoded, for formats that declare their own encoding.

        Args:
            file_path: Path to read

        Returns:
            Raw file content, or None if the file cannot be read
        """
        try:
            return file_path.read_bytes()
        except OSError as e:
            self.logger.debug(f"Cannot read {file_path}: {e}")
            return None

    def _read_text(self, file_path: Path) -> Optional[str]:
        """Read a manifest as UTF-8 (BOM tolerated).

        Args:
            file_path: Path to read

        Returns:
            File content, or None if the file cannot be read
        """
        try:
            return file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.debug(f"Cannot read {file_path}: {e}")
            return None

    def _create_dependency(
        self,
        name: str,
        version: Optional[str],
        file_path: Path
    ) -> Dependency:
        """Create a Dependency for this parser's ecosystem.

        Args:
            name: Package name
            version: Declared version, if any
            file_path: Manifest the declaration came from

        Returns:
            Dependency object
        """
        return Dependency(
            name=name,
            version=version or None,
            ecosystem=self.ecosystem,
            source_file=file_path,
        )

    @staticmethod
    def _file_name(file_path: PathLike) -> str:
        """Lowercased base name of a path or file name."""
        return Path(file_path).name.lower()
