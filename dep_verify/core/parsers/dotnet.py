""".NET project file parsers."""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, Optional

from .base import BaseParser, Dependency, DependencyType, PathLike


def local_name(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def child_text(element: ET.Element, name: str) -> Optional[str]:
    """Text of the first direct child with the given local name, stripped."""
    for child in element:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            return child.text.strip() if child.text else None
    return None


class NuGetProjectParser(BaseParser):
    """Parser for SDK-style ``*.csproj`` PackageReference items."""

    def __init__(self) -> None:
        """Initialize the csproj parser."""
        super().__init__()
        self.ecosystem = DependencyType.NUGET
        self.file_patterns = ["*.csproj"]
        self.skip_dirs += ["bin", "obj"]

    def can_parse(self, file_path: PathLike) -> bool:
        """Check if this parser can handle the file.

        Args:
            file_path: Path to the file

        Returns:
            True if file has a .csproj extension
        """
        return self._file_name(file_path).endswith(".csproj")

    def _read_content(self, file_path: Path) -> Optional[bytes]:
        # Undecoded, so expat applies the BOM and the declared encoding
        return self._read_bytes(file_path)

    def _parse_content(self, content: bytes, file_path: Path) -> Iterator[Dependency]:
        try:
            root = ET.fromstring(content)
        except (ET.ParseError, LookupError, ValueError) as e:
            # Unknown codecs and multi-byte ones expat cannot use (UTF-32) land here too
            self.logger.debug(f"Invalid XML in {file_path}: {e}")
            return

        for element in root.iter():
            if not isinstance(element.tag, str) or local_name(element.tag) != "PackageReference":
                continue

            name = element.get("Include")
            if not name or not name.strip():
                continue

            # Version may be an attribute or a child element
            version = element.get("Version") or child_text(element, "Version")

            yield self._create_dependency(name.strip(), version, file_path)
