"""Registry of manifest parsers, keyed by ecosystem."""

from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .base import BaseParser, Dependency, DependencyType, PathLike


class ParserRegistry:
    """Ordered registry of manifest parsers.

    Iteration follows registration order, which is also the order in which
    the scanner discovers files and therefore decides which duplicate
    declaration is kept.
    """

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[DependencyType, BaseParser] = {}

    def register(self, parser: BaseParser) -> None:
        """Register a parser for its ecosystem.

        Args:
            parser: Parser instance to register

        Raises:
            ValueError: If a parser for the ecosystem is already registered
        """
        if parser.ecosystem in self._parsers:
            raise ValueError(f"A parser for {parser.ecosystem} is already registered")
        self._parsers[parser.ecosystem] = parser

    def get_parser(self, ecosystem: DependencyType) -> Optional[BaseParser]:
        """Get the parser for an ecosystem.

        Args:
            ecosystem: Ecosystem to look up

        Returns:
            Parser instance or None if not found
        """
        return self._parsers.get(ecosystem)

    def find_parser_for_file(self, file_path: PathLike) -> Optional[BaseParser]:
        """Find a parser that can handle the given file.

        Args:
            file_path: Path to the file

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers.values():
            if parser.can_parse(file_path):
                return parser
        return None

    def get_supported_ecosystems(self) -> List[DependencyType]:
        """Get list of supported ecosystems.

        Returns:
            Ecosystems in registration order
        """
        return list(self._parsers.keys())

    def get_file_patterns(self) -> Dict[DependencyType, List[str]]:
        """Get the manifest file patterns per ecosystem.

        Returns:
            Mapping of ecosystem to file name patterns
        """
        return {ecosystem: list(parser.file_patterns) for ecosystem, parser in self._parsers.items()}

    def parse_file(self, file_path: PathLike) -> List[Dependency]:
        """Parse a file using the appropriate parser.

        Args:
            file_path: Path to the file to parse

        Returns:
            Dependencies declared in the file (empty if no parser matches)
        """
        parser = self.find_parser_for_file(file_path)
        if parser:
            return list(parser.parse(Path(file_path)))
        return []

    def __iter__(self) -> Iterator[BaseParser]:
        return iter(self._parsers.values())

    def __len__(self) -> int:
        return len(self._parsers)
