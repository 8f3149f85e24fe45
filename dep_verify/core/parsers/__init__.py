"""Manifest parsers for the supported ecosystems."""

from .base import BaseParser, Dependency, DependencyType, dependency_key
from .nodejs import NpmPackageParser
from .dotnet import NuGetProjectParser
from .python import PyPiParser
from .rust import CargoTomlParser
from .jvm import MavenPomParser, GradleBuildParser
from .registry import ParserRegistry


def create_default_registry() -> ParserRegistry:
    """Create a registry holding one parser per supported ecosystem.

    Returns:
        Registry in npm, NuGet, PyPI, Crates, Maven, Gradle order
    """
    registry = ParserRegistry()
    registry.register(NpmPackageParser())
    registry.register(NuGetProjectParser())
    registry.register(PyPiParser())
    registry.register(CargoTomlParser())
    registry.register(MavenPomParser())
    registry.register(GradleBuildParser())
    return registry


# Register built-in parsers
registry = create_default_registry()

# Convenience exports
DependencyParser = registry
__all__ = [
    "BaseParser",
    "Dependency",
    "DependencyType",
    "dependency_key",
    "DependencyParser",
    "ParserRegistry",
    "create_default_registry",
    "registry",
    "NpmPackageParser",
    "NuGetProjectParser",
    "PyPiParser",
    "CargoTomlParser",
    "MavenPomParser",
    "GradleBuildParser",
]
