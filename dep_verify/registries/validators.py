"""Registry validators: map a package name to a registry URL and probe it."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Protocol, Type
from urllib.parse import quote

from packaging.utils import canonicalize_name

from ..core.parsers.base import DependencyType


class UrlProbe(Protocol):
    """Anything that can answer whether a URL exists."""

    async def check_url_exists(self, url: str) -> Optional[bool]:
        ...


class PackageValidator(ABC):
    """Checks whether a package exists in its ecosystem's registry."""

    ecosystem: DependencyType

    def __init__(self, probe: UrlProbe) -> None:
        """Initialize the validator.

        Args:
            probe: Shared, rate-limited URL probe
        """
        self.probe = probe

    async def validate(self, package_name: str) -> Optional[bool]:
        """Check a package against the registry.

        Args:
            package_name: Package name as declared

        Returns:
            True if it exists, False if it does not (or the name is
            unusable), None if the registry could not be queried
        """
        if not package_name or not package_name.strip():
            return False

        url = self.build_url(package_name)
        if url is None:
            return False

        return await self.probe.check_url_exists(url)

    @abstractmethod
    def build_url(self, package_name: str) -> Optional[str]:
        """Build the registry URL for a package, or None if the name is invalid."""
        pass


class NpmValidator(PackageValidator):
    """Validator for npm packages via the npm registry."""

    ecosystem = DependencyType.NPM
    BASE_URL = "https://registry.npmjs.org/"

    def build_url(self, package_name: str) -> Optional[str]:
        # @scope/name -> @scope%2Fname
        return f"{self.BASE_URL}{quote(package_name, safe='@')}"


class NuGetValidator(PackageValidator):
    """Validator for NuGet packages via the v3 flat container API."""

    ecosystem = DependencyType.NUGET
    BASE_URL = "https://api.nuget.org/v3-flatcontainer/"

    def build_url(self, package_name: str) -> Optional[str]:
        # The flat container only serves lowercase ids
        return f"{self.BASE_URL}{quote(package_name.lower(), safe='')}/index.json"


class PyPiValidator(PackageValidator):
    """Validator for Python packages via the PyPI JSON API."""

    ecosystem = DependencyType.PYPI
    BASE_URL = "https://pypi.org/pypi/"

    def build_url(self, package_name: str) -> Optional[str]:
        # PyPI redirects non-normalized names; ask for the canonical one directly
        return f"{self.BASE_URL}{canonicalize_name(package_name)}/json"


class CratesValidator(PackageValidator):
    """Validator for Rust crates via the crates.io API."""

    ecosystem = DependencyType.CRATES
    BASE_URL = "https://crates.io/api/v1/crates/"

    def build_url(self, package_name: str) -> Optional[str]:
        return f"{self.BASE_URL}{quote(package_name, safe='')}"


class MavenValidator(PackageValidator):
    """Validator for Maven artifacts via Maven Central metadata."""

    ecosystem = DependencyType.MAVEN
    BASE_URL = "https://repo1.maven.org/maven2/"

    def build_url(self, package_name: str) -> Optional[str]:
        parts = package_name.split(":")
        if len(parts) != 2 or not all(part.strip() for part in parts):
            return None

        group_id, artifact_id = parts
        # com.google.guava -> com/google/guava
        group_path = group_id.replace(".", "/")
        return f"{self.BASE_URL}{group_path}/{artifact_id}/maven-metadata.xml"


class GradleValidator(PackageValidator):
    """Validator for Gradle dependencies.

    Gradle uses Maven coordinates and Maven Central, so every check is
    delegated to an owned :class:`MavenValidator`.
    """

    ecosystem = DependencyType.GRADLE

    def __init__(self, probe: UrlProbe) -> None:
        super().__init__(probe)
        self.maven_validator = MavenValidator(probe)

    async def validate(self, package_name: str) -> Optional[bool]:
        return await self.maven_validator.validate(package_name)

    def build_url(self, package_name: str) -> Optional[str]:
        return self.maven_validator.build_url(package_name)


VALIDATOR_CLASSES: Dict[DependencyType, Type[PackageValidator]] = {
    DependencyType.NPM: NpmValidator,
    DependencyType.NUGET: NuGetValidator,
    DependencyType.PYPI: PyPiValidator,
    DependencyType.CRATES: CratesValidator,
    DependencyType.MAVEN: MavenValidator,
    DependencyType.GRADLE: GradleValidator,
}


def create_validators(probe: UrlProbe) -> Dict[DependencyType, PackageValidator]:
    """Create one validator per ecosystem around a shared probe.

    Args:
        probe: URL probe every validator sends its requests through

    Returns:
        Mapping of ecosystem to validator
    """
    return {ecosystem: validator_class(probe) for ecosystem, validator_class in VALIDATOR_CLASSES.items()}
