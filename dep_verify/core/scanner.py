"""Scan orchestration: discovery, extraction, deduplication and validation."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..registries.http import RegistryProbe
from ..registries.validators import PackageValidator, UrlProbe, create_validators
from ..utils.logging import get_logger
from ..utils.path_utils import PathFilter, relative_posix_path
from .config import Configuration
from .parsers import ParserRegistry, create_default_registry
from .parsers.base import Dependency, DependencyType, PathLike


class ValidationStatus(Enum):
    """Outcome of validating one dependency."""

    VALID = "Valid"
    NOT_FOUND = "NotFound"
    BLACKLISTED = "Blacklisted"
    WHITELISTED = "Whitelisted"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


PROBLEM_STATUSES = frozenset({ValidationStatus.NOT_FOUND, ValidationStatus.BLACKLISTED})

STATUS_SYMBOLS = {
    ValidationStatus.VALID: "[OK]",
    ValidationStatus.NOT_FOUND: "[NOT FOUND]",
    ValidationStatus.BLACKLISTED: "[BLACKLISTED]",
    ValidationStatus.WHITELISTED: "[WHITELIST]",
    ValidationStatus.ERROR: "[ERROR]",
}


@dataclass(frozen=True)
class ValidationResult:
    """Validation outcome for a single unique dependency."""

    dependency: Dependency
    status: ValidationStatus
    message: Optional[str] = None

    @property
    def has_problem(self) -> bool:
        """True for packages missing from the registry or blacklisted."""
        return self.status in PROBLEM_STATUSES


@dataclass(frozen=True)
class ScanResult:
    """Aggregate result of one scan.

    Counts are derived from :attr:`validation_results` on access.
    """

    scanned_path: str
    scan_time: datetime = field(default_factory=datetime.now)
    all_dependencies: Tuple[Dependency, ...] = ()
    unique_dependencies: Tuple[Dependency, ...] = ()
    validation_results: Tuple[ValidationResult, ...] = ()
    scanned_files: Tuple[Path, ...] = ()

    def count(self, status: ValidationStatus) -> int:
        """Number of results with the given status."""
        return sum(1 for result in self.validation_results if result.status == status)

    @property
    def has_problems(self) -> bool:
        return any(result.has_problem for result in self.validation_results)

    @property
    def problems(self) -> List[ValidationResult]:
        return [result for result in self.validation_results if result.has_problem]

    @property
    def valid_count(self) -> int:
        return self.count(ValidationStatus.VALID)

    @property
    def not_found_count(self) -> int:
        return self.count(ValidationStatus.NOT_FOUND)

    @property
    def blacklisted_count(self) -> int:
        return self.count(ValidationStatus.BLACKLISTED)

    @property
    def whitelisted_count(self) -> int:
        return self.count(ValidationStatus.WHITELISTED)

    @property
    def error_count(self) -> int:
        return self.count(ValidationStatus.ERROR)


def deduplicate_dependencies(dependencies: Iterable[Dependency]) -> List[Dependency]:
    """Keep the first declaration of every dependency key.

    Args:
        dependencies: Dependencies in discovery order

    Returns:
        Unique dependencies, order preserved
    """
    unique: Dict[str, Dependency] = {}
    for dependency in dependencies:
        unique.setdefault(dependency.key, dependency)
    return list(unique.values())


class DependencyScanner:
    """Scans a project tree and validates every declared dependency.

    Registry lookups run one at a time through a single probe, so its rate
    limiter is the only throttle. Validators and probe can be injected; by
    default a :class:`RegistryProbe` is opened for the validation phase.
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        parser_registry: Optional[ParserRegistry] = None,
        validators: Optional[Dict[DependencyType, PackageValidator]] = None,
        probe: Optional[UrlProbe] = None
    ) -> None:
        """Initialize the dependency scanner.

        Args:
            config: Whitelist, blacklist and exclude patterns
            parser_registry: Manifest parsers (all six ecosystems by default)
            validators: Validators per ecosystem (built around ``probe`` if None)
            probe: URL probe used when ``validators`` is None
        """
        self.config = config or Configuration()
        self.parser_registry = parser_registry or create_default_registry()
        self.logger = get_logger("DependencyScanner")
        self._path_filter = PathFilter(self.config.exclude)
        self._validators = validators
        if self._validators is None and probe is not None:
            self._validators = create_validators(probe)

    async def scan(self, directory: PathLike) -> ScanResult:
        """Scan a directory for dependencies and validate them.

        Args:
            directory: Project root

        Returns:
            Frozen scan result
        """
        root = Path(directory)
        scanned_path = str(root.resolve())
        scan_time = datetime.now()

        self.logger.info(f"Scanning directory: {scanned_path}")

        scanned_files, all_dependencies = self.collect_dependencies(root)
        self.logger.info(f"Total dependencies: {len(all_dependencies)}")

        unique_dependencies = deduplicate_dependencies(all_dependencies)
        self.logger.info(f"Unique dependencies: {len(unique_dependencies)}")

        validation_results = await self.validate_dependencies(unique_dependencies)

        return ScanResult(
            scanned_path=scanned_path,
            scan_time=scan_time,
            all_dependencies=tuple(all_dependencies),
            unique_dependencies=tuple(unique_dependencies),
            validation_results=tuple(validation_results),
            scanned_files=tuple(scanned_files),
        )

    def collect_dependencies(self, root: Path) -> Tuple[List[Path], List[Dependency]]:
        """Discover manifests and extract their dependencies.

        Args:
            root: Project root

        Returns:
            Scanned files and every extracted dependency (duplicates included)
        """
        scanned_files: List[Path] = []
        all_dependencies: List[Dependency] = []

        for parser in self.parser_registry:
            for file_path in parser.find_files(root):
                if self._is_excluded(file_path, root):
                    continue

                scanned_files.append(file_path)
                self.logger.info(f"Found: {relative_posix_path(file_path, root)}")
                all_dependencies.extend(parser.parse(file_path))

        return scanned_files, all_dependencies

    async def validate_dependencies(self, dependencies: List[Dependency]) -> List[ValidationResult]:
        """Classify dependencies sequentially, in the given order.

        Args:
            dependencies: Unique dependencies

        Returns:
            One validation result per dependency
        """
        if not dependencies:
            return []

        self.logger.info("Validating dependencies...")

        if self._validators is not None or not any(self._needs_lookup(dep) for dep in dependencies):
            return await self._validate_all(dependencies, self._validators or {})

        async with RegistryProbe() as probe:
            return await self._validate_all(dependencies, create_validators(probe))

    async def validate_dependency(
        self,
        dependency: Dependency,
        validators: Dict[DependencyType, PackageValidator]
    ) -> ValidationResult:
        """Apply override policy, then ask the ecosystem's validator.

        Args:
            dependency: Dependency to classify
            validators: Validators per ecosystem

        Returns:
            Validation result
        """
        # Blacklist takes priority over whitelist
        if self.config.is_blacklisted(dependency.name):
            return ValidationResult(dependency, ValidationStatus.BLACKLISTED, "Package is on the blacklist")

        if self.config.is_whitelisted(dependency.name):
            return ValidationResult(
                dependency, ValidationStatus.WHITELISTED, "Package is on the whitelist (skipped)"
            )

        validator = validators.get(dependency.ecosystem)
        if validator is None:
            return ValidationResult(
                dependency, ValidationStatus.ERROR, f"No validator for {dependency.ecosystem}"
            )

        exists = await validator.validate(dependency.name)

        if exists is True:
            return ValidationResult(dependency, ValidationStatus.VALID, "Package exists in registry")
        if exists is False:
            return ValidationResult(
                dependency, ValidationStatus.NOT_FOUND, "WARNING: Package does not exist in registry!"
            )
        return ValidationResult(dependency, ValidationStatus.ERROR, "Error during API request")

    async def _validate_all(
        self,
        dependencies: List[Dependency],
        validators: Dict[DependencyType, PackageValidator]
    ) -> List[ValidationResult]:
        results: List[ValidationResult] = []
        for dependency in dependencies:
            result = await self.validate_dependency(dependency, validators)
            results.append(result)
            self.logger.info(f"  {STATUS_SYMBOLS[result.status]} {dependency.ecosystem}: {dependency.name}")
        return results

    def _needs_lookup(self, dependency: Dependency) -> bool:
        return not (
            self.config.is_blacklisted(dependency.name) or self.config.is_whitelisted(dependency.name)
        )

    def _is_excluded(self, file_path: Path, root: Path) -> bool:
        relative_path = relative_posix_path(file_path, root)
        pattern = self._path_filter.matching_pattern(relative_path)
        if pattern is not None:
            self.logger.info(f"Excluded: {relative_path} (pattern: {pattern})")
            return True
        return False
