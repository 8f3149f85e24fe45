"""Core parsing, configuration and scanning logic for DepVerify."""

from .parsers import DependencyParser, Dependency, DependencyType
from .config import Configuration, load_configuration, create_example_config
from .scanner import DependencyScanner, ScanResult, ValidationResult, ValidationStatus

__all__ = [
    "DependencyParser",
    "Dependency",
    "DependencyType",
    "Configuration",
    "load_configuration",
    "create_example_config",
    "DependencyScanner",
    "ScanResult",
    "ValidationResult",
    "ValidationStatus",
]
