"""DepVerify - A CLI tool that checks project dependencies exist in their public registries."""

__version__ = "0.1.0"
__author__ = "DepVerify Team"

from .core.config import Configuration, load_configuration
from .core.parsers import DependencyParser, Dependency, DependencyType
from .core.scanner import DependencyScanner, ScanResult, ValidationResult, ValidationStatus
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "Configuration",
    "load_configuration",
    "DependencyParser",
    "Dependency",
    "DependencyType",
    "DependencyScanner",
    "ScanResult",
    "ValidationResult",
    "ValidationStatus",
    "ConsoleFormatter",
    "JSONFormatter",
]
