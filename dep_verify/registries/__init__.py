"""Package registry clients for DepVerify."""

from .http import RateLimiter, RegistryProbe
from .validators import (
    PackageValidator,
    NpmValidator,
    NuGetValidator,
    PyPiValidator,
    CratesValidator,
    MavenValidator,
    GradleValidator,
    VALIDATOR_CLASSES,
    create_validators,
)

__all__ = [
    "RateLimiter",
    "RegistryProbe",
    "PackageValidator",
    "NpmValidator",
    "NuGetValidator",
    "PyPiValidator",
    "CratesValidator",
    "MavenValidator",
    "GradleValidator",
    "VALIDATOR_CLASSES",
    "create_validators",
]
