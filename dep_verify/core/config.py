"""Scanner configuration: whitelist, blacklist and exclude patterns."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils.logging import get_logger

DEFAULT_CONFIG_FILE = "depverify.json"

logger = get_logger("Config")


@dataclass
class Configuration:
    """Override policy for a scan.

    Whitelisted packages skip the registry lookup, blacklisted packages are
    reported as problems; the blacklist wins when a name is on both. Exclude
    patterns are globs over paths relative to the scan root.
    """

    whitelist: List[str] = field(default_factory=list)
    blacklist: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    def is_whitelisted(self, package_name: str) -> bool:
        """Check if a package name is on the whitelist (case-insensitive, exact).

        Args:
            package_name: Package name to check

        Returns:
            True if whitelisted
        """
        return _contains_ignore_case(self.whitelist, package_name)

    def is_blacklisted(self, package_name: str) -> bool:
        """Check if a package name is on the blacklist (case-insensitive, exact).

        Args:
            package_name: Package name to check

        Returns:
            True if blacklisted
        """
        return _contains_ignore_case(self.blacklist, package_name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """Build a configuration from parsed JSON.

        Keys are matched case-insensitively; non-list values are ignored.

        Args:
            data: Parsed configuration object

        Returns:
            Configuration instance
        """
        lowered = {str(key).lower(): value for key, value in data.items()}

        def string_list(key: str) -> List[str]:
            value = lowered.get(key)
            if not isinstance(value, list):
                return []
            return [str(item) for item in value if item is not None]

        return cls(
            whitelist=string_list("whitelist"),
            blacklist=string_list("blacklist"),
            exclude=string_list("exclude"),
        )

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "whitelist": list(self.whitelist),
            "blacklist": list(self.blacklist),
            "exclude": list(self.exclude),
        }


def _contains_ignore_case(names: List[str], package_name: str) -> bool:
    needle = package_name.casefold()
    return any(name.casefold() == needle for name in names)


def load_configuration(config_path: Optional[Path]) -> Configuration:
    """Load configuration from a JSON file.

    A missing, unreadable or malformed file yields the default
    configuration.

    Args:
        config_path: Path to the configuration file, or None

    Returns:
        Loaded or default configuration
    """
    if config_path is None:
        return Configuration()

    config_path = Path(config_path)
    if not config_path.is_file():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return Configuration()

    try:
        with open(config_path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load configuration {config_path}: {e}")
        return Configuration()

    if not isinstance(data, dict):
        logger.warning(f"Configuration {config_path} is not a JSON object, using defaults")
        return Configuration()

    return Configuration.from_dict(data)


def create_example_config(config_path: Path) -> Configuration:
    """Write an example configuration file.

    Args:
        config_path: Destination file

    Returns:
        The configuration that was written
    """
    config = Configuration(
        whitelist=["internal-company-package", "my-private-package"],
        blacklist=["Newtonsoft.Json", "moment"],
        exclude=["test-projects/**", "samples/**"],
    )

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info(f"Example configuration written to {config_path}")
    return config
