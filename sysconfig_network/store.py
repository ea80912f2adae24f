"""Hierarchical key-value configuration store backed by YAML files"""

import os
from typing import Any, Iterable, Mapping

import yaml

from sysconfig_network.exceptions import ConfigStoreError
from sysconfig_network.logger import log


class ConfigStore:
    """Ordered list of data levels, highest priority first.

    Keys are flat strings such as ``network::if::static``; the values found
    under them are whatever the YAML files hold.
    """

    def __init__(self, levels: Iterable[Mapping[str, Any]] | None = None) -> None:
        self.levels: list[Mapping[str, Any]] = list(levels or [])

    @classmethod
    def from_files(cls, paths: Iterable[str]) -> "ConfigStore":
        """Load each YAML file as one level. Missing files are skipped.

        Raises:
         - ConfigStoreError: if a file is unreadable, invalid YAML, or not a mapping
        """
        levels = []
        for path in paths:
            if not os.path.exists(path):
                log.debug("Configuration data file %s does not exist, skipping", path)
                continue
            levels.append(load_data_file(path))
            log.debug("Loaded configuration data file %s", path)
        return cls(levels)

    def lookup(self, key: str, default: Any = None) -> Any:
        """Return the value of the highest priority level holding key."""
        for level in self.levels:
            if key in level:
                return level[key]
        return default

    def lookup_hash(self, key: str) -> dict[str, Any] | None:
        """Merge the mappings stored under key across all levels.

        Entries from higher priority levels win. Returns None when no level
        has the key.

        Raises:
         - ConfigStoreError: if a level holds a non-mapping value for key
        """
        found = False
        merged: dict[str, Any] = {}
        for level in reversed(self.levels):
            if key not in level:
                continue
            value = level[key]
            if value is None:
                found = True
                continue
            if not isinstance(value, Mapping):
                raise ConfigStoreError(
                    f"expected a mapping for {key}, got {type(value).__name__}"
                )
            found = True
            merged.update(value)
        return merged if found else None


def load_data_file(path: str) -> dict[str, Any]:
    """Parse a single YAML data file into a mapping.

    Raises:
     - ConfigStoreError: If the file can't be read or doesn't hold a mapping
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigStoreError(f"Cannot read {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigStoreError(f"Invalid YAML in {path}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigStoreError(f"{path} must contain a mapping at the top level")
    return data
