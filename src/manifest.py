"""Load and save package.json manifests."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from constants import Constants
from errors import ManifestError
from reconcile import caret_range

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    """A parsed package.json.

    ``data`` holds the whole document so fields this tool does not touch are
    written back unchanged.
    """

    data: Dict[str, Any] = field(default_factory=dict)

    def _section(self, key: str) -> Dict[str, str]:
        section = self.data.get(key)
        return section if isinstance(section, dict) else {}

    @property
    def dependencies(self) -> Dict[str, str]:
        """Runtime dependency mapping; empty when absent."""
        return self._section(Constants.DEPENDENCIES)

    @property
    def dev_dependencies(self) -> Dict[str, str]:
        """Development dependency mapping; empty when absent."""
        return self._section(Constants.DEV_DEPENDENCIES)

    @property
    def peer_dependencies(self) -> Dict[str, str]:
        return self._section(Constants.PEER_DEPENDENCIES)

    def add_dependencies(self, missing: Mapping[str, str]) -> None:
        """Record each missing peer as a caret-prefixed runtime dependency."""
        deps = self.data.get(Constants.DEPENDENCIES)
        if not isinstance(deps, dict):
            deps = {}
            self.data[Constants.DEPENDENCIES] = deps
        for name, version in missing.items():
            deps[name] = caret_range(version)


def load_manifest(path: str) -> Manifest:
    """Read a UTF-8 package.json.

    Args:
        path: Path to the manifest file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ManifestError: If the JSON document is not an object.

    Returns:
        Manifest: The parsed manifest.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ManifestError(f"{path} does not contain a JSON object.")
    return Manifest(data)


def save_manifest(manifest: Manifest, path: str) -> None:
    """Write the manifest back as 2-space indented JSON."""
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(manifest.data, fh, ensure_ascii=False, indent=2)
        fh.write("\n")
    logger.info("Updated %s", path)
