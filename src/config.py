"""Optional YAML configuration file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants, PackageManagers
from errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class PeerCheckConfig:
    """Settings read from the config file."""

    package_manager: Optional[PackageManagers] = None
    ignore: List[str] = field(default_factory=list)
    extra_args: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PeerCheckConfig":
        manager = data.get("package_manager")
        if manager is not None:
            try:
                manager = PackageManagers(str(manager).lower())
            except ValueError as e:
                raise ConfigError(
                    f"Unsupported package_manager '{manager}'. "
                    f"Expected one of: {', '.join(m.value for m in PackageManagers)}"
                ) from e
        return cls(
            package_manager=manager,
            ignore=[str(x) for x in data.get("ignore") or []],
            extra_args=[str(x) for x in data.get("extra_args") or []],
        )


def load_config(config_path: Optional[str], cwd: str) -> PeerCheckConfig:
    """Load settings from ``config_path`` or ``<cwd>/.peercheck.yml``.

    A ``peercheck:`` section is used when present, otherwise the whole
    document. An explicitly named file that does not exist only produces a
    warning.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    if not config_path:
        default_path = os.path.join(cwd, Constants.CONFIG_FILE)
        if not os.path.isfile(default_path):
            return PeerCheckConfig()
        config_path = default_path
    elif not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return PeerCheckConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        return PeerCheckConfig()
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        return PeerCheckConfig()
    logger.debug("Loaded config from %s", config_path)
    return PeerCheckConfig.from_dict(section)
