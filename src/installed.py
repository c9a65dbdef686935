"""Enumerate packages installed under node_modules and read their peer requirements."""

from __future__ import annotations

import logging
import os
from typing import List

from constants import Constants
from errors import MissingPrerequisiteError
from manifest import load_manifest
from reconcile import PeerRequirement

logger = logging.getLogger(__name__)


def _has_manifest(path: str) -> bool:
    return os.path.isfile(os.path.join(path, Constants.PACKAGE_JSON_FILE))


def list_installed_packages(directory: str) -> List[str]:
    """List the packages installed in ``<directory>/node_modules``.

    Only entries carrying their own package.json are returned. Scope folders
    (``@types``) are searched one level down and yield ``@scope/name``.

    Args:
        directory: Project directory containing node_modules.

    Raises:
        MissingPrerequisiteError: If node_modules does not exist.

    Returns:
        list: Sorted package names.
    """
    node_modules = os.path.join(directory, Constants.NODE_MODULES_DIR)
    if not os.path.isdir(node_modules):
        raise MissingPrerequisiteError(f"node_modules folder not found in {directory}.")

    packages = []
    for entry in sorted(os.listdir(node_modules)):
        entry_path = os.path.join(node_modules, entry)
        if _has_manifest(entry_path):
            packages.append(entry)
        elif entry.startswith("@") and os.path.isdir(entry_path):
            for scoped in sorted(os.listdir(entry_path)):
                if _has_manifest(os.path.join(entry_path, scoped)):
                    packages.append(f"{entry}/{scoped}")
    logger.debug("Found %d installed packages in %s", len(packages), node_modules)
    return packages


def read_peer_requirements(directory: str, package: str) -> List[PeerRequirement]:
    """Return the peerDependencies declared by one installed package."""
    path = os.path.join(directory, Constants.NODE_MODULES_DIR, package, Constants.PACKAGE_JSON_FILE)
    peers = load_manifest(path).peer_dependencies
    return [
        PeerRequirement(name=name, version_range=str(version_range), source=package)
        for name, version_range in peers.items()
    ]
