"""Workspace discovery for pnpm, npm and yarn monorepos."""

from __future__ import annotations

import glob
import logging
import os
from typing import Any, List

import yaml

from constants import Constants
from manifest import load_manifest

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")


def _string_items(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def load_pnpm_workspace(path: str) -> List[str]:
    """Return the ``packages`` patterns listed in a pnpm-workspace.yaml.

    Args:
        path: Path to pnpm-workspace.yaml.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.

    Returns:
        list: Package glob patterns in file order.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        return []
    patterns = []
    for pattern in _string_items(data.get("packages")):
        if pattern.startswith("!"):
            logger.debug("Skipping pnpm exclusion pattern %s", pattern)
            continue
        patterns.append(pattern)
    return patterns


def _manifest_workspaces(path: str) -> List[str]:
    workspaces = load_manifest(path).data.get(Constants.WORKSPACES)
    # Yarn classic also accepts {"packages": [...], "nohoist": [...]}
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    return _string_items(workspaces)


def find_workspace_directories(root: str) -> List[str]:
    """Collect workspace patterns from pnpm-workspace.yaml and package.json.

    Each pattern is resolved against ``root`` but not glob-expanded, so
    ``packages/*`` comes back as ``<root>/packages/*``.

    Args:
        root: Monorepo root directory.

    Returns:
        list: Absolute workspace paths or patterns, pnpm entries first.
    """
    found = []

    pnpm_path = os.path.join(root, Constants.PNPM_WORKSPACE_FILE)
    if os.path.isfile(pnpm_path):
        for pattern in load_pnpm_workspace(pnpm_path):
            found.append(os.path.abspath(os.path.join(root, pattern)))

    package_json_path = os.path.join(root, Constants.PACKAGE_JSON_FILE)
    if os.path.isfile(package_json_path):
        for pattern in _manifest_workspaces(package_json_path):
            found.append(os.path.abspath(os.path.join(root, pattern)))

    logger.debug("Workspace patterns under %s: %s", root, found)
    return found


def _is_package_dir(path: str, base: str) -> bool:
    parts = os.path.relpath(path, base).split(os.sep)
    return (
        Constants.NODE_MODULES_DIR not in parts
        and os.path.isfile(os.path.join(path, Constants.PACKAGE_JSON_FILE))
    )


def expand_workspace_patterns(patterns: List[str]) -> List[str]:
    """Expand glob patterns to the package directories they match.

    ``**`` matches any depth. Only directories holding a package.json count,
    and nothing inside node_modules does. Plain paths are kept as given,
    whether or not they exist. Patterns that match nothing are dropped with a
    warning. Duplicates keep their first position.
    """
    expanded = []
    for pattern in patterns:
        if any(ch in pattern for ch in _GLOB_CHARS):
            first_magic = min(pattern.index(ch) for ch in _GLOB_CHARS if ch in pattern)
            base = os.path.dirname(pattern[:first_magic]) or os.curdir
            matches = sorted(
                os.path.normpath(p)
                for p in glob.glob(pattern, recursive=True)
                if _is_package_dir(p, base)
            )
            if not matches:
                logger.warning("Workspace pattern %s matched no directories.", pattern)
            expanded.extend(matches)
        else:
            expanded.append(pattern)
    return list(dict.fromkeys(expanded))
