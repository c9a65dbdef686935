"""Shared fixtures for building node project trees on disk."""

import pytest

from helpers import write_json


@pytest.fixture
def make_project():
    """Create package.json and node_modules/<pkg>/package.json under a directory."""

    def _make(root, manifest=None, installed=None):
        write_json(root / "package.json", manifest if manifest is not None else {"name": "app"})
        if installed is not None:
            (root / "node_modules").mkdir(parents=True, exist_ok=True)
            for name, pkg_manifest in installed.items():
                write_json(root / "node_modules" / name / "package.json", pkg_manifest)
        return root

    return _make
