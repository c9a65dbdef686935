"""Package manager detection and install invocation."""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from constants import Constants, PackageManagers
from errors import MissingPrerequisiteError
from reconcile import format_specifier

logger = logging.getLogger(__name__)

_ADD_VERBS = {
    PackageManagers.NPM: "install",
    PackageManagers.YARN: "add",
    PackageManagers.PNPM: "add",
}


def detect_package_manager(cwd: str) -> PackageManagers:
    """Detect the package manager from the lock file in ``cwd``.

    yarn.lock wins over package-lock.json, which wins over pnpm-lock.yaml.

    Raises:
        MissingPrerequisiteError: If none of the lock files exist.
    """
    for lock_file, manager in Constants.LOCKFILE_MANAGERS:
        if os.path.isfile(os.path.join(cwd, lock_file)):
            logger.debug("Found %s, using %s", lock_file, manager.value)
            return manager
    raise MissingPrerequisiteError(
        "No package manager lock file found. Please ensure you are using npm, yarn, or pnpm."
    )


def build_install_command(
    manager: PackageManagers,
    missing: Mapping[str, str],
    extra_args: Sequence[str] = (),
) -> str:
    """Build ``<manager> <verb> name@^version ... <extra args>`` as one string."""
    parts = [manager.value, _ADD_VERBS[manager]]
    parts.extend(format_specifier(name, version) for name, version in missing.items())
    parts.extend(extra_args)
    return " ".join(parts)


class Installer(ABC):
    """Installs a set of missing packages into a project directory."""

    @abstractmethod
    def install(self, directory: str, missing: Mapping[str, str], extra_args: Sequence[str] = ()) -> None:
        """Install ``missing`` (name -> version) into ``directory``.

        Implementations raise on failure; the caller decides whether to go on.
        """


class SubprocessInstaller(Installer):
    """Runs the detected package manager as a child process with inherited stdio."""

    def __init__(self, cwd: Optional[str] = None, manager: Optional[PackageManagers] = None):
        self._cwd = cwd or os.getcwd()
        self._manager = manager

    @property
    def manager(self) -> PackageManagers:
        if self._manager is None:
            self._manager = detect_package_manager(self._cwd)
        return self._manager

    def install(self, directory: str, missing: Mapping[str, str], extra_args: Sequence[str] = ()) -> None:
        manager = self.manager
        logger.info("Installing missing peer dependencies using %s...", manager.value)
        command = build_install_command(manager, missing, extra_args)
        logger.info("Running command: %s", command)
        subprocess.run(command, shell=True, cwd=directory, check=True)
        logger.info("Installed missing peer dependencies successfully.")
