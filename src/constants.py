"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1


class PackageManagers(Enum):
    """Package managers the installer can drive.

    Args:
        Enum (string): Executable name of the package manager.
    """

    YARN = "yarn"
    NPM = "npm"
    PNPM = "pnpm"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    NODE_MODULES_DIR = "node_modules"
    PNPM_WORKSPACE_FILE = "pnpm-workspace.yaml"
    YARN_LOCK_FILE = "yarn.lock"
    PACKAGE_LOCK_FILE = "package-lock.json"
    PNPM_LOCK_FILE = "pnpm-lock.yaml"
    # Detection order matters: first lock file found wins
    LOCKFILE_MANAGERS = [
        (YARN_LOCK_FILE, PackageManagers.YARN),
        (PACKAGE_LOCK_FILE, PackageManagers.NPM),
        (PNPM_LOCK_FILE, PackageManagers.PNPM),
    ]
    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    WORKSPACES = "workspaces"
    LATEST = "latest"
    INSTALL_FLAG = "-ws"
    MANIFEST_FLAG = "-w"
    CONFIG_FILE = ".peercheck.yml"
    CONFIG_SECTION = "peercheck"
    ENV_LOG_LEVEL = "PEERCHECK_LOG_LEVEL"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
