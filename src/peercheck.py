"""peercheck - find peer dependencies missing from a project's package.json

Collects the peerDependencies of every package installed under node_modules,
compares them with the root manifest and either installs the missing ones
(check-peer-deps) or records them in package.json (write-peer-deps).

    Returns:
        int: Exit code
"""
import logging
import os
import subprocess
import sys
from typing import Dict, Iterable, Optional, Sequence

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import load_config
from constants import Constants, ExitCodes
from errors import ConfigError, MissingPrerequisiteError
from installed import list_installed_packages, read_peer_requirements
from installer import Installer, SubprocessInstaller
from manifest import load_manifest, save_manifest
from reconcile import collect_missing, format_specifier
from workspaces import expand_workspace_patterns, find_workspace_directories

logger = logging.getLogger(__name__)


def _iter_peer_requirements(directory: str, packages: Iterable[str]):
    for package in packages:
        yield from read_peer_requirements(directory, package)


def check_peer_dependencies(
    directory: str,
    *,
    installer: Optional[Installer] = None,
    extra_args: Sequence[str] = (),
    write_manifest: bool = False,
    ignore: Iterable[str] = (),
) -> Dict[str, str]:
    """Check one project directory for missing peer dependencies.

    Args:
        directory: Project directory holding package.json and node_modules.
        installer: Installer used when ``write_manifest`` is False.
        extra_args: Extra arguments for the package manager.
        write_manifest: Record missing peers in package.json instead of installing.
        ignore: Peer names never reported as missing.

    Raises:
        MissingPrerequisiteError: If node_modules or the lock file is missing.
        ManifestError: If package.json is not a JSON object.

    Returns:
        dict: Missing peer name -> selected version.
    """
    logger.info("Checking peer dependencies in %s...", directory)

    manifest_path = os.path.join(directory, Constants.PACKAGE_JSON_FILE)
    manifest = load_manifest(manifest_path)
    packages = list_installed_packages(directory)
    missing = collect_missing(_iter_peer_requirements(directory, packages), manifest, ignore)

    if is_debug_enabled(logger):
        logger.debug(
            "Peer check finished",
            extra=extra_context(
                component="cli",
                action="check_peer_dependencies",
                installed=len(packages),
                missing=len(missing),
            ),
        )

    if not missing:
        logger.info("All peer dependencies are already satisfied.")
        return missing

    logger.info("Missing peer dependencies found:")
    for name, version in missing.items():
        logger.info("  %s", format_specifier(name, version))

    if write_manifest:
        manifest.add_dependencies(missing)
        save_manifest(manifest, manifest_path)
        return missing

    if installer is None:
        installer = SubprocessInstaller()
    try:
        installer.install(directory, missing, extra_args)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.error("Failed to install dependencies: %s", e)
    return missing


def run(
    argv: Sequence[str],
    *,
    write_manifest: bool,
    workspace_flag: str,
    prog: str,
    cwd: Optional[str] = None,
    installer: Optional[Installer] = None,
) -> int:
    """Run one invocation of either console script and return its exit code."""
    args = parse_args(argv, workspace_flag, prog=prog)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)
    cwd = cwd or os.getcwd()

    try:
        config = load_config(args.CONFIG, cwd)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    extra_args = config.extra_args + args.EXTRA_ARGS
    if write_manifest:
        if extra_args:
            logger.warning("Ignoring package manager arguments: %s", " ".join(extra_args))
    elif installer is None:
        installer = SubprocessInstaller(cwd, config.package_manager)

    def _check(directory: str) -> None:
        check_peer_dependencies(
            directory,
            installer=installer,
            extra_args=extra_args,
            write_manifest=write_manifest,
            ignore=config.ignore,
        )

    try:
        if args.WORKSPACE:
            logger.info("Workspace mode enabled. Checking subdirectories...")
            directories = expand_workspace_patterns(find_workspace_directories(cwd))
            if not directories:
                raise MissingPrerequisiteError("No workspaces found.")
            for directory in directories:
                _check(directory)
        else:
            _check(cwd)
    except MissingPrerequisiteError as e:
        logger.error("Error: %s", e)
        return ExitCodes.FILE_ERROR.value

    return ExitCodes.SUCCESS.value


def main():
    """Entry point of check-peer-deps: install missing peers."""
    sys.exit(run(
        sys.argv[1:],
        write_manifest=False,
        workspace_flag=Constants.INSTALL_FLAG,
        prog="check-peer-deps",
    ))


def main_write():
    """Entry point of write-peer-deps: add missing peers to package.json."""
    sys.exit(run(
        sys.argv[1:],
        write_manifest=True,
        workspace_flag=Constants.MANIFEST_FLAG,
        prog="write-peer-deps",
    ))


if __name__ == "__main__":
    main()
