"""Exceptions raised by peercheck."""


class PeerCheckError(Exception):
    """Base class for peercheck errors."""


class MissingPrerequisiteError(PeerCheckError):
    """A directory or file the check cannot run without is absent.

    Covers a missing node_modules folder, a workspace run with no
    workspaces, and a working directory without a recognised lock file.
    """


class ConfigError(PeerCheckError):
    """The configuration file exists but cannot be parsed."""


class ManifestError(PeerCheckError):
    """A package.json parses as JSON but is not an object."""
