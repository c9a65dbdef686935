"""Test helpers shared across modules."""

import json


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class RecordingInstaller:
    """Installer double that records calls instead of running a process."""

    def __init__(self, error=None):
        self.calls = []
        self._error = error

    def install(self, directory, missing, extra_args=()):
        self.calls.append((directory, dict(missing), list(extra_args)))
        if self._error is not None:
            raise self._error
