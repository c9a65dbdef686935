"""Peer dependency version reconciliation.

Turns the free-form version ranges that installed packages declare in
``peerDependencies`` into one specifier per missing peer. Ranges are often
not plain semver (``workspace:*``, ``~1.2``, ``<3``), so selection falls back
to ``latest`` instead of failing.
"""

from __future__ import annotations

import functools
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)

_VALID_TOKEN = re.compile(r"(\d+\.)?(\d+\.)?(\*|\d+)(-[a-zA-Z0-9.-]+)?")
_NON_NUMERIC = re.compile(r"[^0-9.]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class PeerRequirement:
    """A peer range declared by one installed package."""

    name: str
    version_range: str
    source: str = ""


def normalize(range_string: str) -> str:
    """Strip a leading ``>=``, all whitespace and every caret."""
    if range_string.startswith(">="):
        range_string = range_string[2:]
    return _WHITESPACE.sub("", range_string).replace("^", "")


def is_valid_version_token(token: str) -> bool:
    """Return True for ``major[.minor[.patch]]`` tokens with an optional ``-prerelease``.

    Each numeric component may also be ``*``.
    """
    return bool(token) and _VALID_TOKEN.fullmatch(token) is not None


def _components(token: str) -> List[Tuple[int, str]]:
    # (length, digits) without leading zeros orders like int() for any length
    keys = []
    for part in _NON_NUMERIC.sub("", token).split("."):
        digits = part.lstrip("0")
        keys.append((len(digits), digits))
    return keys


def _compare_tokens(a: str, b: str) -> int:
    a_parts = _components(a)
    b_parts = _components(b)
    zero = (0, "")
    for i in range(max(len(a_parts), len(b_parts))):
        a_ver = a_parts[i] if i < len(a_parts) else zero
        b_ver = b_parts[i] if i < len(b_parts) else zero
        if a_ver != b_ver:
            return -1 if a_ver < b_ver else 1
    return 0


def select_version(range_string: str) -> str:
    """Pick the highest plain version mentioned in a range.

    Alternatives joined by ``||`` are normalized one by one; anything that is
    not a plain version token is discarded. Components are compared as
    integers so ``10.0.0`` ranks above ``9.0.0``.

    Args:
        range_string: Range as declared in ``peerDependencies``.

    Returns:
        str: The chosen version token, or ``latest`` when none is usable.
    """
    alternatives = [normalize(alt.strip()) for alt in normalize(range_string).split("||")]
    valid = [alt for alt in alternatives if is_valid_version_token(alt)]
    if not valid:
        return Constants.LATEST
    # Stable ascending sort: on ties the later alternative wins.
    return sorted(valid, key=functools.cmp_to_key(_compare_tokens))[-1]


def caret_range(version: str) -> str:
    """Caret range for a selected version; ``latest`` is left bare."""
    if version == Constants.LATEST:
        return version
    return f"^{version}"


def format_specifier(name: str, version: str) -> str:
    """Return ``name@^version`` as passed to a package manager."""
    return f"{name}@{caret_range(version)}"


def is_satisfied(name: str, manifest) -> bool:
    """Return True if ``name`` is declared as a runtime or development dependency.

    Only presence counts; the recorded range is not checked.
    """
    return name in manifest.dependencies or name in manifest.dev_dependencies


def collect_missing(
    requirements: Iterable[PeerRequirement],
    manifest,
    ignore: Iterable[str] = (),
) -> Dict[str, str]:
    """Fold peer requirements into the set of peers the manifest lacks.

    Requirements are applied in order and the last one seen for a name wins.
    A warning is logged when a later package replaces a different version
    chosen for an earlier one.

    Args:
        requirements: Peer requirements in enumeration order.
        manifest: Root manifest exposing ``dependencies`` and ``dev_dependencies``.
        ignore: Peer names never reported as missing.

    Returns:
        dict: Mapping of peer name to selected version.
    """
    ignored = set(ignore)
    missing: Dict[str, str] = {}
    chosen_by: Dict[str, str] = {}
    for req in requirements:
        if req.name in ignored or is_satisfied(req.name, manifest):
            continue
        version = select_version(req.version_range)
        previous = missing.get(req.name)
        if previous is not None and previous != version:
            logger.warning(
                "Peer dependency %s: %s (required by %s) replaces %s (required by %s)",
                req.name,
                version,
                req.source or "?",
                previous,
                chosen_by.get(req.name) or "?",
            )
        missing[req.name] = version
        chosen_by[req.name] = req.source
        if is_debug_enabled(logger):
            logger.debug(
                "Missing peer recorded",
                extra=extra_context(
                    component="reconcile",
                    peer=req.name,
                    requested=req.version_range,
                    selected=version,
                    source=req.source or None,
                ),
            )
    return missing
