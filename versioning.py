"""Centralised version and naming information for stagger.

Single source of truth for the version string shown by the CLI and declared
in pyproject.toml.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


APP_NAME: str = "stagger"
APP_VERSION: str = "0.3.0"
APP_DESCRIPTION: str = "Staggered multi-property animation sequencing driven by one shared progress value."


@dataclass(frozen=True)
class VersionInfo:
    major: int
    minor: int
    patch: int

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


def parse_version(version_str: str = APP_VERSION) -> VersionInfo:
    """Parse a ``MAJOR.MINOR.PATCH`` version string.

    Missing components default to 0; anything unparsable yields ``0.0.0``.
    """
    try:
        parts = [int(p) for p in str(version_str).split(".")[:3]]
    except ValueError:
        return VersionInfo(0, 0, 0)
    while len(parts) < 3:
        parts.append(0)
    return VersionInfo(parts[0], parts[1], parts[2])


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "VersionInfo",
    "parse_version",
]
