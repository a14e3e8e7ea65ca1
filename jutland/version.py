"""Build and version information."""

from __future__ import annotations

import platform

VERSION = "main"
GIT_COMMIT = ""
BUILD_TIME = ""
PYTHON_VERSION = platform.python_version()


def get_version() -> str:
    """Multi-line summary of the version, commit, build time and interpreter."""
    return (
        f"\nVersion  : {VERSION}"
        f"\nGitCommit: {GIT_COMMIT}"
        f"\nBuildTime: {BUILD_TIME}"
        f"\nPython   : {PYTHON_VERSION}\n"
    )