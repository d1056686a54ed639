"""
Version reporting for `serialscope --version` and `serialscope version`.

Hardware reports are only useful with the tool build and the platform that
produced them, so the version record carries both.
"""

import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version

logger = logging.getLogger(__name__)

DISTRIBUTION = "serialscope"

# git runs against the checkout serialscope is imported from, not the caller's cwd.
_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


@dataclass(frozen=True)
class VersionInfo:
    version: str
    commit: str | None
    """Short hash when running from a git checkout."""
    python: str
    os: str

    def __str__(self) -> str:
        build = self.version if self.commit is None else f"{self.version}+{self.commit}"
        return f"serialscope {build} (Python {self.python}, {self.os})"


def get_version() -> str:
    """Installed distribution version, `dev` for a source tree that was never installed."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "dev"


def get_commit_hash() -> str | None:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=_PACKAGE_DIR,
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Cannot run git in %s: %s", _PACKAGE_DIR, e)
        return None
    if result.returncode != 0:
        logger.debug("%s is not a git checkout.", _PACKAGE_DIR)
        return None
    return result.stdout.strip() or None


def get_version_info() -> VersionInfo:
    return VersionInfo(
        version=get_version(),
        commit=get_commit_hash(),
        python=platform.python_version(),
        os=f"{platform.system()} {platform.release()}".strip() or "unknown",
    )
