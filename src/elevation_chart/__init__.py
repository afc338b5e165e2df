"""Elevation Chart - interactive elevation-vs-distance charts for routes."""

import subprocess
from functools import lru_cache
from pathlib import Path

__version_date__ = "2026-10-18"

PACKAGE_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=1)
def get_git_hash() -> str:
    """Short commit hash of the checkout this package runs from, or 'unknown'.

    Looked up once per process, relative to the package directory rather
    than the server's working directory.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
            cwd=PACKAGE_DIR,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"
