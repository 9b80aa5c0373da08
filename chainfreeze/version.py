"""Version string of the package, taken from git where available."""

import subprocess

PACKAGE_VERSION = "0.3.0"

_GIT_DESCRIBE = ["git", "describe", "--tags", "--always"]


def get_git_description() -> str:
    """Return the output of ``git describe --tags --always``.

    Raises OSError when git cannot be started or reports a failure.
    """
    result = subprocess.run(_GIT_DESCRIBE, capture_output=True, check=False)
    if result.returncode != 0:
        raise OSError("Git command failed")
    return result.stdout.decode("utf-8").strip()


def get_version() -> str:
    """Return the git description, or the package version if git is unavailable."""
    try:
        return get_git_description()
    except OSError:
        return PACKAGE_VERSION