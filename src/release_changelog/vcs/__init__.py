"""
Version control system (VCS) integration.

Contains the Git client used to query release branch history and to
publish the generated changelog.
"""

from .git_client import GitClient, GitError  # noqa: F401
