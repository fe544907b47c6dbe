"""
Release branch resolution.

Release branches are remote branches named ``<prefix><xx.yy.z>``. They
are ordered by recency rather than by version, so the branch that was
cut most recently is treated as the current release and the one cut
before it as the previous release.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from release_changelog.config.loader import ChangelogConfig
from release_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ReleaseBranchError(Exception):
    """Raised when the current or previous release branch cannot be resolved."""

    pass


def release_pattern(config: ChangelogConfig) -> re.Pattern[str]:
    return re.compile(r"^" + re.escape(config.release_branch_prefix) + r"\d{2}\.\d{1,2}\.\d")


def is_release_branch(branch: Optional[str], config: ChangelogConfig) -> bool:
    return bool(branch) and release_pattern(config).match(branch) is not None


def list_release_branches(client: GitClient, config: ChangelogConfig) -> List[str]:
    """Return the remote release branches, newest first.

    Raises
    ------
    ReleaseBranchError
        If no branch matching the release naming pattern exists.
    """
    logger.debug("Retrieving release branches.")
    branches = [
        branch
        for branch in client.list_remote_branches(config.release_branch_prefix + "*")
        if is_release_branch(branch, config)
    ]
    if not branches:
        raise ReleaseBranchError(
            f"No release branches matching '{config.release_branch_prefix}xx.yy.z' were found."
        )
    logger.debug("Release branches: %s", branches)
    return branches


def resolve_current_branch(
    branches: List[str],
    config: ChangelogConfig,
    override: Optional[str] = None,
) -> str:
    """Return the release branch to generate the changelog for.

    Parameters
    ----------
    branches : List[str]
        Release branches ordered newest first.
    override : Optional[str]
        Explicit release version (e.g. ``17.10.0``) to use instead of the
        latest branch.

    Raises
    ------
    ReleaseBranchError
        If the resolved branch does not follow the release naming pattern.
    """
    if override:
        branch = config.release_branch_prefix + override
    else:
        branch = branches[0] if branches else ""
    if not is_release_branch(branch, config):
        raise ReleaseBranchError(f"Invalid release '{branch}'. Expected format [xx.yy.z].")
    return branch


def resolve_previous_branch(current: str, branches: List[str]) -> str:
    """Return the release branch cut immediately before ``current``.

    Raises
    ------
    ReleaseBranchError
        If ``current`` is unknown or is the oldest release branch.
    """
    try:
        index = branches.index(current)
    except ValueError:
        index = -1
    if index == -1 or index + 1 >= len(branches):
        raise ReleaseBranchError("Unable to retrieve previous release.")
    return branches[index + 1]


def release_version(branch: str, config: ChangelogConfig) -> str:
    """Strip the release prefix, e.g. ``origin/release/v17.10.0`` -> ``17.10.0``."""
    if branch.startswith(config.release_branch_prefix):
        return branch[len(config.release_branch_prefix):]
    return branch


def changelog_branch_name(branch: str, config: ChangelogConfig) -> str:
    return config.changelog_branch_prefix + release_version(branch, config)
