"""
End-to-end changelog text generation.

Combines commit extraction, parsing and rendering into the single call
used by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

from release_changelog.changelog.parser import parse_commits
from release_changelog.changelog.renderer import group_by_package, read_changelog, render
from release_changelog.config.loader import ChangelogConfig
from release_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def get_changelog_text(
    client: GitClient,
    current_branch: str,
    previous_branch: str,
    config: ChangelogConfig,
    changelog_path: Path,
) -> str:
    """Build the changelog section for commits new in ``current_branch``.

    Parameters
    ----------
    client : GitClient
        Client for the repository holding both release branches.
    current_branch, previous_branch : str
        Release branches to compare.
    changelog_path : Path
        Absolute path of the changelog, used for deduplication and to
        decide between a new release header and an addendum marker.

    Returns
    -------
    str
        Markdown to prepend to the changelog, or ``""`` if every commit
        is already recorded or none maps to a package.
    """
    changelog_text = read_changelog(changelog_path)
    commits = client.get_unique_commits(current_branch, previous_branch)
    logger.debug("Commits: %s", commits)
    records = parse_commits(commits, client, config, changelog_text)
    groups = group_by_package(records, config)
    return render(current_branch, groups, config, changelog_text)
