"""
Parsing and package attribution of release commits.

Each ``git log --oneline`` line is turned into a :class:`CommitRecord`
when it carries both a leading commit hash and a trailing ``(#NNN)``
pull request reference. Commits without a pull request are not part of
the changelog and are skipped without error. The files changed by each
commit decide which sub-packages the entry is filed under.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from release_changelog.changelog.models import CommitRecord
from release_changelog.config.loader import ChangelogConfig
from release_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PR_REGEX = re.compile(r"\(#(\d+)\)\s*$")
COMMIT_REGEX = re.compile(r"^[0-9a-zA-Z]+")

_EXCLUDED_SEGMENTS = ("/images/", "/test/")
_PACKAGES_DIR = "packages/"


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def get_package_name(file_path: str, config: ChangelogConfig) -> Optional[str]:
    """Return the sub-package a changed file belongs to, if any.

    Images and tests never count towards a package. Only directories
    starting with the product prefix, and the docs directory, are
    recognised.
    """
    if not file_path or any(segment in file_path for segment in _EXCLUDED_SEGMENTS):
        return None
    if file_path.startswith(_PACKAGES_DIR):
        file_path = file_path[len(_PACKAGES_DIR):]
    package_name = file_path.split("/")[0]
    if package_name.startswith(config.package_prefix) or package_name == config.docs_package:
        return package_name
    return None


def collapse_packages(packages: Tuple[str, ...], config: ChangelogConfig) -> Tuple[str, ...]:
    """Drop leaf packages when the core package is affected.

    Core changes are cross-cutting, so such a commit is filed under the
    core package only. Docs are always kept.
    """
    if config.core_package not in packages:
        return packages
    return tuple(p for p in packages if p in (config.core_package, config.docs_package))


def get_package_headers(files_changed: Iterable[str], config: ChangelogConfig) -> Tuple[str, ...]:
    names = (get_package_name(path, config) for path in files_changed)
    return collapse_packages(_unique(name for name in names if name), config)


def parse_commit_line(
    line: str,
    client: GitClient,
    config: ChangelogConfig,
) -> Optional[CommitRecord]:
    """Parse a ``<sha> <subject> (#NNN)`` log line into a record.

    Returns
    -------
    Optional[CommitRecord]
        The parsed record, or ``None`` if the line has no commit hash or
        no pull request reference.
    """
    if not line or not line.strip():
        return None
    line = line.strip()
    pr_match = PR_REGEX.search(line)
    commit_match = COMMIT_REGEX.match(line)
    if not pr_match or not commit_match or commit_match.end() > pr_match.start():
        logger.debug("Skipping commit without pull request reference: %s", line)
        return None

    message = line[commit_match.end():pr_match.start()].strip()
    commit_id = commit_match.group(0)
    files_changed = _unique(client.get_files_changed(commit_id))
    record = CommitRecord(
        pr_number=int(pr_match.group(1)),
        commit_id=commit_id,
        message=message,
        files_changed=files_changed,
        packages=get_package_headers(files_changed, config),
    )
    logger.debug("Commit: %s\nCommit record: %s", line, record)
    return record


def filter_existing_pr_entries(
    records: Iterable[CommitRecord],
    changelog_text: str,
) -> List[CommitRecord]:
    """Remove records whose pull request is already in the changelog."""
    filtered: List[CommitRecord] = []
    for record in records:
        if f"PR #{record.pr_number}" in changelog_text:
            logger.debug(
                "Filtered PR number %s. An entry already exists in the changelog.",
                record.pr_number,
            )
            continue
        filtered.append(record)
    return filtered


def parse_commits(
    commits: Iterable[str],
    client: GitClient,
    config: ChangelogConfig,
    changelog_text: str,
) -> List[CommitRecord]:
    """Parse log lines into records not yet present in the changelog."""
    logger.debug("Commit parsing results...")
    records = []
    for line in commits:
        record = parse_commit_line(line, client, config)
        if record is not None:
            records.append(record)
    return filter_existing_pr_entries(records, changelog_text)
