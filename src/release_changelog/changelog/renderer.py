"""
Markdown rendering of grouped changelog entries.

The rendered section is prepended to the existing changelog. When the
release has no section yet, a header with empty ``Fixed`` and ``Added``
subsections is emitted so that entries can be moved into place by hand.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from release_changelog.changelog.branches import release_version
from release_changelog.changelog.models import CommitRecord, PackageGroup
from release_changelog.config.loader import ChangelogConfig


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


NEW_RELEASE_HEADER = (
    "# {version} - (INSERT RELEASE DATE [Month Day, Year])\n"
    "\n## Fixed\nMOVE ENTRIES FROM BELOW\n"
    "\n## Added\nMOVE ENTRIES FROM BELOW\n"
)
ADDITIONAL_ENTRIES_HEADER = "Additional Entry to Review for {version}:\n"


def format_entry(record: CommitRecord, config: ChangelogConfig) -> str:
    url = config.pr_url_template.format(pr=record.pr_number)
    return f"\n- {record.message} ([PR #{record.pr_number}]({url}))\n"


def group_by_package(records: Iterable[CommitRecord], config: ChangelogConfig) -> PackageGroup:
    """Group rendered entries under each package they are attributed to.

    Records without packages are not part of any group.
    """
    groups: PackageGroup = {}
    for record in records:
        for package in record.packages:
            groups.setdefault(package, []).append(format_entry(record, config))
    logger.debug("Messages grouped by package: %s", groups)
    return groups


def render_header(current_branch: str, config: ChangelogConfig, changelog_text: str) -> str:
    version = release_version(current_branch, config)
    if version not in changelog_text:
        return NEW_RELEASE_HEADER.format(version=version)
    return ADDITIONAL_ENTRIES_HEADER.format(version=version)


def render(
    current_branch: str,
    groups: PackageGroup,
    config: ChangelogConfig,
    changelog_text: str,
) -> str:
    """Render the changelog section for ``current_branch``.

    Returns an empty string when there is nothing to add.
    """
    if not groups:
        return ""
    parts = [render_header(current_branch, config, changelog_text)]
    for package, entries in groups.items():
        parts.append(f"\n#### {package}\n")
        parts.extend(entries)
    parts.append("\n")
    return "".join(parts)


def read_changelog(path: Path) -> str:
    """Return the changelog contents, or an empty string if it does not exist.

    Undecodable bytes are replaced; the text is only searched, never
    written back.
    """
    if not path.exists():
        logger.debug("Changelog '%s' does not exist; treating it as empty", path)
        return ""
    return path.read_text(encoding="utf-8", errors="replace")


def write_changelog(path: Path, text: str) -> None:
    """Insert ``text`` at the top of the changelog, keeping the rest intact."""
    existing = path.read_bytes() if path.exists() else b""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8") + existing)
    logger.debug("Wrote %d characters to %s", len(text), path)
