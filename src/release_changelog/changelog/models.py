"""
Data models for changelog generation.

The :class:`CommitRecord` represents one pull-request commit that is
unique to the release being documented, together with the sub-packages
its changes are attributed to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class CommitRecord:
    """Representation of a parsed release commit.

    Attributes
    ----------
    pr_number : int
        Pull request number taken from the ``(#NNN)`` subject suffix.
    commit_id : str
        Abbreviated commit hash.
    message : str
        Commit subject without the hash and pull request suffix.
    files_changed : Tuple[str, ...]
        Repository-relative paths touched by the commit.
    packages : Tuple[str, ...]
        Sub-packages the commit is filed under, in first-seen order.
    """

    pr_number: int
    commit_id: str
    message: str
    files_changed: Tuple[str, ...] = ()
    packages: Tuple[str, ...] = ()


# Package name -> rendered changelog entries, in insertion order.
PackageGroup = Dict[str, List[str]]
