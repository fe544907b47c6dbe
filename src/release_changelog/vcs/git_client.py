"""
Git client implementation for release_changelog.

This module wraps the Git operations required by the changelog
generator: the read-only history queries (release branch listing,
cherry-pick aware log diff, per-commit file listing) and the handful of
mutating commands used when publishing the changelog update. All
subprocess calls go through :meth:`GitClient._run` so that unit tests
can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except UnicodeDecodeError as e:
            logger.error("Unicode decode error in Git output: %s", e)
            raise GitError(f"Failed to decode Git output: {e}") from e

        if result.stdout:
            logger.debug("%s", result.stdout.rstrip())

        if result.returncode != 0:
            if check:
                logger.error(
                    "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                    " ".join(full_cmd),
                    result.stdout,
                    result.stderr,
                )
                raise GitError(result.stderr.strip() or result.stdout.strip())
            logger.debug("Git command exited with %d: %s", result.returncode, result.stderr.strip())
        return result

    @staticmethod
    def _lines(output: str) -> List[str]:
        return [line.strip() for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------
    def list_remote_branches(self, pattern: str) -> List[str]:
        """List remote branches matching ``pattern``, newest first.

        Branches are sorted by creation date of the commit they point to,
        so the first entry is the most recently cut branch. A failing
        query yields an empty list.
        """
        result = self._run(
            ["branch", "-r", "-l", "--sort=-creatordate", pattern],
            check=False,
        )
        return self._lines(result.stdout)

    def get_unique_commits(self, current: str, previous: str) -> List[str]:
        """Return one-line summaries of commits unique to either branch.

        Uses the symmetric difference ``current...previous`` with
        ``--cherry-pick`` so that commits whose patch was applied to both
        branches are omitted. Each line has the form ``<sha> <subject>``.
        """
        result = self._run(
            ["log", "--cherry-pick", "--oneline", "--no-decorate", f"{current}...{previous}"],
            check=False,
        )
        return self._lines(result.stdout)

    def get_files_changed(self, commit: str) -> List[str]:
        """Return the repository-relative paths touched by ``commit``."""
        result = self._run(["show", "--pretty=", "--name-only", commit], check=False)
        return self._lines(result.stdout)

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------
    def branch_exists(self, branch_name: str) -> bool:
        """Return True if a local branch named ``branch_name`` exists."""
        result = self._run(
            ["show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}"],
            check=False,
        )
        return result.returncode == 0

    def fetch(self, remote: str, branch: str) -> None:
        """Fetch ``branch`` from ``remote``.

        Raises
        ------
        GitError
            If fetching fails.
        """
        self._run(["fetch", remote, branch], check=True)

    def checkout_branch(self, branch_name: str, start_point: str) -> bool:
        """Switch to ``branch_name``, creating it from ``start_point`` if needed.

        Returns
        -------
        bool
            True if the branch was newly created.

        Raises
        ------
        GitError
            If the checkout fails.
        """
        if self.branch_exists(branch_name):
            self._run(["checkout", branch_name], check=True)
            return False
        self._run(["checkout", "-b", branch_name, start_point], check=True)
        return True

    # ------------------------------------------------------------------
    # Committing, pushing
    # ------------------------------------------------------------------
    def stage_files(self, files: List[str]) -> None:
        """Stage the given repository-relative files for commit."""
        self._run(["add", "--"] + list(files), check=True)

    def commit_all(self, message: str) -> None:
        """Commit all tracked modifications with the given message."""
        self._run(["commit", "-a", "-m", message], check=True)

    def push(self, remote: str, branch: str) -> None:
        """Push ``branch`` to ``remote``.

        Raises
        ------
        GitError
            If pushing fails.
        """
        self._run(["push", remote, branch], check=True)

    def request_pull(self, start: str, remote: str, end: str) -> str:
        """Return the ``git request-pull`` summary for ``start..end``."""
        result = self._run(["request-pull", start, remote, end], check=True)
        return result.stdout
